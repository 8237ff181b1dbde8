"""
Unit tests for surcharge rates and marginal relief
"""

import unittest
from unittest import mock

from api.utils.tax_engine import SurchargeEngine, SurchargeTier, TaxSlabs, calculate_tax_payable

THRESHOLDS = (5000000, 10000000, 20000000, 50000000)
STANDARD_DEDUCTION = 50000


class TestSurchargeRate(unittest.TestCase):

    def test_old_regime_rates(self):
        cases = [
            (5000000, 0.0),
            (5000001, 0.10),
            (10000000, 0.10),
            (10000001, 0.15),
            (20000000, 0.15),
            (20000001, 0.25),
            (50000000, 0.25),
            (50000001, 0.37),
        ]
        for income, rate in cases:
            with self.subTest(income=income):
                self.assertEqual(SurchargeEngine.get_surcharge_rate(income, 'old'), rate)

    def test_new_regime_capped_at_25_percent(self):
        self.assertEqual(SurchargeEngine.get_surcharge_rate(30000000, 'new'), 0.25)
        self.assertEqual(SurchargeEngine.get_surcharge_rate(90000000, 'new'), 0.25)
        self.assertEqual(SurchargeEngine.get_surcharge_rate(7000000, 'new'), 0.10)

    def test_terminal_tier_used_when_nothing_covers_income(self):
        tiers = (SurchargeTier(100, 0.0, 0.0, 0.0), SurchargeTier(1000, 0.2, 0.1, 0.1))
        self.assertEqual(SurchargeEngine.get_surcharge_rate(5000, 'old', tiers), 0.2)
        self.assertEqual(SurchargeEngine.get_surcharge_rate(5000, 'new', tiers), 0.1)

    def test_no_surcharge_without_tax(self):
        breakdown = SurchargeEngine.calculate_surcharge(60000000, 0, 'old')
        self.assertEqual(breakdown.rate, 0)
        self.assertEqual(breakdown.surcharge, 0)
        self.assertEqual(breakdown.marginal_relief, 0)

    def test_describe_rate_notes(self):
        low = SurchargeEngine.describe_rate(3000000, 'old')
        self.assertEqual(low['rate'], 0)
        self.assertIn("No surcharge", low['note'])

        capped = SurchargeEngine.describe_rate(60000000, 'new')
        self.assertEqual(capped['rate'], 0.25)
        self.assertIn("capped at 25%", capped['note'])

        top = SurchargeEngine.describe_rate(60000000, 'old')
        self.assertEqual(top['rate'], 0.37)
        self.assertIn("capital gains", top['note'])

        middle = SurchargeEngine.describe_rate(7000000, 'old')
        self.assertEqual(middle['rate'], 0.10)
        self.assertIsNone(middle['note'])


class TestMarginalRelief(unittest.TestCase):

    def test_crossed_threshold(self):
        self.assertIsNone(SurchargeEngine.crossed_threshold(100))
        self.assertIsNone(SurchargeEngine.crossed_threshold(5000000))
        self.assertEqual(SurchargeEngine.crossed_threshold(5000001), 5000000)
        self.assertEqual(SurchargeEngine.crossed_threshold(19999999), 10000000)
        self.assertEqual(SurchargeEngine.crossed_threshold(600000000), 50000000)

    def test_tax_at_threshold(self):
        # Old regime: taxable 99.5L at 10% surcharge
        self.assertAlmostEqual(SurchargeEngine.tax_at_threshold(10000000, 'old'), 3077250)
        # New regime: the threshold is already income after standard deduction
        self.assertAlmostEqual(SurchargeEngine.tax_at_threshold(5000000, 'new'), 1200000)

    def test_tax_at_threshold_does_not_reenter_surcharge(self):
        with mock.patch.object(SurchargeEngine, 'calculate_surcharge', side_effect=AssertionError):
            SurchargeEngine.tax_at_threshold(20000000, 'old')

    def test_old_regime_fifty_lakh_to_one_crore_tier(self):
        result = calculate_tax_payable(7500000, 0, 'old')
        self.assertEqual(result.surcharge_rate, 0.10)
        self.assertAlmostEqual(result.surcharge, 204750)
        self.assertEqual(result.marginal_relief, 0)
        self.assertEqual(result.total_tax, 2342340)

    def test_old_regime_eleven_crore_no_relief(self):
        result = calculate_tax_payable(11000000, 0, 'old')
        self.assertEqual(result.taxable_income, 10950000)
        self.assertAlmostEqual(result.tax_before_rebate, 3097500)
        self.assertEqual(result.surcharge_rate, 0.15)
        self.assertAlmostEqual(result.surcharge, 464625)
        self.assertEqual(result.marginal_relief, 0)
        self.assertEqual(result.total_tax, 3704610)

    def test_relief_just_above_one_crore(self):
        result = calculate_tax_payable(10200000, 0, 'old')
        self.assertEqual(result.surcharge_rate, 0.15)
        self.assertAlmostEqual(result.marginal_relief, 8875, places=2)
        self.assertAlmostEqual(result.surcharge, 419750, places=2)
        # Tax before cess equals tax at ₹1Cr plus the income above it
        self.assertAlmostEqual(result.tax_before_cess, 3077250 + 200000, places=2)
        self.assertEqual(result.total_tax, 3408340)

    def test_no_relief_beyond_five_percent_above_one_crore(self):
        for income in (10500001, 10600000, 11000000):
            with self.subTest(income=income):
                self.assertEqual(calculate_tax_payable(income, 0, 'old').marginal_relief, 0)

    def test_relief_at_five_crore_extends_past_five_percent(self):
        # 25% -> 37% needs relief up to about ₹5.30Cr
        result = calculate_tax_payable(52600000, 0, 'old')
        self.assertGreater(result.marginal_relief, 0)
        self.assertAlmostEqual(result.tax_before_cess, 18496875 + 2600000, places=2)

    def test_new_regime_relief_just_above_fifty_lakh(self):
        result = calculate_tax_payable(5000000 + STANDARD_DEDUCTION + 100, 0, 'new')
        self.assertEqual(result.surcharge_rate, 0.10)
        self.assertAlmostEqual(result.surcharge, 70, places=2)
        self.assertAlmostEqual(result.tax_before_cess, 1200100, places=2)
        self.assertEqual(result.total_tax, 1248104)

    def test_new_regime_top_tier_needs_no_relief(self):
        # Rate stays at the 25% cap across ₹5Cr
        result = calculate_tax_payable(50000000 + STANDARD_DEDUCTION + 100, 0, 'new')
        self.assertEqual(result.surcharge_rate, 0.25)
        self.assertEqual(result.marginal_relief, 0)

    def test_relief_with_old_regime_deductions(self):
        # Taxable ₹98L at ₹1Cr gross: 2752500 slab tax, 10% surcharge
        self.assertAlmostEqual(SurchargeEngine.tax_at_threshold(10000000, 'old', 150000), 3027750)
        result = calculate_tax_payable(10000100, 150000, 'old')
        self.assertEqual(result.surcharge_rate, 0.15)
        self.assertAlmostEqual(result.marginal_relief, 137559.5, places=2)
        self.assertAlmostEqual(result.tax_before_cess, 3027750 + 100, places=2)

    def test_new_regime_threshold_ignores_deductions(self):
        self.assertAlmostEqual(
            SurchargeEngine.tax_at_threshold(5000000, 'new', 150000),
            SurchargeEngine.tax_at_threshold(5000000, 'new'),
        )

    def test_crossing_threshold_costs_at_most_the_income_crossed(self):
        epsilon = 100
        cases = [(regime, deductions) for regime in ('old', 'new') for deductions in (0, 150000)]
        for regime, deductions in cases:
            for threshold in THRESHOLDS:
                gross_at_threshold = threshold + STANDARD_DEDUCTION if regime == 'new' else threshold
                with self.subTest(regime=regime, deductions=deductions, threshold=threshold):
                    at = calculate_tax_payable(gross_at_threshold, deductions, regime)
                    above = calculate_tax_payable(gross_at_threshold + epsilon, deductions, regime)
                    self.assertLessEqual(above.tax_before_cess - at.tax_before_cess, epsilon + 1e-6)
                    self.assertLessEqual(above.total_tax - at.total_tax, epsilon * 1.04 + 1)

    def test_relief_never_negative(self):
        for income in (5000001, 10000001, 20000001, 50000001):
            breakdown = SurchargeEngine.calculate_surcharge(income, 1000, 'old')
            self.assertGreaterEqual(breakdown.surcharge, 0)
            self.assertLessEqual(breakdown.marginal_relief, breakdown.gross_surcharge)

    def test_tiers_are_well_ordered(self):
        bounds = [tier.income_upper_bound for tier in TaxSlabs.SURCHARGE_TIERS]
        self.assertEqual(bounds, sorted(bounds))
        self.assertTrue(TaxSlabs.SURCHARGE_TIERS[-1].is_unbounded)


if __name__ == '__main__':
    unittest.main()
