"""
Surcharge Engine
Surcharge rate determination and marginal relief near tier thresholds
"""

import math
from typing import Optional, Sequence

from api.utils.pii_logger import get_pii_safe_logger
from .core import TaxEngine
from .tax_models import TaxRegime, TaxSlabs, SurchargeTier, SurchargeBreakdown, get_regime_config

logger = get_pii_safe_logger(__name__)


class SurchargeEngine:
    """Surcharge with marginal relief for FY 2024-25"""

    @staticmethod
    def find_tier(income: float, tiers: Sequence[SurchargeTier] = TaxSlabs.SURCHARGE_TIERS) -> SurchargeTier:
        """First tier whose upper bound covers the income, else the terminal tier"""
        for tier in tiers:
            if income <= tier.income_upper_bound:
                return tier
        return tiers[-1]

    @classmethod
    def get_surcharge_rate(cls, income: float, regime,
                           tiers: Sequence[SurchargeTier] = TaxSlabs.SURCHARGE_TIERS) -> float:
        """
        Surcharge rate for an income, before marginal relief

        The new regime caps the rate at 25%. The 15% cap on dividends and
        capital gains is not applied because tax is not split by income type.
        """
        tier = cls.find_tier(income, tiers)
        rate = tier.rate
        if TaxRegime.parse(regime) == TaxRegime.NEW:
            rate = min(rate, tier.new_regime_cap)
        return rate

    @classmethod
    def describe_rate(cls, income: float, regime) -> dict:
        """Rate lookup with the explanatory note shown next to the surcharge table"""
        tax_regime = TaxRegime.parse(regime)
        tier = cls.find_tier(income)
        rate = cls.get_surcharge_rate(income, tax_regime)

        if rate == 0:
            note = "No surcharge applies up to ₹50 lakh of total income."
        elif tax_regime == TaxRegime.NEW and rate < tier.rate:
            note = f"Surcharge under the new regime is capped at {rate:.0%}."
        else:
            note = None
        if rate > tier.special_income_cap:
            special = (f"Surcharge on dividends and capital gains u/s 111A, 112 and 112A "
                       f"is capped at {tier.special_income_cap:.0%}.")
            note = f"{note} {special}" if note else special

        return {
            'income': income,
            'regime': tax_regime.value,
            'rate': rate,
            'note': note,
        }

    @staticmethod
    def crossed_threshold(income: float,
                          tiers: Sequence[SurchargeTier] = TaxSlabs.SURCHARGE_TIERS) -> Optional[float]:
        """Highest finite, non-zero tier threshold strictly below the income"""
        crossed = None
        for tier in tiers:
            threshold = tier.income_upper_bound
            if threshold == 0 or math.isinf(threshold):
                continue
            if threshold < income:
                crossed = threshold
        return crossed

    @staticmethod
    def gross_income_for_base(income_for_rate: float, regime) -> float:
        """Invert the surcharge income base back to gross income"""
        config = get_regime_config(regime)
        if config.regime == TaxRegime.NEW and income_for_rate > 0:
            return income_for_rate + config.standard_deduction
        return income_for_rate

    @classmethod
    def tax_at_threshold(cls, threshold: float, regime, total_deductions: float = 0,
                         tiers: Sequence[SurchargeTier] = TaxSlabs.SURCHARGE_TIERS) -> float:
        """
        Tax plus surcharge (before cess) for income sitting exactly on a threshold

        Runs taxable income -> slab tax -> rebate -> surcharge rate with the same
        deductions as the income being relieved (the new regime ignores them).
        Only the rate lookup is used for the surcharge so this never re-enters
        marginal relief.
        """
        config = get_regime_config(regime)
        gross_income = cls.gross_income_for_base(threshold, config.regime)
        taxable_income = TaxEngine.derive_taxable_income(gross_income, total_deductions, config.regime)
        tax = TaxEngine.calculate_tax_by_slabs(taxable_income, config.brackets)
        rebate = TaxEngine.calculate_rebate_87a(taxable_income, tax, config)
        tax_after_rebate = max(0.0, tax - rebate)
        return tax_after_rebate * (1 + cls.get_surcharge_rate(threshold, config.regime, tiers))

    @classmethod
    def calculate_surcharge(cls, income_for_rate: float, tax_after_rebate: float, regime,
                            total_deductions: float = 0,
                            tiers: Sequence[SurchargeTier] = TaxSlabs.SURCHARGE_TIERS) -> SurchargeBreakdown:
        """
        Calculate surcharge with marginal relief

        Args:
            income_for_rate: Income that decides the surcharge tier
            tax_after_rebate: Tax on which surcharge is levied
            regime: Tax regime
            total_deductions: Chapter VI-A deductions behind tax_after_rebate (old regime)
            tiers: Surcharge tiers, ascending

        Returns:
            SurchargeBreakdown with the rate, surcharge before and after relief
        """
        if tax_after_rebate <= 0:
            return SurchargeBreakdown()

        tax_regime = TaxRegime.parse(regime)
        rate = cls.get_surcharge_rate(income_for_rate, tax_regime, tiers)
        gross_surcharge = tax_after_rebate * rate
        surcharge = gross_surcharge
        relief = 0.0
        relief_threshold = None

        # Crossing a threshold must not cost more tax than the income that crossed it
        threshold = cls.crossed_threshold(income_for_rate, tiers)
        if threshold is not None:
            tax_on_threshold = cls.tax_at_threshold(threshold, tax_regime, total_deductions, tiers)
            tax_increase = tax_after_rebate + gross_surcharge - tax_on_threshold
            income_increase = income_for_rate - threshold
            if tax_increase > income_increase:
                surcharge = max(0.0, gross_surcharge - (tax_increase - income_increase))
                relief = gross_surcharge - surcharge
                relief_threshold = threshold
                logger.debug_with_amounts(
                    "Marginal relief at threshold {threshold}: {relief}",
                    threshold=threshold, relief=relief,
                )

        return SurchargeBreakdown(
            rate=rate,
            gross_surcharge=gross_surcharge,
            marginal_relief=relief,
            surcharge=max(0.0, surcharge),
            relief_threshold=relief_threshold,
        )
