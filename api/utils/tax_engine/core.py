"""
Core Tax Calculation Engine
Handles the fundamental tax computation logic
"""

from typing import Sequence

from .tax_models import TaxBracket, TaxConstants, TaxRegime, RegimeConfig, get_regime_config


class TaxEngine:
    """Core tax calculation engine: slabs, taxable income, rebate and cess"""

    @staticmethod
    def calculate_tax_by_slabs(income: float, brackets: Sequence[TaxBracket]) -> float:
        """
        Calculate tax using progressive slab system

        Args:
            income: Taxable income
            brackets: Ordered brackets covering [0, inf)

        Returns:
            Calculated tax amount (never negative)
        """
        if income <= 0:
            return 0.0

        tax = 0.0
        processed = 0.0

        for bracket in brackets:
            if income <= bracket.lower_bound:
                break

            taxable_in_slab = min(income, bracket.upper_bound) - max(processed, bracket.lower_bound)
            if taxable_in_slab > 0:
                tax += taxable_in_slab * bracket.rate
            processed = bracket.upper_bound

            if income <= bracket.upper_bound:
                break

        return max(0.0, tax)

    @staticmethod
    def income_after_standard_deduction(gross_income: float, regime) -> float:
        """Gross income less the regime's standard deduction, floored at zero"""
        config = get_regime_config(regime)
        if gross_income <= 0:
            return 0.0
        return max(0.0, gross_income - config.standard_deduction)

    @classmethod
    def derive_taxable_income(cls, gross_income: float, total_deductions: float, regime) -> float:
        """
        Reduce gross income to taxable income

        Standard deduction applies in both regimes. Chapter VI-A deductions
        (total_deductions) are only allowed under the old regime.
        """
        tax_regime = TaxRegime.parse(regime)
        taxable_income = cls.income_after_standard_deduction(gross_income, tax_regime)
        if tax_regime == TaxRegime.OLD:
            taxable_income = taxable_income - max(0.0, total_deductions or 0)
        return max(0.0, taxable_income)

    @staticmethod
    def calculate_rebate_87a(taxable_income: float, tax_amount: float, config: RegimeConfig) -> float:
        """
        Calculate rebate under Section 87A

        Full rebate (up to the regime maximum) at or below the threshold and
        nothing above it. There is no phase-out, one rupee over the threshold
        loses the whole rebate.
        """
        if taxable_income <= config.rebate_threshold:
            return min(tax_amount, config.rebate_max_amount)
        return 0.0

    @staticmethod
    def surcharge_income_base(gross_income: float, regime) -> float:
        """
        Income used to pick the surcharge rate

        New regime: income after standard deduction.
        Old regime: gross income. Chapter VI-A deductions are not subtracted.
        """
        tax_regime = TaxRegime.parse(regime)
        if tax_regime == TaxRegime.NEW:
            return TaxEngine.income_after_standard_deduction(gross_income, tax_regime)
        return max(0.0, gross_income)

    @staticmethod
    def calculate_cess(tax_amount: float, surcharge_amount: float) -> float:
        """
        Calculate Health & Education Cess (4% of tax + surcharge)
        """
        return (tax_amount + surcharge_amount) * TaxConstants.CESS_RATE
