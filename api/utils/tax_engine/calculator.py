"""
Main Tax Calculator Interface
Composes the slab, rebate, surcharge and cess stages into the payable tax
"""

from typing import Any, Dict

from api.utils.pii_logger import get_pii_safe_logger, log_tax_computation
from .core import TaxEngine
from .surcharge import SurchargeEngine
from .tax_models import (
    TaxRegime, TaxSlabs, TaxConstants, REGIME_CONFIGS,
    TaxComputationResult, RegimeComparison, get_regime_config
)

logger = get_pii_safe_logger(__name__)


class IncomeTaxCalculator:
    """
    Tax Calculator Interface for FY 2024-25

    Usage:
        result = IncomeTaxCalculator.calculate_tax_payable(1200000, 0, "new")
        result.total_tax  # 85800

        comparison = IncomeTaxCalculator.compare_tax_regimes(1500000, 200000)
        comparison.recommended_regime
    """

    NEW_REGIME_SLABS = TaxSlabs.NEW_REGIME_SLABS
    OLD_REGIME_SLABS = TaxSlabs.OLD_REGIME_SLABS
    SURCHARGE_TIERS = TaxSlabs.SURCHARGE_TIERS
    CESS_RATE = TaxConstants.CESS_RATE

    @classmethod
    def calculate_tax_payable(cls, gross_income: float, total_deductions: float = 0,
                              regime="new") -> TaxComputationResult:
        """
        Calculate the total payable tax for a given income, deductions and regime

        Steps:
        1. Taxable income (standard deduction, plus Chapter VI-A for old regime)
        2. Slab tax
        3. Rebate u/s 87A
        4. Surcharge with marginal relief
        5. Health & Education Cess

        Args:
            gross_income: Gross income
            total_deductions: Chapter VI-A deductions, only used by the old regime
            regime: 'old' / 'new' or a TaxRegime

        Returns:
            TaxComputationResult with the full breakdown
        """
        config = get_regime_config(regime)
        tax_regime = config.regime
        total_deductions = total_deductions or 0

        taxable_income = TaxEngine.derive_taxable_income(gross_income, total_deductions, tax_regime)
        tax_before_rebate = TaxEngine.calculate_tax_by_slabs(taxable_income, config.brackets)
        rebate = TaxEngine.calculate_rebate_87a(taxable_income, tax_before_rebate, config)
        tax_after_rebate = max(0.0, tax_before_rebate - rebate)

        income_for_rate = TaxEngine.surcharge_income_base(gross_income, tax_regime)
        surcharge = SurchargeEngine.calculate_surcharge(
            income_for_rate, tax_after_rebate, tax_regime, total_deductions
        )

        tax_before_cess = tax_after_rebate + surcharge.surcharge
        cess = TaxEngine.calculate_cess(tax_after_rebate, surcharge.surcharge)
        total_tax = int(round(tax_before_cess + cess))

        log_tax_computation(
            logger, tax_regime.value, gross_income, total_tax,
            surcharge_rate=surcharge.rate,
            marginal_relief=surcharge.marginal_relief > 0,
        )

        return TaxComputationResult(
            regime=tax_regime,
            gross_income=gross_income,
            total_deductions=total_deductions if tax_regime == TaxRegime.OLD else 0,
            taxable_income=taxable_income,
            tax_before_rebate=tax_before_rebate,
            rebate=rebate,
            tax_after_rebate=tax_after_rebate,
            surcharge_rate=surcharge.rate,
            surcharge=surcharge.surcharge,
            marginal_relief=surcharge.marginal_relief,
            tax_before_cess=tax_before_cess,
            cess=cess,
            total_tax=total_tax,
        )

    @classmethod
    def compare_tax_regimes(cls, gross_income: float, old_regime_deductions: float = 0) -> RegimeComparison:
        """
        Compare Old vs New tax regimes and recommend the cheaper option

        Deductions are only claimed under the old regime; the new regime is
        evaluated with the standard deduction alone.
        """
        old_regime = cls.calculate_tax_payable(gross_income, old_regime_deductions, TaxRegime.OLD)
        new_regime = cls.calculate_tax_payable(gross_income, 0, TaxRegime.NEW)
        return RegimeComparison(
            gross_income=gross_income,
            old_regime=old_regime,
            new_regime=new_regime,
        )

    @classmethod
    def get_tax_configuration(cls) -> Dict[str, Any]:
        """Read-only FY 2024-25 tables for display"""
        return {
            'financial_year': '2024-25',
            'assessment_year': '2025-26',
            'regimes': {
                regime.value: config.to_dict() for regime, config in REGIME_CONFIGS.items()
            },
            'surcharge_tiers': [tier.to_dict() for tier in cls.SURCHARGE_TIERS],
            'cess_rate': cls.CESS_RATE,
        }


def calculate_tax_payable(gross_income: float, total_deductions: float = 0, regime="new") -> TaxComputationResult:
    """Module-level shortcut for IncomeTaxCalculator.calculate_tax_payable"""
    return IncomeTaxCalculator.calculate_tax_payable(gross_income, total_deductions, regime)
