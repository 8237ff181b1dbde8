"""
Tax Models and Data Structures
Defines all data models and constants for FY 2024-25 tax calculations
"""

import math
from typing import Dict, List, Any, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


class TaxRegime(Enum):
    """Tax regime enumeration"""
    OLD = "old"
    NEW = "new"

    @classmethod
    def parse(cls, value) -> "TaxRegime":
        """Accept a TaxRegime or an 'old'/'new' tag (case-insensitive)"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            value = value.strip().lower()
        return cls(value)


@dataclass(frozen=True)
class TaxBracket:
    """
    A single progressive slab, stored as the half-open interval (lower, upper].

    Published slab tables use inclusive integer bounds (0-300000, 300001-600000, ...).
    Normalising so that each bracket starts where the previous one ended removes the
    off-by-one correction from the slab arithmetic without changing any tax amount.
    """
    lower_bound: float
    upper_bound: float
    rate: float

    @property
    def is_unbounded(self) -> bool:
        return math.isinf(self.upper_bound)

    @property
    def display_lower_bound(self) -> float:
        """Inclusive lower bound as printed in the Finance Act tables"""
        return 0 if self.lower_bound == 0 else self.lower_bound + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'range_min': self.display_lower_bound,
            'range_max': None if self.is_unbounded else self.upper_bound,
            'rate': self.rate,
        }


@dataclass(frozen=True)
class RegimeConfig:
    """Per-regime slab schedule and Section 87A / standard deduction constants"""
    regime: TaxRegime
    brackets: Tuple[TaxBracket, ...]
    basic_exemption: float  # display only; the zero-rate first slab applies it
    rebate_threshold: float
    rebate_max_amount: float
    standard_deduction: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'regime': self.regime.value,
            'slabs': [bracket.to_dict() for bracket in self.brackets],
            'basic_exemption': self.basic_exemption,
            'rebate_threshold': self.rebate_threshold,
            'rebate_max_amount': self.rebate_max_amount,
            'standard_deduction': self.standard_deduction,
        }


@dataclass(frozen=True)
class SurchargeTier:
    """Surcharge tier: applies to total income up to income_upper_bound"""
    income_upper_bound: float
    rate: float
    new_regime_cap: float
    special_income_cap: float  # dividends / capital gains, display only

    @property
    def is_unbounded(self) -> bool:
        return math.isinf(self.income_upper_bound)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'income_limit': None if self.is_unbounded else self.income_upper_bound,
            'rate': self.rate,
            'cap_for_new_regime': self.new_regime_cap,
            'cap_for_special_income': self.special_income_cap,
        }


def build_brackets(slabs: List[Tuple[float, float]]) -> Tuple[TaxBracket, ...]:
    """Build contiguous brackets from (upper_threshold, rate) pairs"""
    brackets = []
    lower = 0
    for upper, rate in slabs:
        brackets.append(TaxBracket(lower_bound=lower, upper_bound=upper, rate=rate))
        lower = upper
    return tuple(brackets)


class TaxSlabs:
    """Tax slab configuration for FY 2024-25 (AY 2025-26)"""
    NEW_REGIME_SLABS = build_brackets([
        (300000, 0.0),        # Up to ₹3L: 0%
        (600000, 0.05),       # ₹3L to ₹6L: 5%
        (900000, 0.10),       # ₹6L to ₹9L: 10%
        (1200000, 0.15),      # ₹9L to ₹12L: 15%
        (1500000, 0.20),      # ₹12L to ₹15L: 20%
        (math.inf, 0.30),     # Above ₹15L: 30%
    ])

    # Individuals below 60 years
    OLD_REGIME_SLABS = build_brackets([
        (250000, 0.0),        # Up to ₹2.5L: 0%
        (500000, 0.05),       # ₹2.5L to ₹5L: 5%
        (1000000, 0.20),      # ₹5L to ₹10L: 20%
        (math.inf, 0.30),     # Above ₹10L: 30%
    ])

    SURCHARGE_TIERS = (
        SurchargeTier(5000000, 0.0, 0.0, 0.0),          # Up to ₹50L
        SurchargeTier(10000000, 0.10, 0.10, 0.10),      # ₹50L to ₹1Cr
        SurchargeTier(20000000, 0.15, 0.15, 0.15),      # ₹1Cr to ₹2Cr
        SurchargeTier(50000000, 0.25, 0.25, 0.15),      # ₹2Cr to ₹5Cr
        SurchargeTier(math.inf, 0.37, 0.25, 0.15),      # Above ₹5Cr: 37% (Old) / 25% (New)
    )

    @staticmethod
    def validate_brackets(brackets) -> List[str]:
        """
        Check that a bracket table is contiguous, ascending and covers [0, inf).

        Returns a list of problems; an empty list means the table is well formed.
        The slab calculator itself never raises on a bad table, it undercounts.
        """
        problems = []
        if not brackets:
            return ['no brackets defined']
        if brackets[0].lower_bound != 0:
            problems.append(f"first bracket starts at {brackets[0].lower_bound}, not 0")
        for previous, current in zip(brackets, brackets[1:]):
            if current.lower_bound != previous.upper_bound:
                problems.append(
                    f"gap or overlap between {previous.upper_bound} and {current.lower_bound}"
                )
        for bracket in brackets:
            if bracket.upper_bound <= bracket.lower_bound:
                problems.append(f"empty bracket starting at {bracket.lower_bound}")
        if not brackets[-1].is_unbounded:
            problems.append(f"top bracket ends at {brackets[-1].upper_bound}")
        return problems


class TaxConstants:
    """Tax calculation constants for FY 2024-25"""
    CESS_RATE = 0.04  # 4%

    # Rebate limits
    NEW_REGIME_REBATE_LIMIT = 700000  # ₹7L
    OLD_REGIME_REBATE_LIMIT = 500000  # ₹5L
    NEW_REGIME_REBATE_AMOUNT = 25000  # ₹25K
    OLD_REGIME_REBATE_AMOUNT = 12500  # ₹12.5K

    # Basic exemption
    NEW_REGIME_BASIC_EXEMPTION = 300000  # ₹3L
    OLD_REGIME_BASIC_EXEMPTION = 250000  # ₹2.5L

    # Standard deductions
    NEW_REGIME_STANDARD_DEDUCTION = 50000  # ₹50K
    OLD_REGIME_STANDARD_DEDUCTION = 50000  # ₹50K


NEW_REGIME_CONFIG = RegimeConfig(
    regime=TaxRegime.NEW,
    brackets=TaxSlabs.NEW_REGIME_SLABS,
    basic_exemption=TaxConstants.NEW_REGIME_BASIC_EXEMPTION,
    rebate_threshold=TaxConstants.NEW_REGIME_REBATE_LIMIT,
    rebate_max_amount=TaxConstants.NEW_REGIME_REBATE_AMOUNT,
    standard_deduction=TaxConstants.NEW_REGIME_STANDARD_DEDUCTION,
)

OLD_REGIME_CONFIG = RegimeConfig(
    regime=TaxRegime.OLD,
    brackets=TaxSlabs.OLD_REGIME_SLABS,
    basic_exemption=TaxConstants.OLD_REGIME_BASIC_EXEMPTION,
    rebate_threshold=TaxConstants.OLD_REGIME_REBATE_LIMIT,
    rebate_max_amount=TaxConstants.OLD_REGIME_REBATE_AMOUNT,
    standard_deduction=TaxConstants.OLD_REGIME_STANDARD_DEDUCTION,
)

REGIME_CONFIGS = {
    TaxRegime.NEW: NEW_REGIME_CONFIG,
    TaxRegime.OLD: OLD_REGIME_CONFIG,
}


def get_regime_config(regime) -> RegimeConfig:
    """Look up the FY 2024-25 configuration for a regime"""
    return REGIME_CONFIGS[TaxRegime.parse(regime)]


@dataclass(frozen=True)
class SurchargeBreakdown:
    """Surcharge before and after marginal relief"""
    rate: float = 0.0
    gross_surcharge: float = 0.0
    marginal_relief: float = 0.0
    surcharge: float = 0.0
    relief_threshold: Optional[float] = None


@dataclass(frozen=True)
class TaxComputationResult:
    """Tax calculation result structure"""
    regime: TaxRegime
    gross_income: float
    total_deductions: float

    taxable_income: float
    tax_before_rebate: float
    rebate: float
    tax_after_rebate: float

    surcharge_rate: float
    surcharge: float
    marginal_relief: float

    tax_before_cess: float
    cess: float
    total_tax: int

    @property
    def effective_tax_rate(self) -> float:
        if self.gross_income <= 0:
            return 0.0
        return self.total_tax / self.gross_income

    def to_dict(self) -> Dict[str, Any]:
        return {
            'regime': self.regime.value,
            'gross_income': self.gross_income,
            'total_deductions': self.total_deductions,
            'taxable_income': self.taxable_income,
            'tax_before_rebate': self.tax_before_rebate,
            'rebate': self.rebate,
            'tax_after_rebate': self.tax_after_rebate,
            'surcharge_rate': self.surcharge_rate,
            'surcharge': self.surcharge,
            'marginal_relief': self.marginal_relief,
            'tax_before_cess': self.tax_before_cess,
            'cess': self.cess,
            'total_tax': self.total_tax,
            'effective_tax_rate': round(self.effective_tax_rate, 4),
        }


@dataclass(frozen=True)
class RegimeComparison:
    """Old vs New regime comparison result"""
    gross_income: float
    old_regime: TaxComputationResult
    new_regime: TaxComputationResult
    recommended_regime: TaxRegime = field(init=False)
    savings: int = field(init=False)

    def __post_init__(self):
        # Ties go to the new regime, which is the default regime from FY 2023-24
        if self.old_regime.total_tax < self.new_regime.total_tax:
            recommended = TaxRegime.OLD
        else:
            recommended = TaxRegime.NEW
        object.__setattr__(self, 'recommended_regime', recommended)
        object.__setattr__(self, 'savings', abs(self.old_regime.total_tax - self.new_regime.total_tax))

    def to_dict(self) -> Dict[str, Any]:
        label = 'Old Regime' if self.recommended_regime == TaxRegime.OLD else 'New Regime'
        return {
            'gross_income': self.gross_income,
            'old_regime': self.old_regime.to_dict(),
            'new_regime': self.new_regime.to_dict(),
            'comparison': {
                'recommended_regime': self.recommended_regime.value,
                'savings': self.savings,
                'recommendation_reason': f"Save ₹{self.savings:,} by choosing {label}",
            },
        }
