"""
Tax Engine Package
FY 2024-25 income tax computation for the old and new regimes

Package Structure:
- tax_models.py: Data models, slab tables and constants
- core.py: Slab tax, taxable income, rebate and cess
- surcharge.py: Surcharge rate and marginal relief
- calculator.py: Main tax calculator interface
"""

# Import all models and constants
from .tax_models import (
    TaxRegime, TaxBracket, RegimeConfig, SurchargeTier, SurchargeBreakdown,
    TaxSlabs, TaxConstants, TaxComputationResult, RegimeComparison,
    NEW_REGIME_CONFIG, OLD_REGIME_CONFIG, get_regime_config
)

# Import core engines
from .core import TaxEngine
from .surcharge import SurchargeEngine

# Import main calculator interface
from .calculator import IncomeTaxCalculator, calculate_tax_payable

# Read-only tables for display
NEW_REGIME_SLABS = TaxSlabs.NEW_REGIME_SLABS
OLD_REGIME_SLABS = TaxSlabs.OLD_REGIME_SLABS
SURCHARGE_TIERS = TaxSlabs.SURCHARGE_TIERS
CESS_RATE = TaxConstants.CESS_RATE

__all__ = [
    # Main interface
    'IncomeTaxCalculator',
    'calculate_tax_payable',

    # Models and enums
    'TaxRegime',
    'TaxBracket',
    'RegimeConfig',
    'SurchargeTier',
    'SurchargeBreakdown',
    'TaxComputationResult',
    'RegimeComparison',
    'get_regime_config',

    # Constants
    'TaxSlabs',
    'TaxConstants',
    'NEW_REGIME_CONFIG',
    'OLD_REGIME_CONFIG',
    'NEW_REGIME_SLABS',
    'OLD_REGIME_SLABS',
    'SURCHARGE_TIERS',
    'CESS_RATE',

    # Core engines
    'TaxEngine',
    'SurchargeEngine',
]
