"""
Views package for the tax estimation API
"""

from .tax_views import calculate_tax, compare_regimes, tax_configuration, surcharge_rate, health_check

__all__ = [
    'calculate_tax',
    'compare_regimes',
    'tax_configuration',
    'surcharge_rate',
    'health_check',
]
