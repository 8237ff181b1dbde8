"""
API Utilities Package
"""

from .tax_engine import IncomeTaxCalculator, calculate_tax_payable

__all__ = ['IncomeTaxCalculator', 'calculate_tax_payable']
