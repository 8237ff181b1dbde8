"""
PII-aware logging utilities for the tax estimation service.
Income, deduction and tax amounts identify a taxpayer's finances, so they are
only written to logs when the LOG_PII setting is enabled.
"""

import logging
from django.conf import settings


REDACTED_AMOUNT = "[amount]"


def get_pii_safe_logger(name):
    """
    Get a logger with PII-aware logging capabilities.

    Args:
        name: The name of the logger (typically __name__)

    Returns:
        PIILogger: A logger wrapper that respects LOG_PII setting
    """
    return PIILogger(logging.getLogger(name))


class PIILogger:
    """
    A logger wrapper that provides PII-aware logging.
    When LOG_PII is False, monetary amounts are replaced with a placeholder.
    """

    def __init__(self, logger):
        self.logger = logger

    def _should_log_pii(self):
        """Check if PII logging is enabled. Unconfigured settings mean no."""
        if not settings.configured:
            return False
        return bool(getattr(settings, 'LOG_PII', False))

    def _sanitize_amount(self, amount):
        """Format an amount for logging, or redact it when LOG_PII is disabled."""
        if not self._should_log_pii():
            return REDACTED_AMOUNT
        if isinstance(amount, (int, float)):
            return f"₹{amount:,.2f}"
        return str(amount)

    def _format_amounts(self, message, amounts):
        sanitized = {key: self._sanitize_amount(value) for key, value in amounts.items()}
        return message.format(**sanitized)

    def info_with_amounts(self, message, **amounts):
        """
        Log info message with amounts, redacting them if needed.

        Args:
            message: Message template with {name} placeholders for each amount
            **amounts: Amounts to substitute
        """
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(self._format_amounts(message, amounts))

    def debug_with_amounts(self, message, **amounts):
        """Log debug message with amounts, redacting them if needed."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_amounts(message, amounts))

    def error_with_amounts(self, message, **amounts):
        """
        Log error message with amounts.
        Errors are always logged but with redacted amounts when LOG_PII is False.
        """
        self.logger.error(self._format_amounts(message, amounts))

    # Delegate standard logging methods
    def info(self, message, *args, **kwargs):
        """Standard info logging (no PII sanitization)."""
        self.logger.info(message, *args, **kwargs)

    def error(self, message, *args, **kwargs):
        """Standard error logging (no PII sanitization)."""
        self.logger.error(message, *args, **kwargs)

    def warning(self, message, *args, **kwargs):
        """Standard warning logging (no PII sanitization)."""
        self.logger.warning(message, *args, **kwargs)

    def debug(self, message, *args, **kwargs):
        """Standard debug logging (no PII sanitization)."""
        self.logger.debug(message, *args, **kwargs)


def log_tax_computation(logger, regime, gross_income, total_tax, **details):
    """
    Log a completed tax computation with PII awareness.

    Args:
        logger: PIILogger instance
        regime: Regime tag ('old' / 'new')
        gross_income: Gross income the computation was run for
        total_tax: Final tax payable
        **details: Additional non-monetary details (e.g., surcharge_rate)
    """
    detail_str = ', '.join([f"{k}: {v}" for k, v in details.items()])
    message = f"Tax computed ({regime} regime): income {{gross_income}}, total tax {{total_tax}}"
    if detail_str:
        message = f"{message} ({detail_str})"

    logger.debug_with_amounts(message, gross_income=gross_income, total_tax=total_tax)
