"""
Utility modules for GenHPP.

This package contains reusable helpers for month handling,
rate conversions, and error handling throughout the application.
"""

from genhpp.utils.date_utils import (
    parse_month,
    format_month,
    month_range,
    previous_month,
    last_six_months,
)

from genhpp.utils.rate_utils import (
    pct_to_decimal,
    annual_pct_to_monthly_decimal,
    percent_change,
    MONTHS_PER_YEAR,
    PERCENTAGE_TO_DECIMAL,
)

from genhpp.utils.error_utils import (
    GenHPPError,
    error_handler,
    logger,
)

__all__ = [
    # Date utilities
    "parse_month",
    "format_month",
    "month_range",
    "previous_month",
    "last_six_months",
    # Rate utilities
    "pct_to_decimal",
    "annual_pct_to_monthly_decimal",
    "percent_change",
    "MONTHS_PER_YEAR",
    "PERCENTAGE_TO_DECIMAL",
    # Error handling
    "GenHPPError",
    "error_handler",
    "logger",
]
