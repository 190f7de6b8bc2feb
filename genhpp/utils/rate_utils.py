"""
Rate conversion utilities for pricing and loan calculations.

Conventions:
- All user inputs are percentages (e.g., 30.0 = 30% margin, 11.0 = 11% PPN)
- All calculations use decimal rates (e.g., 0.30)
- Monthly loan rates are derived from annual rates: annual_decimal / 12
"""

from typing import Union
from genhpp.utils.error_utils import error_handler

MONTHS_PER_YEAR = 12
PERCENTAGE_TO_DECIMAL = 100.0


@error_handler
def pct_to_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert a percentage to decimal format.

    Examples:
        >>> pct_to_decimal(30.0)
        0.3
        >>> pct_to_decimal("11")
        0.11
    """
    return float(rate_pct) / PERCENTAGE_TO_DECIMAL


@error_handler
def annual_pct_to_monthly_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert annual percentage rate directly to monthly decimal rate.

    Args:
        rate_pct: Annual rate as percentage (e.g., 12.0 for 12%)

    Returns:
        Monthly rate as decimal (e.g., 0.01 for 12% annually)

    Examples:
        >>> annual_pct_to_monthly_decimal(12.0)
        0.01
    """
    return pct_to_decimal(rate_pct) / MONTHS_PER_YEAR


def percent_change(current: float, previous: float) -> float:
    """Relative change from previous to current, in percent. 0 when previous is 0."""
    if previous == 0:
        return 0.0
    return (current - previous) / abs(previous) * PERCENTAGE_TO_DECIMAL
