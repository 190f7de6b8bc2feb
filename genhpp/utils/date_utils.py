"""
Month-range helpers for expense summaries and reports.

Reports are grouped by calendar month, addressed as "YYYY-MM" strings.
"""

import re
from datetime import date, datetime, time
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta

MONTH_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def parse_month(month: str) -> date:
    """
    Parse a "YYYY-MM" string into the first day of that month.

    Raises:
        ValueError: If the string is not a valid month key
    """
    match = MONTH_PATTERN.match(month or "")
    if not match:
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")
    return date(int(match.group(1)), int(match.group(2)), 1)


def format_month(value: date) -> str:
    """Format a date as its "YYYY-MM" month key."""
    return value.strftime("%Y-%m")


def month_range(month_start: date) -> Tuple[datetime, datetime]:
    """
    Return the inclusive datetime bounds of the month containing month_start.

    Examples:
        >>> month_range(date(2024, 2, 10))
        (datetime.datetime(2024, 2, 1, 0, 0), datetime.datetime(2024, 2, 29, 23, 59, 59, 999999))
    """
    start = month_start.replace(day=1)
    end = start + relativedelta(months=1) - relativedelta(days=1)
    return datetime.combine(start, time.min), datetime.combine(end, time.max)


def previous_month(month_start: date) -> date:
    return month_start.replace(day=1) - relativedelta(months=1)


def last_six_months(today: Optional[date] = None) -> List[str]:
    """Month keys for the current month and the five before it, newest first."""
    today = today or date.today()
    first = today.replace(day=1)
    return [format_month(first - relativedelta(months=i)) for i in range(6)]
