"""Calendar-date helpers

Lab dates are plain (year, month, day) values. Nothing here goes through a
timestamp, so the local UTC offset of the machine can never move a date to
the previous or next day.
"""

import re
from datetime import date, datetime
from typing import Union

ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Monday first, matching date.weekday()
WEEKDAY_CODES = ("LUN", "MAR", "MER", "GIO", "VEN", "SAB", "DOM")


def parse_calendar_date(value: Union[str, date]) -> date:
    """
    Build a calendar date from a YYYY-MM-DD string or a date/datetime.

    Raises:
        ValueError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {type(value).__name__}")

    match = ISO_DATE_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid date format: {value!r} (expected YYYY-MM-DD)")

    year, month, day = (int(part) for part in match.groups())
    # date() rejects impossible days such as 2024-02-30
    return date(year, month, day)


def weekday_code(value: date) -> str:
    """Italian three-letter weekday abbreviation (LUN ... DOM)"""
    return WEEKDAY_CODES[value.weekday()]
