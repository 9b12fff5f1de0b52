"""Human-readable lab codes, e.g. SOL.LUN.10:00"""

import re
from datetime import date
from typing import Optional

from ...shared.dates import weekday_code


def generate_lab_code(venue_name: Optional[str], weekday: Optional[str], start_time: Optional[str]) -> str:
    """
    Join the venue prefix, weekday and start time with dots.

    The venue prefix is the first three non-whitespace characters of the
    venue name, upper-cased. Returns an empty string when any part is missing.
    """
    if not venue_name or not weekday or not start_time:
        return ""
    prefix = re.sub(r"\s", "", venue_name)[:3].upper()
    if not prefix:
        return ""
    return f"{prefix}.{weekday}.{start_time}"


def lab_code_for(venue_name: Optional[str], start_date: Optional[date], start_time: Optional[str]) -> str:
    """Lab code with the weekday taken from the lab's start date"""
    weekday = weekday_code(start_date) if start_date else None
    return generate_lab_code(venue_name, weekday, start_time)
