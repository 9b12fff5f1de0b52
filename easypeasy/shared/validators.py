"""Shared validation utilities"""

import re
from typing import Optional

from ..config import DEFAULT_PHONE_PREFIX

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
LAB_TYPE_CODE_PATTERN = r"^[A-Za-z0-9]{2}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def validate_phone(phone: Optional[str], default_prefix: str = DEFAULT_PHONE_PREFIX) -> Optional[str]:
    """
    Validate and normalize a phone number to E.164 format.

    Numbers without an international prefix get `default_prefix` (+39).

    Args:
        phone: Phone number string in various formats

    Returns:
        Normalized phone number in E.164 format (+XXXXXXXXXXX)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    phone = phone.strip()
    has_prefix = phone.startswith("+") or phone.startswith("00")

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)
    if phone.startswith("00"):
        digits = digits[2:]

    if not has_prefix:
        digits = re.sub(r"\D", "", default_prefix) + digits

    # E.164 allows at most 15 digits; anything under 8 is not a real number
    if not 8 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 8 and 15 digits")

    return f"+{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    if not re.match(EMAIL_PATTERN, email):
        raise ValueError("Invalid email format")

    return email


def validate_lab_type_code(code: str) -> str:
    """Lab type codes are exactly two letters or digits, stored upper-case"""
    code = (code or "").strip()
    if not re.match(LAB_TYPE_CODE_PATTERN, code):
        raise ValueError("Code must be exactly 2 alphanumeric characters")
    return code.upper()


def validate_time(value: Optional[str]) -> Optional[str]:
    """Validate a 24h HH:MM time string"""
    if not value:
        return value
    value = value.strip()
    if not re.match(TIME_PATTERN, value):
        raise ValueError("Time must be in HH:MM format")
    return value


def validate_hex_color(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    if not re.match(HEX_COLOR_PATTERN, value):
        raise ValueError("Color must be in #RRGGBB format")
    return value.upper()
