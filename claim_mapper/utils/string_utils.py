"""
String utility functions for claim mapping.

Provides the small text-cleaning helpers shared by the field normalizers.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any


NON_DIGIT_PATTERN = re.compile(r"[^0-9]")
CURRENCY_NOISE_PATTERN = re.compile(r"[,\s$]")


def digits_only(text: str) -> str:
    """
    Remove every character other than the ASCII digits 0-9.

    Example:
        digits_only("99-213") -> "99213"
    """
    return NON_DIGIT_PATTERN.sub("", text)


def is_blank(value: Any) -> bool:
    """Check whether a value is a string that is empty after trimming."""
    return isinstance(value, str) and not value.strip()


def clean_currency(value: str) -> Decimal | None:
    """
    Clean and parse a currency string.

    Strips commas, whitespace and the dollar sign, then parses the remainder
    as a decimal number. The sign is kept, so negative amounts come back
    negative for the caller to reject.

    Args:
        value: Currency string to parse.

    Returns:
        Decimal value, or None if parsing fails.

    Example:
        clean_currency("$1,234.56") -> Decimal("1234.56")
        clean_currency("-1.00") -> Decimal("-1.00")
        clean_currency("abc") -> None
    """
    cleaned = CURRENCY_NOISE_PATTERN.sub("", value)
    if not cleaned:
        return None

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None
