"""
Utility modules for the claim mapping library.

Provides text cleaning and date parsing helpers used by the normalizers.
"""

from claim_mapper.utils.date_utils import (
    parse_date,
    parse_iso_datetime_date,
    to_utc_midnight,
)
from claim_mapper.utils.string_utils import (
    clean_currency,
    digits_only,
    is_blank,
)


__all__ = [
    # Date utilities
    "parse_date",
    "parse_iso_datetime_date",
    "to_utc_midnight",
    # String utilities
    "clean_currency",
    "digits_only",
    "is_blank",
]
