"""
Claim model and field normalizers.

Provides the canonical ``Claim`` model and the pure normalization
functions for CPT, ICD-10, NPI, dates and money.
"""

from claim_mapper.schemas.claim import Claim, CoordinationOfBenefits
from claim_mapper.schemas.field_types import FieldType
from claim_mapper.schemas.validators import (
    ValidationInfo,
    ValidationResult,
    is_valid_npi_checksum,
    normalize_cpt_code,
    normalize_icd10_code,
    normalize_npi,
    npi_check_digit,
    parse_date_to_utc_midnight,
    parse_money_to_cents,
    validate_field,
)


__all__ = [
    # Model
    "Claim",
    "CoordinationOfBenefits",
    # Field types
    "FieldType",
    # Normalizers
    "normalize_cpt_code",
    "normalize_icd10_code",
    "normalize_npi",
    "npi_check_digit",
    "is_valid_npi_checksum",
    "parse_date_to_utc_midnight",
    "parse_money_to_cents",
    # Validation
    "validate_field",
    "ValidationInfo",
    "ValidationResult",
]
