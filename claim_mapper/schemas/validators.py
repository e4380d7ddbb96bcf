"""
Field normalizers for claim mapping.

Pure functions that turn one raw scalar into its canonical form or raise a
typed ``ClaimMappingError``: CPT codes, ICD-10 codes, NPI, dates of service
and money amounts.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from enum import Enum
from typing import Any

from claim_mapper.config import get_logger
from claim_mapper.config.settings import RoundingPolicy
from claim_mapper.exceptions import (
    ClaimMappingError,
    InvalidAmountError,
    InvalidCodeError,
    InvalidDateError,
    InvalidNpiError,
    MissingFieldError,
    TypeMismatchError,
)
from claim_mapper.schemas.field_types import FieldType
from claim_mapper.utils.date_utils import parse_date
from claim_mapper.utils.string_utils import clean_currency, digits_only


logger = get_logger(__name__)


class ValidationResult(str, Enum):
    """Validation result status."""

    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class ValidationInfo:
    """
    Validation result with details.

    Attributes:
        result: Validation status.
        message: Human-readable message.
        normalized_value: Cleaned/normalized value.
        error: The error raised by the normalizer, if any.
    """

    result: ValidationResult
    message: str
    normalized_value: Any = None
    error: ClaimMappingError | None = None

    @property
    def is_valid(self) -> bool:
        """Check if validation passed."""
        return self.result == ValidationResult.VALID


# =============================================================================
# CPT Code Normalization
# =============================================================================

CPT_LENGTH = 5


def normalize_cpt_code(raw: str, field: str | None = None) -> str:
    """
    Normalize a CPT (Current Procedural Terminology) code.

    Every character other than the ASCII digits 0-9 is stripped; exactly
    five digits must remain. Modifiers are not kept.

    Raises:
        InvalidCodeError: If the digit count is not five.

    Example:
        >>> normalize_cpt_code("99-213")
        '99213'
    """
    digits = digits_only(raw)
    if len(digits) != CPT_LENGTH:
        raise InvalidCodeError("CPT", raw, field_name=field)
    return digits


# =============================================================================
# ICD-10 Code Normalization
# =============================================================================

# One letter followed by 2-6 alphanumerics, dots removed
ICD10_PATTERN = re.compile(r"^[A-Z][A-Z0-9]{2,6}$")


def normalize_icd10_code(raw: str, field: str | None = None) -> str:
    """
    Normalize an ICD-10 diagnosis code.

    Uppercases, removes dots, trims, checks the shape and reinserts a dot
    after the third character when the code is longer than three.

    Raises:
        InvalidCodeError: If the shape check fails.

    Example:
        >>> normalize_icd10_code("e119")
        'E11.9'
        >>> normalize_icd10_code("E11.9")
        'E11.9'
    """
    code = raw.upper().replace(".", "").strip()

    if not ICD10_PATTERN.match(code):
        raise InvalidCodeError("ICD", raw, field_name=field)

    if len(code) > 3:
        code = f"{code[:3]}.{code[3:]}"
    return code


# =============================================================================
# NPI Validation (National Provider Identifier)
# =============================================================================

# Health industry prefix applied before the Luhn computation
NPI_PREFIX = "80840"
NPI_LENGTH = 10


def npi_check_digit(first_nine: str) -> int:
    """
    Compute the NPI check digit for the first nine digits.

    Luhn over ``80840`` + the nine digits: from the right, the rightmost
    digit and every second one after it are doubled, 9 is subtracted from
    doubled values above 9, and the check digit brings the sum to a
    multiple of ten.
    """
    total = 0
    for i, digit in enumerate(reversed(NPI_PREFIX + first_nine)):
        d = int(digit)
        if i % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return (10 - total % 10) % 10


def is_valid_npi_checksum(ten_digits: str) -> bool:
    """Check the tenth digit against the computed check digit."""
    return npi_check_digit(ten_digits[:9]) == int(ten_digits[9])


def normalize_npi(raw: str) -> str:
    """
    Validate and normalize a National Provider Identifier.

    Raises:
        InvalidNpiError: If ten digits do not remain after stripping
            non-digits, or the checksum fails.

    Example:
        >>> normalize_npi("100-000-0004")
        '1000000004'
    """
    digits = digits_only(raw)
    if len(digits) != NPI_LENGTH:
        raise InvalidNpiError(raw, context={"digits": len(digits)})
    if not is_valid_npi_checksum(digits):
        raise InvalidNpiError(raw, context={"reason": "checksum"})
    return digits


# =============================================================================
# Date Normalization
# =============================================================================

def parse_date_to_utc_midnight(raw: str, field: str | None = None) -> date:
    """
    Parse a date of service.

    Accepts an ISO-8601 date-time (time and zone discarded), YYYY-MM-DD or
    M/D/YYYY, tried in that order. Use ``Claim.date_of_service_utc`` for the
    UTC-midnight datetime.

    Raises:
        InvalidDateError: If no format matches.
    """
    parsed = parse_date(raw)
    if parsed is None:
        raise InvalidDateError(raw, field_name=field)
    return parsed


# =============================================================================
# Money Normalization
# =============================================================================

ROUNDING_MODES = {
    RoundingPolicy.HALF_UP: ROUND_HALF_UP,
    RoundingPolicy.HALF_EVEN: ROUND_HALF_EVEN,
}


def parse_money_to_cents(
    raw: Any,
    field: str,
    rounding: RoundingPolicy | str = RoundingPolicy.HALF_UP,
) -> int:
    """
    Convert a money value to integer cents.

    Numbers are used directly; strings lose commas, whitespace and ``$``
    before being parsed as a decimal. Floats go through their shortest
    repr so ``100.25`` is exactly 10025 cents.

    Args:
        raw: Raw amount.
        field: Field name used in errors.
        rounding: Tie-break rule at the half-cent boundary.

    Returns:
        Non-negative amount in cents.

    Raises:
        MissingFieldError: If raw is None.
        InvalidAmountError: If unparseable, non-finite or negative. There is
            no upper bound on the amount.
        TypeMismatchError: If raw is neither a number nor a string.

    Example:
        >>> parse_money_to_cents("$1,234.56", "totalCharge")
        123456
    """
    if raw is None:
        raise MissingFieldError(field)

    if isinstance(raw, bool):
        raise TypeMismatchError(field, "number or string", raw)

    if isinstance(raw, float):
        amount: Decimal | None = Decimal(repr(raw))
    elif isinstance(raw, (int, Decimal)):
        amount = Decimal(raw)
    elif isinstance(raw, str):
        amount = clean_currency(raw)
    else:
        raise TypeMismatchError(field, "number or string", raw)

    if amount is None or not amount.is_finite():
        raise InvalidAmountError(field, raw)

    # Enough precision for an exact product and every integer digit of it
    try:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + 3, amount.adjusted() + 4)
            cents = int(
                (amount * 100).quantize(
                    Decimal(1), rounding=ROUNDING_MODES[RoundingPolicy(rounding)]
                )
            )
    except InvalidOperation as exc:
        raise InvalidAmountError(field, raw) from exc

    if cents < 0:
        raise InvalidAmountError(field, raw)
    return cents


# =============================================================================
# General Field Validation
# =============================================================================

def validate_field(value: Any, field_type: FieldType) -> ValidationInfo:
    """
    Validate a single value without raising.

    Routes to the normalizer for ``field_type`` and wraps its result or
    error in a ValidationInfo.

    Args:
        value: Value to validate.
        field_type: Type of the field.

    Returns:
        ValidationInfo with validation result.
    """
    normalizers = {
        FieldType.CPT_CODE: normalize_cpt_code,
        FieldType.ICD10_CODE: normalize_icd10_code,
        FieldType.NPI: normalize_npi,
        FieldType.DATE: parse_date_to_utc_midnight,
        FieldType.CURRENCY: lambda v: parse_money_to_cents(v, field_type.value),
    }

    if field_type != FieldType.CURRENCY and not isinstance(value, str):
        error = TypeMismatchError(field_type.value, "String", value)
        return ValidationInfo(
            result=ValidationResult.INVALID,
            message=error.message,
            normalized_value=value,
            error=error,
        )

    try:
        normalized = normalizers[field_type](value)
    except ClaimMappingError as exc:
        logger.debug("field_validation_failed", field_type=field_type.value, kind=exc.kind.value)
        return ValidationInfo(
            result=ValidationResult.INVALID,
            message=exc.message,
            normalized_value=value,
            error=exc,
        )

    return ValidationInfo(
        result=ValidationResult.VALID,
        message=f"Valid {field_type.value}",
        normalized_value=normalized,
    )
