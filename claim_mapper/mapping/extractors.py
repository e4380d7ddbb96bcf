"""
Field extractors for raw claim records.

Each extractor reads one field of an untyped mapping and returns a
``FieldOutcome`` that encodes the fatal/recoverable policy for that field:
a clean value, a degraded value with diagnostics, or a fatal error.
"""

import re
from collections.abc import Mapping
from typing import Any

from claim_mapper.config.settings import RoundingPolicy
from claim_mapper.exceptions import (
    ClaimMappingError,
    InvalidAmountError,
    MissingFieldError,
    TypeMismatchError,
)
from claim_mapper.mapping.outcome import Diagnostic, FieldOutcome
from claim_mapper.schemas.claim import CoordinationOfBenefits
from claim_mapper.schemas.validators import parse_money_to_cents
from claim_mapper.utils.string_utils import is_blank


# Optional sign and ASCII digits only
SEQUENCE_PATTERN = re.compile(r"[+-]?[0-9]+")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_string(raw: Mapping[str, Any], field: str) -> FieldOutcome[str]:
    """
    Extract a required, non-empty string field.

    Numbers are coerced to their string form with a warning; absent keys,
    blank strings and every other shape are fatal.
    """
    if field not in raw:
        return FieldOutcome.fatal(
            MissingFieldError(field, context={"available_fields": sorted(map(str, raw))})
        )

    value = raw[field]
    if isinstance(value, str) and not is_blank(value):
        return FieldOutcome.ok(value.strip())

    if _is_number(value):
        return FieldOutcome.degraded(
            str(value),
            Diagnostic(
                f"Coerced non-string into string for {field}",
                {"field": field, "value": value},
            ),
        )

    return FieldOutcome.fatal(TypeMismatchError(field, "String (non-empty)", value))


def parse_codes(raw: Any, field: str) -> FieldOutcome[list[str]]:
    """
    Split a code field into candidate code strings.

    Accepts a comma-separated string or a list of strings. List elements
    that are not non-blank strings are dropped, one diagnostic each.
    """
    if raw is None:
        return FieldOutcome.ok([])

    if isinstance(raw, str):
        return FieldOutcome.ok([part.strip() for part in raw.split(",") if part.strip()])

    if isinstance(raw, (list, tuple)):
        codes: list[str] = []
        diagnostics: list[Diagnostic] = []
        for item in raw:
            if isinstance(item, str) and not is_blank(item):
                codes.append(item.strip())
            else:
                diagnostics.append(
                    Diagnostic("Dropped non-string code element", {"field": field, "value": item})
                )
        return FieldOutcome.degraded(codes, *diagnostics)

    return FieldOutcome.fatal(TypeMismatchError(field, "String or List<String>", raw))


def _parse_sequence(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        sequence = value
    elif isinstance(value, str) and SEQUENCE_PATTERN.fullmatch(value.strip()):
        sequence = int(value.strip())
    else:
        raise TypeMismatchError("cob.sequence", "int or numeric string", value)

    if sequence < 1:
        raise InvalidAmountError("cob.sequence", sequence)
    return sequence


def parse_cob(
    raw: Any,
    rounding: RoundingPolicy | str = RoundingPolicy.HALF_UP,
) -> FieldOutcome[CoordinationOfBenefits | None]:
    """
    Parse the optional Coordination of Benefits sub-record.

    A block without a sequence is dropped as a whole with a warning. A bad
    sequence is fatal. A bad otherPayerId or otherPayerPaid only drops that
    field.
    """
    if raw is None:
        return FieldOutcome.ok(None)

    if not isinstance(raw, Mapping):
        return FieldOutcome.fatal(TypeMismatchError("cob", "Map", raw))

    if raw.get("sequence") is None:
        return FieldOutcome.degraded(
            None,
            Diagnostic("COB present but missing sequence; dropping COB", {"cob": dict(raw)}),
        )

    try:
        sequence = _parse_sequence(raw["sequence"])
    except ClaimMappingError as exc:
        return FieldOutcome.fatal(exc)

    diagnostics: list[Diagnostic] = []

    other_payer_id = None
    payer_id = raw.get("otherPayerId")
    if payer_id is not None:
        if isinstance(payer_id, str) and not is_blank(payer_id):
            other_payer_id = payer_id.strip()
        else:
            diagnostics.append(
                Diagnostic(
                    "Dropped non-string otherPayerId",
                    {"field": "cob.otherPayerId", "value": payer_id},
                )
            )

    other_payer_paid_cents = None
    if "otherPayerPaid" in raw:
        try:
            other_payer_paid_cents = parse_money_to_cents(
                raw["otherPayerPaid"], "cob.otherPayerPaid", rounding
            )
        except ClaimMappingError as exc:
            diagnostics.append(
                Diagnostic(
                    "Invalid COB otherPayerPaid; dropping",
                    {
                        "field": "cob.otherPayerPaid",
                        "value": raw["otherPayerPaid"],
                        "error": str(exc),
                    },
                )
            )

    cob = CoordinationOfBenefits(
        sequence=sequence,
        other_payer_id=other_payer_id,
        other_payer_paid_cents=other_payer_paid_cents,
    )
    return FieldOutcome.degraded(cob, *diagnostics)
