"""
Error taxonomy for claim mapping.

Every fatal defect found while mapping a raw record is raised as one of the
``ClaimMappingError`` subclasses below. Each error carries a tag
(``ErrorKind``), a human-readable message and a read-only context mapping
with the field name and offending raw value where applicable.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""

    MISSING_FIELD = "missing_field"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_IDENTIFIER = "invalid_identifier"
    INVALID_CODE = "invalid_code"
    INVALID_DATE = "invalid_date"
    INVALID_AMOUNT = "invalid_amount"


class ClaimMappingError(Exception):
    """
    Base exception for anything that goes wrong while mapping a raw record.

    Attributes:
        kind: Failure kind tag.
        message: Human-readable message.
        context: Read-only structured context for diagnostics.
        field: Name of the offending input field, if known.
    """

    kind: ErrorKind
    _FROZEN_ATTRS = frozenset({"kind", "message", "context", "field"})

    def __init__(
        self,
        message: str,
        context: Mapping[str, Any] | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = MappingProxyType(dict(context or {}))
        self.field = field
        self._sealed = True

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._FROZEN_ATTRS and getattr(self, "_sealed", False):
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__setattr__(name, value)

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.message} | context={dict(self.context)}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "field": self.field,
            "context": dict(self.context),
        }


class MissingFieldError(ClaimMappingError):
    """A required field is absent from the raw input."""

    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field_name: str, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            f"Missing required field: {field_name}",
            context={"field": field_name, **(context or {})},
            field=field_name,
        )


class TypeMismatchError(ClaimMappingError):
    """A field exists but has the wrong shape (e.g. expected str, got list)."""

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(
        self,
        field_name: str,
        expected_type: str,
        actual: Any,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        actual_type = type(actual).__name__
        super().__init__(
            f"Type mismatch for {field_name}. Expected {expected_type}, got {actual_type}",
            context={
                "field": field_name,
                "expected": expected_type,
                "actual": actual,
                "actual_type": actual_type,
                **(context or {}),
            },
            field=field_name,
        )


class InvalidNpiError(ClaimMappingError):
    """The provider NPI fails digit-count or checksum validation."""

    kind = ErrorKind.INVALID_IDENTIFIER

    def __init__(self, npi: str, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            f"Invalid NPI: {npi}",
            context={"npi": npi, **(context or {})},
            field="providerNpi",
        )


class InvalidCodeError(ClaimMappingError):
    """A CPT or ICD code is malformed, or a required code list is empty."""

    kind = ErrorKind.INVALID_CODE

    def __init__(
        self,
        code_type: str,
        code: str,
        context: Mapping[str, Any] | None = None,
        field_name: str | None = None,
    ) -> None:
        super().__init__(
            f"Invalid {code_type} code: {code}",
            context={"type": code_type, "code": code, **(context or {})},
            field=field_name,
        )


class InvalidDateError(ClaimMappingError):
    """No recognized date format matched."""

    kind = ErrorKind.INVALID_DATE

    def __init__(
        self,
        raw: str,
        context: Mapping[str, Any] | None = None,
        field_name: str | None = None,
    ) -> None:
        super().__init__(
            f"Invalid date: {raw}",
            context={"raw": raw, **(context or {})},
            field=field_name,
        )


class InvalidAmountError(ClaimMappingError):
    """A monetary value is unparseable or negative."""

    kind = ErrorKind.INVALID_AMOUNT

    def __init__(
        self,
        field_name: str,
        raw: Any,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Invalid amount for {field_name}: {raw}",
            context={"field": field_name, "raw": raw, **(context or {})},
            field=field_name,
        )
