"""
Per-field extraction outcomes.

Extractors return a ``FieldOutcome`` instead of raising or logging, which
keeps the fatal/recoverable policy testable as plain data. The mapper calls
``resolve`` to turn an outcome into a value, emitting warnings and raising
the fatal error where there is one.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from claim_mapper.exceptions import ClaimMappingError
from claim_mapper.mapping.logger import ClaimLogger


T = TypeVar("T")


class FieldStatus(str, Enum):
    """Outcome status of one field."""

    OK = "ok"
    DEGRADED = "degraded"
    FATAL = "fatal"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable defect to be reported as a warning."""

    message: str
    context: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FieldOutcome(Generic[T]):
    """
    Result of extracting one field.

    Attributes:
        status: OK, DEGRADED (value produced with diagnostics) or FATAL.
        value: Extracted value; None when fatal.
        diagnostics: Recoverable defects found along the way.
        error: The fatal error, if any.
    """

    status: FieldStatus
    value: T | None = None
    diagnostics: tuple[Diagnostic, ...] = ()
    error: ClaimMappingError | None = None

    @classmethod
    def ok(cls, value: T) -> "FieldOutcome[T]":
        """Create a clean result."""
        return cls(status=FieldStatus.OK, value=value)

    @classmethod
    def degraded(cls, value: T, *diagnostics: Diagnostic) -> "FieldOutcome[T]":
        """Create a result that carries diagnostics; OK when there are none."""
        if not diagnostics:
            return cls.ok(value)
        return cls(status=FieldStatus.DEGRADED, value=value, diagnostics=diagnostics)

    @classmethod
    def fatal(
        cls,
        error: ClaimMappingError,
        diagnostics: tuple[Diagnostic, ...] = (),
    ) -> "FieldOutcome[T]":
        """Create a failed result."""
        return cls(status=FieldStatus.FATAL, error=error, diagnostics=diagnostics)

    @property
    def is_fatal(self) -> bool:
        return self.status == FieldStatus.FATAL

    def resolve(self, logger: ClaimLogger) -> T:
        """
        Report diagnostics and return the value.

        Raises:
            ClaimMappingError: When the outcome is fatal.
        """
        for diagnostic in self.diagnostics:
            logger.warn(diagnostic.message, context=diagnostic.context)
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
