"""
Tests for claim_mapper/mapping/outcome.py: FieldOutcome construction and resolution.
"""

import pytest

from claim_mapper.exceptions import MissingFieldError
from claim_mapper.mapping.logger import RecordingLogger
from claim_mapper.mapping.outcome import Diagnostic, FieldOutcome, FieldStatus


class TestFieldOutcome:

    def test_ok(self):
        outcome = FieldOutcome.ok("C1")
        assert outcome.status == FieldStatus.OK
        assert outcome.value == "C1"
        assert outcome.is_fatal is False

    def test_degraded_without_diagnostics_is_ok(self):
        assert FieldOutcome.degraded(["99213"]).status == FieldStatus.OK

    def test_degraded_keeps_diagnostics(self):
        outcome = FieldOutcome.degraded("222", Diagnostic("coerced", {"field": "claimId"}))
        assert outcome.status == FieldStatus.DEGRADED
        assert outcome.diagnostics == (Diagnostic("coerced", {"field": "claimId"}),)

    def test_fatal(self):
        error = MissingFieldError("claimId")
        outcome = FieldOutcome.fatal(error)
        assert outcome.is_fatal
        assert outcome.value is None
        assert outcome.error is error

    def test_frozen(self):
        outcome = FieldOutcome.ok(1)
        with pytest.raises(AttributeError):
            outcome.value = 2


class TestResolve:

    def test_ok_returns_value_silently(self):
        logger = RecordingLogger()
        assert FieldOutcome.ok("C1").resolve(logger) == "C1"
        assert logger.entries == []

    def test_degraded_warns_each_diagnostic(self):
        logger = RecordingLogger()
        outcome = FieldOutcome.degraded(
            ["99213"],
            Diagnostic("Dropped non-string code element", {"value": 1}),
            Diagnostic("Dropped non-string code element", {"value": 2}),
        )

        assert outcome.resolve(logger) == ["99213"]
        assert [entry.context["value"] for entry in logger.warnings] == [1, 2]

    def test_fatal_raises_after_warnings(self):
        logger = RecordingLogger()
        outcome = FieldOutcome.fatal(
            MissingFieldError("claimId"),
            diagnostics=(Diagnostic("earlier"),),
        )

        with pytest.raises(MissingFieldError):
            outcome.resolve(logger)
        assert [entry.message for entry in logger.warnings] == ["earlier"]
