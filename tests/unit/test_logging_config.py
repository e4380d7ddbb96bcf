"""
Tests for claim_mapper/config/logging_config.py: PHI masking and logging setup.
"""

import logging
import logging.handlers

from claim_mapper.config.logging_config import (
    PHIFilter,
    add_service_info,
    configure_logging,
    mask_phi,
    mask_text,
)
from claim_mapper.config.settings import LogFormat


# ---------------------------------------------------------------------------
# mask_text
# ---------------------------------------------------------------------------


class TestMaskText:

    def test_ssn(self):
        assert mask_text("ssn 123-45-6789") == "ssn [SSN-MASKED]"

    def test_labelled_npi(self):
        assert mask_text("NPI: 1000000004") == "[NPI-MASKED]"

    def test_email(self):
        assert mask_text("contact jane@example.com") == "contact [EMAIL-MASKED]"

    def test_member_id(self):
        assert mask_text("member_id=M123") == "[MEMBER-ID-MASKED]"

    def test_codes_untouched(self):
        assert mask_text("Invalid CPT code: 9921") == "Invalid CPT code: 9921"


# ---------------------------------------------------------------------------
# Processors and filters
# ---------------------------------------------------------------------------


class TestMaskPhi:

    def test_masks_nested_values(self):
        event = {"event": "warn", "context": {"note": "call 555-123-4567", "items": ["123-45-6789"]}}
        masked = mask_phi(None, "warning", event)
        assert masked["context"]["note"] == "call [PHONE-MASKED]"
        assert masked["context"]["items"] == ["[SSN-MASKED]"]

    def test_non_strings_untouched(self):
        masked = mask_phi(None, "info", {"value": 97110, "flag": True})
        assert masked == {"value": 97110, "flag": True}

    def test_disabled_by_setting(self, monkeypatch):
        monkeypatch.setenv("HIPAA_PHI_MASKING_ENABLED", "false")
        event = {"event": "ssn 123-45-6789"}
        assert mask_phi(None, "info", event) == event


class TestAddServiceInfo:

    def test_adds_metadata(self):
        event = add_service_info(None, "info", {})
        assert event["service"] == "claim-mapper"
        assert event["environment"] == "development"


class TestPHIFilter:

    def test_masks_message_and_args(self):
        record = logging.LogRecord(
            "claims", logging.WARNING, __file__, 1, "member %s email %s", ("123-45-6789", "a@b.io"), None
        )
        assert PHIFilter().filter(record) is True
        assert record.getMessage() == "member [SSN-MASKED] email [EMAIL-MASKED]"


# ---------------------------------------------------------------------------
# configure_logging
# ---------------------------------------------------------------------------


class TestConfigureLogging:

    def test_console_handler_only_by_default(self, restore_logging):
        configure_logging()
        handlers = restore_logging.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert any(isinstance(f, PHIFilter) for f in handlers[0].filters)

    def test_file_handler_when_path_set(self, restore_logging, monkeypatch, tmp_path):
        log_file = tmp_path / "logs" / "claims.log"
        monkeypatch.setenv("LOG_FILE_PATH", str(log_file))

        configure_logging(LogFormat.JSON)

        rotating = [
            h for h in restore_logging.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(rotating) == 1
        assert log_file.parent.is_dir()

    def test_level_from_settings(self, restore_logging, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        configure_logging()
        assert restore_logging.level == logging.ERROR
