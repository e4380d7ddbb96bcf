"""
Pytest Configuration and Shared Fixtures.

Provides common fixtures and configuration for all test files.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

# Add repository root to Python path
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from claim_mapper.config.settings import get_settings
from claim_mapper.mapping import ClaimMapper, RecordingLogger


# =============================================================================
# Function-scoped Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached settings so environment changes apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_logging():
    """Put the root logger and structlog back the way they were."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Logger that keeps every message for assertions."""
    return RecordingLogger()


@pytest.fixture
def mapper(recording_logger) -> ClaimMapper:
    """Mapper wired to the recording logger."""
    return ClaimMapper(logger=recording_logger)


@pytest.fixture
def valid_claim_payload() -> dict[str, Any]:
    """A raw claim that maps cleanly with no warnings."""
    return {
        "claimId": "CLM-001",
        "memberId": "M123",
        "providerNpi": "1000000004",
        "cptCodes": "99213, 97110",
        "icdCodes": ["e119", "M545"],
        "dateOfService": "2024-01-15",
        "totalCharge": "$1,234.56",
        "cob": {"sequence": 2, "otherPayerId": "PAYER-XYZ", "otherPayerPaid": "25.75"},
    }


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Pytest configuration hook."""
    config.addinivalue_line("markers", "unit: Unit tests")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
