"""
Claim mapping engine.

Provides the record mapper, the per-field extractors and outcome type,
and the logging capability the mapper reports warnings through.
"""

from claim_mapper.mapping.extractors import parse_cob, parse_codes, require_string
from claim_mapper.mapping.logger import (
    ClaimLogger,
    ConsoleLogger,
    LogEntry,
    NoopLogger,
    RecordingLogger,
    StructlogLogger,
    get_default_logger,
)
from claim_mapper.mapping.mapper import ClaimMapper, map_claim
from claim_mapper.mapping.outcome import Diagnostic, FieldOutcome, FieldStatus


__all__ = [
    # Mapper
    "ClaimMapper",
    "map_claim",
    # Extractors
    "require_string",
    "parse_codes",
    "parse_cob",
    "Diagnostic",
    "FieldOutcome",
    "FieldStatus",
    # Logging capability
    "ClaimLogger",
    "NoopLogger",
    "ConsoleLogger",
    "StructlogLogger",
    "RecordingLogger",
    "LogEntry",
    "get_default_logger",
]
