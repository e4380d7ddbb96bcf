"""
Claim Mapper.

Converts loosely-structured claim records into a strictly typed, normalized
``Claim``: checksum-validated NPI, normalized CPT and ICD-10 codes, a
canonical date of service and integer cents.

Usage:
    from claim_mapper import ClaimMapper, ConsoleLogger

    claim = ClaimMapper(logger=ConsoleLogger()).map(payload)
"""

from importlib.metadata import PackageNotFoundError, version

from claim_mapper.config import configure_logging, get_logger, get_settings
from claim_mapper.exceptions import (
    ClaimMappingError,
    ErrorKind,
    InvalidAmountError,
    InvalidCodeError,
    InvalidDateError,
    InvalidNpiError,
    MissingFieldError,
    TypeMismatchError,
)
from claim_mapper.schemas import Claim, CoordinationOfBenefits
from claim_mapper.mapping import (
    ClaimLogger,
    ClaimMapper,
    ConsoleLogger,
    NoopLogger,
    RecordingLogger,
    StructlogLogger,
    map_claim,
)

try:
    __version__ = version("claim-mapper")
except PackageNotFoundError:
    __version__ = "1.0.0"


__all__ = [
    "__version__",
    # Mapper
    "ClaimMapper",
    "map_claim",
    # Model
    "Claim",
    "CoordinationOfBenefits",
    # Errors
    "ClaimMappingError",
    "ErrorKind",
    "MissingFieldError",
    "TypeMismatchError",
    "InvalidNpiError",
    "InvalidCodeError",
    "InvalidDateError",
    "InvalidAmountError",
    # Logging
    "ClaimLogger",
    "NoopLogger",
    "ConsoleLogger",
    "StructlogLogger",
    "RecordingLogger",
    "configure_logging",
    "get_logger",
    "get_settings",
]
