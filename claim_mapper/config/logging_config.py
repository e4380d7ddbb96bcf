"""
Structured logging configuration using structlog.

Provides JSON or console logging with contextual information,
PHI masking for HIPAA compliance, and integration with Python's
standard logging module.
"""

import logging
import logging.handlers
import re
import sys
from datetime import UTC, datetime
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from claim_mapper.config.settings import LogFormat, get_settings


# PHI patterns for masking sensitive information
PHI_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # SSN patterns
    (re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), "[SSN-MASKED]"),
    # NPI numbers
    (re.compile(r"\bNPI[:\s]*\d{10}\b", re.IGNORECASE), "[NPI-MASKED]"),
    # Phone numbers
    (re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b"), "[PHONE-MASKED]"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"), "[EMAIL-MASKED]"),
    # Medicare/Medicaid IDs
    (re.compile(r"\b[A-Za-z]{1}\d{4}[A-Za-z]{1}\d{4}\b"), "[MEDICARE-ID-MASKED]"),
    # Member identifiers
    (re.compile(r"\bmember[_\s]?id[:=\s]+\S+", re.IGNORECASE), "[MEMBER-ID-MASKED]"),
]


def mask_text(value: str) -> str:
    """Apply every PHI pattern to a string."""
    for pattern, replacement in PHI_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def mask_phi(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Mask Protected Health Information (PHI) in log entries.

    Args:
        logger: Logger instance.
        method_name: Name of the logging method.
        event_dict: The event dictionary to process.

    Returns:
        EventDict with PHI masked.
    """
    settings = get_settings()
    if not settings.hipaa.phi_masking_enabled:
        return event_dict

    def mask_value(value: Any) -> Any:
        if isinstance(value, str):
            return mask_text(value)
        if isinstance(value, dict):
            return {k: mask_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return type(value)(mask_value(item) for item in value)
        return value

    return {key: mask_value(val) for key, val in event_dict.items()}


def add_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO-8601 timestamp to log entries."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def add_service_info(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add service metadata to log entries."""
    settings = get_settings()
    event_dict["service"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["environment"] = settings.app_env.value
    return event_dict


def add_caller_info(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add caller information to log entries when enabled."""
    settings = get_settings()
    if not settings.logging.include_caller:
        return event_dict

    record = event_dict.get("_record")
    if record:
        event_dict["caller"] = {
            "filename": record.filename,
            "function": record.funcName,
            "line": record.lineno,
            "module": record.module,
        }
    return event_dict


class PHIFilter(logging.Filter):
    """
    Logging filter that masks PHI in log records.

    Applies PHI masking patterns to the message and string args of
    records coming from plain ``logging`` loggers.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        settings = get_settings()
        if not settings.hipaa.phi_masking_enabled:
            return True

        if isinstance(record.msg, str):
            record.msg = mask_text(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                mask_text(arg) if isinstance(arg, str) else arg for arg in record.args
            )

        return True


def get_json_processors() -> list[Processor]:
    """Get processors for JSON log output."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_timestamp,
        add_service_info,
        add_caller_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.format_exc_info,
        mask_phi,
        structlog.processors.JSONRenderer(default=str),
    ]


def get_console_processors() -> list[Processor]:
    """Get processors for console log output."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.format_exc_info,
        mask_phi,
        structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def configure_logging(log_format: LogFormat | None = None) -> None:
    """
    Configure the logging system with structlog.

    Sets up both structlog and standard library logging with JSON or
    console output, PHI masking and an optional rotating file handler.

    Args:
        log_format: Overrides the configured output format.
    """
    settings = get_settings()
    log_format = log_format or settings.logging.format
    log_level = getattr(logging, settings.logging.level.value)

    if log_format == LogFormat.JSON:
        processors = get_json_processors()
        renderer: Processor = structlog.processors.JSONRenderer(default=str)
    else:
        processors = get_console_processors()
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
            add_timestamp,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_phi,
        ],
        processor=renderer,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(PHIFilter())
    root_logger.addHandler(console_handler)

    log_file = settings.logging.file_path
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(log_file),
            maxBytes=settings.logging.file_max_size_mb * 1024 * 1024,
            backupCount=settings.logging.file_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(PHIFilter())
        root_logger.addHandler(file_handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        Configured structlog BoundLogger instance.
    """
    return structlog.get_logger(name)
