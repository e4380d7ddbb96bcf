"""
Configuration module for the claim mapping library.

Provides centralized configuration management using Pydantic Settings,
environment variable loading, and structlog-based logging.
"""

from claim_mapper.config.logging_config import configure_logging, get_logger
from claim_mapper.config.settings import (
    Environment,
    LoggerBackend,
    RoundingPolicy,
    Settings,
    get_settings,
)


__all__ = [
    "Settings",
    "get_settings",
    "Environment",
    "LoggerBackend",
    "RoundingPolicy",
    "configure_logging",
    "get_logger",
]
