"""
Application settings using Pydantic Settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults for the claim mapping library.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment enumeration."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output format enumeration."""

    JSON = "json"
    CONSOLE = "console"


class RoundingPolicy(str, Enum):
    """Tie-break rule used when converting money to cents."""

    HALF_UP = "half_up"
    HALF_EVEN = "half_even"


class LoggerBackend(str, Enum):
    """Logging capability bound to a mapper when none is given explicitly."""

    NOOP = "noop"
    CONSOLE = "console"
    STRUCTLOG = "structlog"


class MappingSettings(BaseSettings):
    """Claim mapping configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="MAPPING_",
        extra="ignore",
    )

    money_rounding: RoundingPolicy = Field(
        default=RoundingPolicy.HALF_UP,
        description="Rounding applied at the half-cent boundary",
    )
    logger_backend: LoggerBackend = Field(
        default=LoggerBackend.NOOP,
        description="Default logging capability for mapping warnings",
    )


class HIPAASettings(BaseSettings):
    """HIPAA compliance configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="HIPAA_",
        extra="ignore",
    )

    phi_masking_enabled: bool = Field(
        default=True,
        description="Mask PHI patterns in log output",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        extra="ignore",
    )

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    format: LogFormat = Field(
        default=LogFormat.CONSOLE,
        description="Log output format",
    )
    file_path: Path | None = Field(
        default=None,
        description="Log file path; file logging is disabled when unset",
    )
    file_max_size_mb: Annotated[int, Field(ge=1, le=1000)] = Field(
        default=100,
        description="Maximum log file size in MB",
    )
    file_backup_count: Annotated[int, Field(ge=1, le=20)] = Field(
        default=5,
        description="Number of backup log files to keep",
    )
    include_caller: bool = Field(
        default=False,
        description="Include caller information in log entries",
    )

    @field_validator("file_path", mode="before")
    @classmethod
    def coerce_file_path(cls, v: Any) -> Path | None:
        """Treat an empty value as no file logging."""
        if v is None or v == "":
            return None
        return Path(v) if isinstance(v, str) else v


class Settings(BaseSettings):
    """
    Main application settings aggregating all configuration sections.

    Settings are loaded from environment variables with optional .env file support.
    Each section has its own prefix for environment variable naming.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Application metadata
    app_name: str = Field(
        default="claim-mapper",
        description="Application name",
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version",
    )
    app_env: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Component settings
    mapping: MappingSettings = Field(default_factory=MappingSettings)
    hipaa: HIPAASettings = Field(default_factory=HIPAASettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate critical settings for production environment."""
        if self.app_env == Environment.PRODUCTION and self.debug:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.app_env == Environment.TESTING


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
