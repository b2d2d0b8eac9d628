"""Process-wide settings for the skaffold-schema tools."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "SKAFFOLD_SCHEMA_"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "skaffold-schema"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize the log level name."""
        level = v.upper()
        if level not in _LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {', '.join(_LEVELS)}")
        return level


class Settings(BaseModel):
    """Settings for the command line tools."""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``SKAFFOLD_SCHEMA_*`` environment variables.

    Args:
        environ: Environment to read from. If None, uses ``os.environ``.

    Raises:
        ValueError: If a variable holds an invalid value
    """
    if environ is None:
        environ = os.environ

    logging_values: dict[str, object] = {}
    if level := environ.get(f"{ENV_PREFIX}LOG_LEVEL"):
        logging_values["level"] = level
    if (json_logs := environ.get(f"{ENV_PREFIX}JSON_LOGS")) is not None:
        logging_values["json_logs"] = json_logs.strip().lower()
    if (include_caller := environ.get(f"{ENV_PREFIX}INCLUDE_CALLER")) is not None:
        logging_values["include_caller"] = include_caller.strip().lower()

    return Settings(logging=LoggingSettings(**logging_values))
