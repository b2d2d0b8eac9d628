"""Structlog-based logging configuration for the skaffold-schema tools.

Structlog loggers, such as the CLI's, run through the processor chain and are
rendered as JSON or human-readable output. Engine modules log through the
standard library; their records reach the same stderr handler as plain
messages, filtered by the configured level.
"""

import logging
import os
import sys
from collections.abc import Callable
from importlib import metadata
from typing import Any

import structlog

from skaffold.settings import Settings

DISTRIBUTION = "skaffold-schema"


def is_docker_environment() -> bool:
    """Check if running in a Docker container."""
    return os.path.exists("/.dockerenv") or os.environ.get("DOCKER_CONTAINER") == "true"


def get_package_version() -> str:
    """Get the installed version of this distribution, or 'unknown'."""
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "unknown"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _configure_processors(settings: Settings, is_docker: bool) -> list:
    """Configure structlog processors based on environment."""
    extra_fields = {
        "service": DISTRIBUTION,
        "version": get_package_version(),
        **settings.logging.extra_fields,
    }

    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if settings.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    # Auto-detect: JSON in containers, human-readable on a terminal
    use_json = settings.logging.json_logs
    if use_json is None:
        use_json = is_docker

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    return processors


def _configure_handlers(settings: Settings) -> None:
    """Send all log records to stderr, leaving stdout for command output."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)


def configure_structlog(settings: Settings) -> None:
    """Configure structlog-based logging system.

    Args:
        settings: The Settings instance containing logging settings.
    """
    is_docker = is_docker_environment()

    structlog.configure(
        processors=_configure_processors(settings, is_docker),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.logging.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(settings)

    logger = structlog.get_logger(__name__)
    logger.debug(
        "Structured logging configured",
        log_level=settings.logging.level,
        json_output=settings.logging.json_logs,
        docker=is_docker,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
