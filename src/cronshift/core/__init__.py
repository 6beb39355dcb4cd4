"""Core module exports."""

from cronshift.core.errors import (
    ClassificationError,
    ConfigError,
    CronShiftError,
    ErrorCode,
    FactError,
    InternalError,
    TranslationError,
)
from cronshift.core.logging import bind_run, configure_logging, get_logger, unit_context
from cronshift.core.progress import pluralize, progress, status

__all__ = [
    # Errors
    "ClassificationError",
    "ConfigError",
    "CronShiftError",
    "ErrorCode",
    "FactError",
    "InternalError",
    "TranslationError",
    # Logging
    "bind_run",
    "configure_logging",
    "get_logger",
    "unit_context",
    # Progress
    "pluralize",
    "progress",
    "status",
]
