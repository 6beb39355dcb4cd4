"""Config module exports."""

from cronshift.config.loader import load_config, write_config_template
from cronshift.config.models import (
    CronShiftConfig,
    EngineConfig,
    LoggingConfig,
    ReportConfig,
)

__all__ = [
    "load_config",
    "write_config_template",
    "CronShiftConfig",
    "EngineConfig",
    "LoggingConfig",
    "ReportConfig",
]
