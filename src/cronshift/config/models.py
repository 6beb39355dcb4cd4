"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CRONSHIFT__SECTION__KEY)
3. Project YAML (.cronshift/config.yaml)
4. Global YAML (~/.config/cronshift/config.yaml)
5. Built-in defaults (this file)

Examples:
    CRONSHIFT__LOGGING__LEVEL=DEBUG
    CRONSHIFT__ENGINE__MAX_WORKERS=8
    CRONSHIFT__REPORT__FORMAT=markdown
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from cronshift.config.constants import DEFAULT_JOB_GROUP, MAX_WORKERS_LIMIT, SYSTEM_TIMEZONE

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ReportFormat = Literal["json", "yaml", "markdown"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CRONSHIFT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs one event per classified unit.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class EngineConfig(BaseModel):
    """Classification engine configuration.

    Env vars:
        CRONSHIFT__ENGINE__MAX_WORKERS: Parallel classification workers
        CRONSHIFT__ENGINE__DEFAULT_TIMEZONE: Timezone for schedules without one
    """

    max_workers: int = Field(
        default=4,
        description="Parallel classification workers. 1 classifies sequentially.",
    )
    default_timezone: str = Field(
        default=SYSTEM_TIMEZONE,
        description="Timezone attached to translated schedules that declare none.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if not (1 <= v <= MAX_WORKERS_LIMIT):
            raise ValueError(f"max_workers must be 1-{MAX_WORKERS_LIMIT}, got {v}")
        return v

    @field_validator("default_timezone")
    @classmethod
    def validate_default_timezone(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("default_timezone must not be empty")
        return v


class ReportConfig(BaseModel):
    """Report output configuration.

    Env vars:
        CRONSHIFT__REPORT__FORMAT: json, yaml or markdown
        CRONSHIFT__REPORT__JOB_GROUP: Group used for generated job identities
        CRONSHIFT__REPORT__INCLUDE_ADVISORIES: Include fact consistency advisories
    """

    format: ReportFormat = Field(
        default="json",
        description="Rendered report format.",
    )
    job_group: str = Field(
        default=DEFAULT_JOB_GROUP,
        description="Job/trigger group for generated scheduler identities.",
    )
    include_advisories: bool = Field(
        default=True,
        description="Attach advisories when declared and observed timer patterns disagree.",
    )


class CronShiftConfig(BaseModel):
    """Root configuration for CronShift."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
