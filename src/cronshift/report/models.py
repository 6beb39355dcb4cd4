"""Report models - per-unit migration reports and scheduler skeletons."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cronshift.config.constants import TRIGGER_TBD


class ReportStatus(Enum):
    """Machine-readable status tag of a report."""

    AUTOMATIC = "automatic"
    PARTIAL = "partial-automatic"
    MANUAL = "manual-required"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class JobKey:
    """Scheduler identity (name within a group) of a job or trigger."""

    name: str
    group: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "group": self.group}


@dataclass(frozen=True, slots=True)
class TriggerSpec:
    """Cron trigger for a generated job."""

    key: JobKey
    cron: str  # quartz form, year dropped when unrestricted
    timezone: str

    def to_dict(self) -> dict[str, Any]:
        return {"identity": self.key.to_dict(), "cron": self.cron, "timezone": self.timezone}


@dataclass(frozen=True, slots=True)
class JobSkeleton:
    """Generated job definition; ``trigger`` is None when it must be written by hand."""

    key: JobKey
    job_class: str
    persistent: bool
    data_map: dict[str, str | None] = field(default_factory=dict)
    trigger: TriggerSpec | None = None

    @property
    def durable(self) -> bool:
        # a job stored without any trigger must be durable
        return self.trigger is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity": self.key.to_dict(),
            "jobClass": self.job_class,
            "durable": self.durable,
            "persistent": self.persistent,
            "dataMap": dict(self.data_map),
            "trigger": self.trigger.to_dict() if self.trigger else TRIGGER_TBD,
        }


@dataclass(frozen=True, slots=True)
class Report:
    """Migration report for one unit."""

    unit: str
    status: ReportStatus
    reasons: tuple[str, ...] = ()
    job: JobSkeleton | None = None
    advisories: tuple[str, ...] = ()
    error: dict[str, Any] | None = None

    @property
    def needs_review(self) -> bool:
        return self.status in (ReportStatus.MANUAL, ReportStatus.ERROR)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "unit": self.unit,
            "status": self.status.value,
            "reasons": list(self.reasons),
            "job": self.job.to_dict() if self.job else None,
            "advisories": list(self.advisories),
        }
        if self.error is not None:
            data["error"] = self.error
        return data
