"""Report emission - turn a verdict into a report value."""

from __future__ import annotations

from collections.abc import Iterable

from cronshift.classify.models import (
    Automatic,
    ManualRequired,
    MigrationConfig,
    PartialAutomatic,
    Verdict,
)
from cronshift.config.constants import DEFAULT_JOB_GROUP
from cronshift.core.errors import ClassificationError, CronShiftError
from cronshift.report.models import JobKey, JobSkeleton, Report, ReportStatus, TriggerSpec


def emit(
    unit_name: str,
    verdict: Verdict,
    *,
    job_group: str = DEFAULT_JOB_GROUP,
    advisories: Iterable[str] = (),
) -> Report:
    """Render a verdict into a report.

    Manual reasons are carried over verbatim and in order. The verdict is
    never modified.

    Raises:
        ClassificationError: If the verdict is not one of the known variants.
    """
    notes = tuple(advisories)

    if isinstance(verdict, Automatic):
        return Report(
            unit=unit_name,
            status=ReportStatus.AUTOMATIC,
            job=_job_skeleton(unit_name, verdict.config, job_group),
            advisories=notes,
        )
    if isinstance(verdict, PartialAutomatic):
        return Report(
            unit=unit_name,
            status=ReportStatus.PARTIAL,
            reasons=tuple(verdict.reasons),
            job=_job_skeleton(unit_name, verdict.config, job_group),
            advisories=notes,
        )
    if isinstance(verdict, ManualRequired):
        return Report(
            unit=unit_name,
            status=ReportStatus.MANUAL,
            reasons=tuple(verdict.reasons),
            advisories=notes,
        )

    raise ClassificationError.unclassified(
        unit_name, f"unknown verdict type {type(verdict).__name__}"
    )


def error_report(unit_name: str, error: CronShiftError) -> Report:
    """Report for a unit whose classification failed unexpectedly."""
    return Report(
        unit=unit_name,
        status=ReportStatus.ERROR,
        reasons=(error.message,),
        error=error.to_dict(),
    )


def _job_skeleton(unit_name: str, config: MigrationConfig, group: str) -> JobSkeleton:
    simple_name = unit_name.rsplit(".", 1)[-1]

    trigger = None
    if config.cron is not None:
        trigger = TriggerSpec(
            key=JobKey(name=f"{simple_name}Trigger", group=group),
            cron=config.cron.quartz_expression,
            timezone=config.cron.timezone,
        )

    return JobSkeleton(
        key=JobKey(name=simple_name, group=group),
        job_class=f"{simple_name}Job",
        persistent=config.persistent,
        data_map=dict(config.data_map),
        trigger=trigger,
    )
