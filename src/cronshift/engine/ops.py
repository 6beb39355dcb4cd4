"""Batch classification over a worker pool.

Units are independent: no worker reads another unit's facts or writes any
shared state, so the pool needs no locking. A unit that raises is turned
into an ``error`` report and the rest of the batch carries on.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

import structlog

from cronshift.analysis.escape import pattern_advisories
from cronshift.classify.ops import classify
from cronshift.config.constants import DEFAULT_JOB_GROUP, SYSTEM_TIMEZONE
from cronshift.config.models import CronShiftConfig
from cronshift.core.errors import CronShiftError, InternalError
from cronshift.core.logging import unit_context
from cronshift.facts.models import MigrationUnit
from cronshift.report.models import Report
from cronshift.report.ops import emit, error_report

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class EngineOptions:
    """Per-run settings shared read-only by every worker."""

    max_workers: int = 1
    default_timezone: str = SYSTEM_TIMEZONE
    job_group: str = DEFAULT_JOB_GROUP
    include_advisories: bool = True

    @classmethod
    def from_config(cls, config: CronShiftConfig, **overrides: object) -> EngineOptions:
        values: dict[str, object] = {
            "max_workers": config.engine.max_workers,
            "default_timezone": config.engine.default_timezone,
            "job_group": config.report.job_group,
            "include_advisories": config.report.include_advisories,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]


def classify_unit(unit: MigrationUnit, options: EngineOptions | None = None) -> Report:
    """Classify one unit and emit its report. Failures become error reports."""
    options = options or EngineOptions()
    with unit_context(unit.name):
        try:
            verdict = classify(
                unit.timer,
                unit.schedule,
                default_timezone=options.default_timezone,
            )
            advisories = pattern_advisories(unit.timer) if options.include_advisories else []
            report = emit(
                unit.name,
                verdict,
                job_group=options.job_group,
                advisories=advisories,
            )
        except Exception as e:
            error = e if isinstance(e, CronShiftError) else InternalError.unexpected(unit.name, e)
            logger.exception(
                "unit_classification_failed", error=error.error_name, detail=error.message
            )
            return error_report(unit.name, error)

        logger.debug("unit_classified", status=report.status.value, reasons=list(report.reasons))
        for note in report.advisories:
            logger.warning("fact_advisory", advisory=note)
        return report


def iter_reports(
    units: Sequence[MigrationUnit],
    options: EngineOptions | None = None,
) -> Iterator[tuple[int, Report]]:
    """Yield ``(input_index, report)`` pairs as units finish.

    Completion order is arbitrary with more than one worker; the index lets
    callers restore input order. Abandoning the iterator cancels the
    units that have not started yet.
    """
    options = options or EngineOptions()

    if options.max_workers <= 1 or len(units) <= 1:
        for index, unit in enumerate(units):
            yield index, classify_unit(unit, options)
        return

    executor = ThreadPoolExecutor(
        max_workers=options.max_workers,
        thread_name_prefix="cronshift-classify",
    )
    try:
        # Each task gets its own context copy so run ids reach worker threads
        futures = {
            executor.submit(contextvars.copy_context().run, classify_unit, unit, options): index
            for index, unit in enumerate(units)
        }
        for future in as_completed(futures):
            yield futures[future], future.result()
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


def classify_units(
    units: Sequence[MigrationUnit],
    options: EngineOptions | None = None,
) -> list[Report]:
    """Classify every unit; reports come back in input order."""
    options = options or EngineOptions()
    logger.info("batch_started", units=len(units), max_workers=options.max_workers)

    reports: list[Report | None] = [None] * len(units)
    for index, report in iter_reports(units, options):
        reports[index] = report

    ordered = [r for r in reports if r is not None]
    logger.info("batch_finished", units=len(ordered))
    return ordered
