"""Tests for engine/ops.py - batch classification."""

from __future__ import annotations

import threading

import pytest
from structlog.testing import capture_logs

from cronshift.classify import ops as classify_ops
from cronshift.config.models import CronShiftConfig, EngineConfig, ReportConfig
from cronshift.core.errors import ClassificationError
from cronshift.engine import EngineOptions, classify_unit, classify_units, iter_reports
from cronshift.facts.models import MigrationUnit, ScheduleFact, TimerFact, TimerPattern
from cronshift.report import ReportStatus


def _units(count: int) -> list[MigrationUnit]:
    """Alternate automatic, partial and manual units."""
    units = []
    for i in range(count):
        kind = i % 3
        if kind == 0:
            unit = MigrationUnit(f"com.example.T{i}", TimerFact(), ScheduleFact(hour=str(i % 24)))
        elif kind == 1:
            unit = MigrationUnit(f"com.example.T{i}", TimerFact(has_interval_timer=True))
        else:
            unit = MigrationUnit(f"com.example.T{i}", TimerFact(dynamic_timer_creation=True))
        units.append(unit)
    return units


class TestEngineOptions:
    """Options derived from config."""

    def test_from_config(self) -> None:
        config = CronShiftConfig(
            engine=EngineConfig(max_workers=3, default_timezone="UTC"),
            report=ReportConfig(job_group="ops", include_advisories=False),
        )

        options = EngineOptions.from_config(config)

        assert options == EngineOptions(
            max_workers=3,
            default_timezone="UTC",
            job_group="ops",
            include_advisories=False,
        )

    def test_overrides_skip_none(self) -> None:
        options = EngineOptions.from_config(CronShiftConfig(), max_workers=None, job_group="x")

        assert options.max_workers == 4
        assert options.job_group == "x"


class TestClassifyUnit:
    """Single unit classification."""

    def test_automatic(self, nightly_schedule: ScheduleFact) -> None:
        unit = MigrationUnit("com.example.Nightly", TimerFact(), nightly_schedule)

        report = classify_unit(unit)

        assert report.status is ReportStatus.AUTOMATIC
        assert report.unit == "com.example.Nightly"

    def test_advisory_attached_and_logged(self) -> None:
        unit = MigrationUnit(
            "com.example.Odd",
            TimerFact(timer_pattern=TimerPattern.SINGLE, has_interval_timer=True),
        )

        with capture_logs() as logs:
            report = classify_unit(unit)

        assert len(report.advisories) == 1
        advisories = [e for e in logs if e["event"] == "fact_advisory"]
        assert len(advisories) == 1
        assert advisories[0]["log_level"] == "warning"

    def test_advisories_disabled(self) -> None:
        unit = MigrationUnit(
            "com.example.Odd",
            TimerFact(timer_pattern=TimerPattern.SINGLE, has_interval_timer=True),
        )

        report = classify_unit(unit, EngineOptions(include_advisories=False))

        assert report.advisories == ()

    def test_failure_becomes_error_report(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def explode(*args: object, **kwargs: object) -> None:
            raise RuntimeError("classifier exploded")

        monkeypatch.setattr("cronshift.engine.ops.classify", explode)

        with capture_logs() as logs:
            report = classify_unit(MigrationUnit("com.example.Bad", TimerFact()))

        assert report.status is ReportStatus.ERROR
        assert report.reasons == ("Internal error: classifier exploded",)
        assert report.error is not None
        assert report.error["code"] == 9001
        assert report.error["details"] == {"unit": "com.example.Bad", "exception": "RuntimeError"}
        (failed,) = [e for e in logs if e["event"] == "unit_classification_failed"]
        assert failed["error"] == "INTERNAL_ERROR"

    def test_domain_error_kept_as_is(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Errors that already carry a code are not rewrapped."""

        def reject(*args: object, **kwargs: object) -> None:
            raise ClassificationError.unclassified("com.example.Bad", "no rule")

        monkeypatch.setattr("cronshift.engine.ops.classify", reject)

        report = classify_unit(MigrationUnit("com.example.Bad", TimerFact()))

        assert report.error is not None
        assert report.error["error"] == "UNCLASSIFIED_PATTERN"


class TestClassifyUnits:
    """Batch behavior."""

    def test_empty_batch(self) -> None:
        assert classify_units([]) == []

    @pytest.mark.parametrize("workers", [1, 4, 16])
    def test_order_preserved(self, workers: int) -> None:
        units = _units(40)

        reports = classify_units(units, EngineOptions(max_workers=workers))

        assert [r.unit for r in reports] == [u.name for u in units]

    def test_parallel_matches_sequential(self) -> None:
        units = _units(30)

        sequential = classify_units(units, EngineOptions(max_workers=1))
        parallel = classify_units(units, EngineOptions(max_workers=8))

        assert parallel == sequential

    def test_statuses(self) -> None:
        reports = classify_units(_units(3), EngineOptions(max_workers=2))

        assert [r.status for r in reports] == [
            ReportStatus.AUTOMATIC,
            ReportStatus.PARTIAL,
            ReportStatus.MANUAL,
        ]

    def test_one_failure_does_not_stop_the_batch(self, monkeypatch: pytest.MonkeyPatch) -> None:
        real_classify = classify_ops.classify

        def flaky(fact: TimerFact, schedule: ScheduleFact | None = None, **kwargs: object):
            if fact.timeout_method_count == 7:
                raise RuntimeError("bad unit")
            return real_classify(fact, schedule, **kwargs)  # type: ignore[arg-type]

        monkeypatch.setattr("cronshift.engine.ops.classify", flaky)
        units = [
            *_units(4),
            MigrationUnit("com.example.Bad", TimerFact(timeout_method_count=7)),
            *_units(2),
        ]

        reports = classify_units(units, EngineOptions(max_workers=4))

        assert len(reports) == len(units)
        assert reports[4].status is ReportStatus.ERROR
        assert reports[4].unit == "com.example.Bad"
        assert sum(r.status is ReportStatus.ERROR for r in reports) == 1

    def test_runs_on_worker_threads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        real_classify = classify_ops.classify
        seen: set[str] = set()

        def recording(*args: object, **kwargs: object):
            seen.add(threading.current_thread().name)
            return real_classify(*args, **kwargs)  # type: ignore[arg-type]

        monkeypatch.setattr("cronshift.engine.ops.classify", recording)

        classify_units(_units(10), EngineOptions(max_workers=2))

        assert seen
        assert all(name.startswith("cronshift-classify") for name in seen)


class TestIterReports:
    """Streaming interface."""

    def test_yields_every_index_once(self) -> None:
        units = _units(12)

        indexes = sorted(i for i, _ in iter_reports(units, EngineOptions(max_workers=3)))

        assert indexes == list(range(12))
