"""Tests for classify/ops.py - the ordered decision table."""

from __future__ import annotations

from dataclasses import replace

import pytest

from cronshift.analysis.escape import HANDLE_ESCAPE_REASON, SCHEDULE_ESCAPE_REASON
from cronshift.classify import classify
from cronshift.classify.models import (
    DYNAMIC_CREATION_REASON,
    MIXED_PATTERN_REASON,
    PROGRAMMATIC_TRIGGER_REASON,
    UNCLASSIFIED_REASON,
    Automatic,
    ManualRequired,
    PartialAutomatic,
)
from cronshift.facts.models import ScheduleFact, TimerFact, TimerPattern


class TestRuleMixedPattern:
    """Rule 1: a mixed declared pattern always needs a human."""

    def test_mixed_beats_clean_schedule(self, nightly_schedule: ScheduleFact) -> None:
        """Mixed pattern with safe escapes and a good schedule is still manual."""
        fact = TimerFact(timer_pattern=TimerPattern.MIXED, has_calendar_timer=True)

        verdict = classify(fact, nightly_schedule)

        assert verdict == ManualRequired((MIXED_PATTERN_REASON,))

    def test_mixed_beats_escape(self) -> None:
        fact = TimerFact(
            timer_pattern=TimerPattern.MIXED,
            uses_timer_handle=True,
            timer_handle_escapes=True,
        )

        assert classify(fact) == ManualRequired((MIXED_PATTERN_REASON,))


class TestRuleEscape:
    """Rule 2: escaping handles or schedules."""

    def test_handle_escape_with_schedule(self, nightly_schedule: ScheduleFact) -> None:
        fact = TimerFact(uses_timer_handle=True, timer_handle_escapes=True)

        assert classify(fact, nightly_schedule) == ManualRequired((HANDLE_ESCAPE_REASON,))

    def test_handle_escape_without_schedule(self) -> None:
        fact = TimerFact(uses_timer_handle=True, timer_handle_escapes=True)

        assert classify(fact) == ManualRequired((HANDLE_ESCAPE_REASON,))

    def test_handle_param_in_timeout(self) -> None:
        fact = TimerFact(uses_timer_handle=True, uses_timer_handle_param_in_timeout=True)

        assert classify(fact) == ManualRequired((HANDLE_ESCAPE_REASON,))

    def test_reasons_from_both_checks_in_order(self) -> None:
        fact = TimerFact(
            uses_timer_handle=True,
            timer_handle_escapes=True,
            uses_timer_get_schedule=True,
            timer_get_schedule_escapes=True,
        )

        verdict = classify(fact)

        assert verdict == ManualRequired((HANDLE_ESCAPE_REASON, SCHEDULE_ESCAPE_REASON))

    def test_local_handle_use_is_fine(self, nightly_schedule: ScheduleFact) -> None:
        fact = TimerFact(uses_timer_handle=True, uses_timer_get_schedule=True)

        assert isinstance(classify(fact, nightly_schedule), Automatic)


class TestRuleDynamicCreation:
    """Rule 3: dynamic creation needs a translatable schedule."""

    def test_dynamic_without_schedule(self) -> None:
        fact = TimerFact(dynamic_timer_creation=True)

        assert classify(fact) == ManualRequired((DYNAMIC_CREATION_REASON,))

    def test_dynamic_with_non_literal_schedule(self) -> None:
        fact = TimerFact(dynamic_timer_creation=True)
        schedule = ScheduleFact(raw_expression="computeSchedule()")

        assert classify(fact, schedule) == ManualRequired((DYNAMIC_CREATION_REASON,))

    def test_dynamic_with_literal_schedule_is_automatic(
        self, nightly_schedule: ScheduleFact
    ) -> None:
        fact = TimerFact(dynamic_timer_creation=True, has_calendar_timer=True)

        assert isinstance(classify(fact, nightly_schedule), Automatic)


class TestRuleAutomatic:
    """Rule 4: a translatable schedule with nothing escaping."""

    def test_scenario_nightly_single_timer(
        self, single_timer: TimerFact, nightly_schedule: ScheduleFact
    ) -> None:
        """Single-action timer at 02:00 translates to the nightly trigger."""
        # Given
        fact = TimerFact(
            timer_pattern=TimerPattern.SINGLE,
            uses_timer_handle=False,
            uses_timer_get_schedule=False,
            has_single_timer=True,
        )

        # When
        verdict = classify(fact, nightly_schedule)

        # Then
        assert isinstance(verdict, Automatic)
        assert verdict.config.cron is not None
        assert verdict.config.cron.quartz_expression == "0 0 2 * * ?"
        assert classify(single_timer, nightly_schedule) == verdict

    def test_persistence_follows_schedule(self) -> None:
        verdict = classify(TimerFact(), ScheduleFact(persistent=False))

        assert isinstance(verdict, Automatic)
        assert verdict.config.persistent is False

    def test_timer_info_carried_in_data_map(self) -> None:
        verdict = classify(TimerFact(uses_timer_info=True), ScheduleFact(info="invoices"))

        assert isinstance(verdict, Automatic)
        assert verdict.config.data_map == {"timerInfo": "invoices"}

    def test_timer_info_without_payload(self) -> None:
        verdict = classify(TimerFact(uses_timer_info=True), ScheduleFact())

        assert isinstance(verdict, Automatic)
        assert verdict.config.data_map == {"timerInfo": None}

    def test_no_timer_info_means_empty_data_map(self) -> None:
        verdict = classify(TimerFact(), ScheduleFact(info="ignored"))

        assert isinstance(verdict, Automatic)
        assert verdict.config.data_map == {}

    def test_migration_notes_carried(self) -> None:
        verdict = classify(TimerFact(migration_notes=" check locking "), ScheduleFact())

        assert isinstance(verdict, Automatic)
        assert verdict.config.data_map == {"migrationNotes": "check locking"}

    def test_default_timezone_applied(self, nightly_schedule: ScheduleFact) -> None:
        verdict = classify(TimerFact(), nightly_schedule, default_timezone="UTC")

        assert isinstance(verdict, Automatic)
        assert verdict.config.cron is not None
        assert verdict.config.cron.timezone == "UTC"


class TestRuleTranslationFailure:
    """Rule 5: a schedule that does not translate."""

    def test_unsupported_token_message_surfaces(self) -> None:
        verdict = classify(TimerFact(), ScheduleFact(day_of_month="Last"))

        assert isinstance(verdict, ManualRequired)
        assert len(verdict.reasons) == 1
        assert "dayOfMonth" in verdict.reasons[0]
        assert "'Last'" in verdict.reasons[0]

    @pytest.mark.parametrize(
        "schedule",
        [
            ScheduleFact(raw_expression="expr"),
            ScheduleFact(hour="2", minute="0", second="0", raw_expression="expr"),
            ScheduleFact(hour="banana", raw_expression="expr"),
        ],
    )
    def test_non_literal_always_manual(self, schedule: ScheduleFact) -> None:
        """Any raw expression forces a manual verdict whatever the fields say."""
        verdict = classify(TimerFact(timer_pattern=TimerPattern.CALENDAR), schedule)

        assert isinstance(verdict, ManualRequired)
        assert "not a static literal" in verdict.reasons[0]


class TestRuleProgrammatic:
    """Rules 6 and 7: no schedule at all."""

    @pytest.mark.parametrize("count", [0, 1])
    def test_programmatic_timer_is_partial(self, count: int) -> None:
        fact = TimerFact(
            timer_pattern=TimerPattern.INTERVAL,
            has_interval_timer=True,
            timeout_method_count=count,
        )

        verdict = classify(fact)

        assert isinstance(verdict, PartialAutomatic)
        assert verdict.reasons == (PROGRAMMATIC_TRIGGER_REASON,)
        assert verdict.config.cron is None
        assert verdict.config.persistent is True

    def test_programmatic_timer_keeps_data_map(self) -> None:
        verdict = classify(TimerFact(uses_timer_info=True))

        assert isinstance(verdict, PartialAutomatic)
        assert verdict.config.data_map == {"timerInfo": None}

    def test_several_timeout_methods_unclassified(self) -> None:
        verdict = classify(TimerFact(timeout_method_count=2))

        assert verdict == ManualRequired((UNCLASSIFIED_REASON,))


class TestProperties:
    """Whole-table guarantees."""

    def test_deterministic(self, nightly_schedule: ScheduleFact) -> None:
        fact = TimerFact(uses_timer_info=True, has_calendar_timer=True)

        assert classify(fact, nightly_schedule) == classify(fact, nightly_schedule)

    @pytest.mark.parametrize(
        "base",
        [
            TimerFact(uses_timer_handle=True),
            TimerFact(uses_timer_handle=True, dynamic_timer_creation=True),
            TimerFact(uses_timer_handle=True, timeout_method_count=3),
            TimerFact(uses_timer_handle=True, timer_pattern=TimerPattern.MIXED),
        ],
    )
    @pytest.mark.parametrize("schedule", [None, ScheduleFact(), ScheduleFact(hour="x")])
    def test_handle_escape_never_turns_manual_into_automatic(
        self, base: TimerFact, schedule: ScheduleFact | None
    ) -> None:
        """Flipping the escape flag on can only make things stricter."""
        escaped = replace(base, timer_handle_escapes=True)

        assert isinstance(classify(escaped, schedule), ManualRequired)
