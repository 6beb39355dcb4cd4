"""Classification - the ordered decision table.

Rules are evaluated top to bottom and the first match wins. The order is
load-bearing: a mixed pattern or an escaping handle must win over any
schedule that would otherwise translate cleanly.

| # | Guard                                            | Verdict           |
|---|--------------------------------------------------|-------------------|
| 1 | declared pattern is mixed                        | ManualRequired    |
| 2 | handle or schedule object escapes                | ManualRequired    |
| 3 | dynamic creation and no translatable schedule    | ManualRequired    |
| 4 | schedule present and translates                  | Automatic         |
| 5 | schedule present and fails to translate          | ManualRequired    |
| 6 | no schedule, at most one timeout method          | PartialAutomatic  |
| 7 | anything else                                    | ManualRequired    |
"""

from __future__ import annotations

from cronshift.analysis.escape import Unsafe, analyze_handle_escape, analyze_schedule_escape
from cronshift.classify.models import (
    DYNAMIC_CREATION_REASON,
    MIXED_PATTERN_REASON,
    PROGRAMMATIC_TRIGGER_REASON,
    UNCLASSIFIED_REASON,
    Automatic,
    ManualRequired,
    MigrationConfig,
    PartialAutomatic,
    Verdict,
)
from cronshift.config.constants import SYSTEM_TIMEZONE
from cronshift.core.errors import TranslationError
from cronshift.facts.models import ScheduleFact, TimerFact, TimerPattern
from cronshift.schedule.cron import CronExpression, translate


def classify(
    fact: TimerFact,
    schedule: ScheduleFact | None = None,
    *,
    default_timezone: str = SYSTEM_TIMEZONE,
) -> Verdict:
    """Decide how a unit's timers can be migrated.

    Pure: the verdict depends only on the arguments.
    """
    if fact.timer_pattern is TimerPattern.MIXED:
        return ManualRequired((MIXED_PATTERN_REASON,))

    escapes = (analyze_handle_escape(fact), analyze_schedule_escape(fact))
    escape_reasons = tuple(v.reason for v in escapes if isinstance(v, Unsafe))
    if escape_reasons:
        return ManualRequired(escape_reasons)

    cron: CronExpression | None = None
    translation_error: TranslationError | None = None
    if schedule is not None:
        try:
            cron = translate(schedule, default_timezone=default_timezone)
        except TranslationError as e:
            translation_error = e

    if fact.dynamic_timer_creation and cron is None:
        return ManualRequired((DYNAMIC_CREATION_REASON,))

    if schedule is not None and cron is not None:
        return Automatic(
            MigrationConfig(
                cron=cron,
                persistent=schedule.persistent,
                data_map=_data_map(fact, schedule),
            )
        )

    if translation_error is not None:
        return ManualRequired((translation_error.message,))

    if fact.timeout_method_count <= 1:
        return PartialAutomatic(
            MigrationConfig(cron=None, persistent=True, data_map=_data_map(fact, None)),
            (PROGRAMMATIC_TRIGGER_REASON,),
        )

    return ManualRequired((UNCLASSIFIED_REASON,))


def _data_map(fact: TimerFact, schedule: ScheduleFact | None) -> dict[str, str | None]:
    """Job data replacing ``Timer.getInfo()`` plus the extractor's notes."""
    data: dict[str, str | None] = {}
    if fact.uses_timer_info:
        data["timerInfo"] = (schedule.info if schedule else "") or None
    notes = fact.migration_notes.strip()
    if notes:
        data["migrationNotes"] = notes
    return data
