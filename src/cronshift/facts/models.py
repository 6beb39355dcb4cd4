"""Fact models - what an upstream extractor observed about a unit's timers.

Facts mirror the two marker annotations left on migrated sources:
``EjbQuartzTimerService`` (class level, TimerService usage) and
``EjbQuartzSchedule`` (method level, one ``@Schedule``). They are immutable
and carry no behavior beyond small derived views.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

WILDCARD = "*"

# Order matters: this is the seven-field cron order.
SCHEDULE_FIELDS: tuple[str, ...] = (
    "second",
    "minute",
    "hour",
    "dayOfMonth",
    "month",
    "dayOfWeek",
    "year",
)


class TimerPattern(Enum):
    """Declared timer creation pattern of a class."""

    INTERVAL = "interval"
    SINGLE = "single"
    CALENDAR = "calendar"
    MIXED = "mixed"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> TimerPattern:
        """Parse a pattern name; empty means unknown."""
        if not value:
            return cls.UNKNOWN
        return cls(value.strip().lower())


@dataclass(frozen=True, slots=True)
class TimerFact:
    """TimerService usage observed in one class."""

    timer_pattern: TimerPattern = TimerPattern.UNKNOWN
    uses_timer_info: bool = False
    dynamic_timer_creation: bool = False
    timeout_method_count: int = 0

    # Handle lifecycle
    uses_timer_handle: bool = False
    timer_handle_escapes: bool = False
    uses_timer_handle_param_in_timeout: bool = False

    # Schedule introspection (Timer.getSchedule())
    uses_timer_get_schedule: bool = False
    timer_get_schedule_escapes: bool = False

    # Creation API usage, any combination may be set
    has_single_timer: bool = False
    has_interval_timer: bool = False
    has_calendar_timer: bool = False

    migration_notes: str = ""  # advisory only

    def __post_init__(self) -> None:
        if self.timeout_method_count < 0:
            raise ValueError(
                f"timeout_method_count must be non-negative, got {self.timeout_method_count}"
            )


@dataclass(frozen=True, slots=True)
class ScheduleFact:
    """One ``@Schedule`` declaration.

    Calendar defaults follow the EJB schedule defaults (midnight every day).
    A non-empty ``raw_expression`` means the extractor could not resolve the
    fields statically; the calendar fields are then unreliable.
    """

    second: str = "0"
    minute: str = "0"
    hour: str = "0"
    day_of_month: str = WILDCARD
    month: str = WILDCARD
    day_of_week: str = WILDCARD
    year: str = WILDCARD
    timezone: str = ""
    info: str = ""
    persistent: bool = True
    raw_expression: str = ""
    method_name: str | None = None

    @property
    def is_literal(self) -> bool:
        return not self.raw_expression.strip()

    def fields(self) -> dict[str, str]:
        """Calendar fields keyed by their schedule attribute names, in cron order."""
        return {
            "second": self.second,
            "minute": self.minute,
            "hour": self.hour,
            "dayOfMonth": self.day_of_month,
            "month": self.month,
            "dayOfWeek": self.day_of_week,
            "year": self.year,
        }


@dataclass(frozen=True, slots=True)
class MigrationUnit:
    """A named unit of work: one class's timer facts plus its schedule, if any."""

    name: str
    timer: TimerFact
    schedule: ScheduleFact | None = None

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]


def derived_pattern(fact: TimerFact) -> TimerPattern:
    """Pattern implied by the creation-API booleans alone."""
    observed = [
        pattern
        for pattern, used in (
            (TimerPattern.SINGLE, fact.has_single_timer),
            (TimerPattern.INTERVAL, fact.has_interval_timer),
            (TimerPattern.CALENDAR, fact.has_calendar_timer),
        )
        if used
    ]
    if not observed:
        return TimerPattern.UNKNOWN
    if len(observed) == 1:
        return observed[0]
    return TimerPattern.MIXED
