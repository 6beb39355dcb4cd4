"""Facts module - immutable timer/schedule observations and their loader."""

from cronshift.facts.loader import load_units, parse_units
from cronshift.facts.models import (
    SCHEDULE_FIELDS,
    WILDCARD,
    MigrationUnit,
    ScheduleFact,
    TimerFact,
    TimerPattern,
    derived_pattern,
)

__all__ = [
    "SCHEDULE_FIELDS",
    "WILDCARD",
    "MigrationUnit",
    "ScheduleFact",
    "TimerFact",
    "TimerPattern",
    "derived_pattern",
    "load_units",
    "parse_units",
]
