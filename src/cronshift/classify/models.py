"""Classification models - migration verdicts."""

from __future__ import annotations

from dataclasses import dataclass, field

from cronshift.schedule.cron import CronExpression

MIXED_PATTERN_REASON = "mixed timer creation patterns require manual job-trigger mapping"
DYNAMIC_CREATION_REASON = "dynamic timer creation without static schedule"
PROGRAMMATIC_TRIGGER_REASON = "manual Trigger configuration needed for programmatic timers"
UNCLASSIFIED_REASON = "unclassified timer usage pattern"


@dataclass(frozen=True, slots=True)
class MigrationConfig:
    """Scheduler configuration derived from the facts.

    ``cron`` is None for programmatic timers, whose trigger cannot be
    recovered from static facts.
    """

    cron: CronExpression | None
    persistent: bool = True
    data_map: dict[str, str | None] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Automatic:
    """Job and trigger can be generated without review."""

    config: MigrationConfig


@dataclass(frozen=True, slots=True)
class PartialAutomatic:
    """Job can be generated; the trigger needs a human."""

    config: MigrationConfig
    reasons: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ManualRequired:
    """Migration must be done by hand; reasons are kept in the order found."""

    reasons: tuple[str, ...]


Verdict = Automatic | PartialAutomatic | ManualRequired
