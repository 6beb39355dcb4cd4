"""Escape analysis over timer facts.

A timer handle or schedule object "escapes" when it is used outside the
scope where an automatic rewrite can still account for every use of it.
Each axis is judged on its own; a failure on one never hides the other.
"""

from __future__ import annotations

from dataclasses import dataclass

from cronshift.facts.models import TimerFact, TimerPattern, derived_pattern

HANDLE_ESCAPE_REASON = "handle lifetime not provably local"
SCHEDULE_ESCAPE_REASON = "schedule object lifetime not provably local"


@dataclass(frozen=True, slots=True)
class Safe:
    """Every use stays within a provably local scope."""


@dataclass(frozen=True, slots=True)
class Unsafe:
    """At least one use crosses a scope the rewrite cannot follow."""

    reason: str


EscapeVerdict = Safe | Unsafe


def analyze_handle_escape(fact: TimerFact) -> EscapeVerdict:
    """Judge ``Timer.getHandle()`` / ``TimerHandle`` usage.

    Safe when no handle is used, or when a handle is used but is neither
    stored, returned or passed on, nor injected into the timeout callback.
    """
    if not fact.uses_timer_handle:
        return Safe()
    if fact.timer_handle_escapes or fact.uses_timer_handle_param_in_timeout:
        return Unsafe(HANDLE_ESCAPE_REASON)
    return Safe()


def analyze_schedule_escape(fact: TimerFact) -> EscapeVerdict:
    """Judge ``Timer.getSchedule()`` usage.

    Safe when the schedule is never introspected, or only inside the
    callback without being passed along or returned.
    """
    if not fact.uses_timer_get_schedule:
        return Safe()
    if fact.timer_get_schedule_escapes:
        return Unsafe(SCHEDULE_ESCAPE_REASON)
    return Safe()


def pattern_advisories(fact: TimerFact) -> list[str]:
    """Report disagreement between the declared pattern and the creation APIs seen.

    The declared pattern stays authoritative for classification; these are
    hints for the reviewer only.
    """
    observed = derived_pattern(fact)
    declared = fact.timer_pattern
    if observed is TimerPattern.UNKNOWN or declared is TimerPattern.UNKNOWN:
        return []
    if observed is declared:
        return []
    return [
        f"declared timer pattern '{declared.value}' disagrees with observed "
        f"creation calls ('{observed.value}')"
    ]
