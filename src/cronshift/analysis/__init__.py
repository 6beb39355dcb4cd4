"""Analysis module - escape rules over timer facts."""

from cronshift.analysis.escape import (
    HANDLE_ESCAPE_REASON,
    SCHEDULE_ESCAPE_REASON,
    EscapeVerdict,
    Safe,
    Unsafe,
    analyze_handle_escape,
    analyze_schedule_escape,
    pattern_advisories,
)

__all__ = [
    "HANDLE_ESCAPE_REASON",
    "SCHEDULE_ESCAPE_REASON",
    "EscapeVerdict",
    "Safe",
    "Unsafe",
    "analyze_handle_escape",
    "analyze_schedule_escape",
    "pattern_advisories",
]
