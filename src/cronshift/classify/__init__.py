"""Classify module - migration verdicts for timer facts."""

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
from cronshift.classify.ops import classify

__all__ = [
    "DYNAMIC_CREATION_REASON",
    "MIXED_PATTERN_REASON",
    "PROGRAMMATIC_TRIGGER_REASON",
    "UNCLASSIFIED_REASON",
    "Automatic",
    "ManualRequired",
    "MigrationConfig",
    "PartialAutomatic",
    "Verdict",
    "classify",
]
