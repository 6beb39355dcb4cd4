"""Engine module - parallel batch classification."""

from cronshift.engine.ops import EngineOptions, classify_unit, classify_units, iter_reports

__all__ = [
    "EngineOptions",
    "classify_unit",
    "classify_units",
    "iter_reports",
]
