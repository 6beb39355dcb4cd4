"""CronShift error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Translation
- 4xxx: Classification
- 5xxx: Facts
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Translation (3xxx)
    NON_LITERAL_SCHEDULE = 3001
    UNSUPPORTED_TOKEN = 3002

    # Classification (4xxx)
    UNCLASSIFIED_PATTERN = 4001

    # Facts (5xxx)
    FACT_PARSE_ERROR = 5001
    FACT_INVALID = 5002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CronShiftError(Exception):
    """Base error with structured context for reports and CLI output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'UNSUPPORTED_TOKEN')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON reports."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CronShiftError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class TranslationError(CronShiftError):
    """A schedule could not be translated into a cron expression.

    The message is what ends up verbatim in a manual-required report, so it
    carries the offending field and value as written in the source.
    """

    @classmethod
    def non_literal(cls, raw_expression: str) -> "TranslationError":
        return cls(
            code=ErrorCode.NON_LITERAL_SCHEDULE,
            message=f"schedule is not a static literal: {raw_expression}",
            details={"raw_expression": raw_expression},
        )

    @classmethod
    def unsupported_token(cls, field: str, value: str, reason: str) -> "TranslationError":
        return cls(
            code=ErrorCode.UNSUPPORTED_TOKEN,
            message=f"unsupported token in {field}: '{value}' ({reason})",
            details={"field": field, "value": value, "reason": reason},
        )


class ClassificationError(CronShiftError):
    """No decision rule produced a verdict for a unit."""

    @classmethod
    def unclassified(cls, unit: str, reason: str) -> "ClassificationError":
        return cls(
            code=ErrorCode.UNCLASSIFIED_PATTERN,
            message=f"Unclassified timer pattern for {unit}: {reason}",
            details={"unit": unit, "reason": reason},
        )


class FactError(CronShiftError):
    """Fact document could not be read or failed validation."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "FactError":
        return cls(
            code=ErrorCode.FACT_PARSE_ERROR,
            message=f"Failed to parse facts at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid(cls, unit: str, field: str, reason: str) -> "FactError":
        return cls(
            code=ErrorCode.FACT_INVALID,
            message=f"Invalid fact '{field}' for unit {unit}: {reason}",
            details={"unit": unit, "field": field, "reason": reason},
        )


class InternalError(CronShiftError):
    """A unit failed for a reason outside the decision rules."""

    @classmethod
    def unexpected(cls, unit: str, exc: BaseException) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {exc}",
            details={"unit": unit, "exception": type(exc).__name__},
        )
