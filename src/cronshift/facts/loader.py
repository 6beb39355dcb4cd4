"""Fact document loading.

A fact document is YAML (or JSON, which the YAML loader reads too)::

    units:
      - name: com.example.ReportTimer
        timer:
          timerPattern: single
          hasSingleTimer: true
        schedule:
          hour: "2"

Keys follow the marker annotation attribute names (camelCase); snake_case
is accepted as well. Validation is strict: unknown keys are rejected so a
typo never silently turns into a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from cronshift.core.errors import FactError
from cronshift.facts.models import MigrationUnit, ScheduleFact, TimerFact, TimerPattern


class _FactParams(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class TimerParams(_FactParams):
    """``EjbQuartzTimerService`` attributes."""

    timer_pattern: str = ""
    uses_timer_info: bool = False
    dynamic_timer_creation: bool = False
    timeout_method_count: int = Field(default=0, ge=0)
    uses_timer_handle: bool = False
    timer_handle_escapes: bool = False
    uses_timer_handle_param_in_timeout: bool = False
    uses_timer_get_schedule: bool = False
    timer_get_schedule_escapes: bool = False
    has_single_timer: bool = False
    has_interval_timer: bool = False
    has_calendar_timer: bool = False
    migration_notes: str = ""

    @field_validator("timer_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        allowed = {p.value for p in TimerPattern}
        if v and v.strip().lower() not in allowed:
            raise ValueError(f"must be one of {', '.join(sorted(allowed))}")
        return v

    def to_fact(self) -> TimerFact:
        data = self.model_dump()
        data["timer_pattern"] = TimerPattern.parse(self.timer_pattern)
        return TimerFact(**data)


class ScheduleParams(_FactParams):
    """``EjbQuartzSchedule`` attributes."""

    second: str = "0"
    minute: str = "0"
    hour: str = "0"
    day_of_month: str = "*"
    month: str = "*"
    day_of_week: str = "*"
    year: str = "*"
    timezone: str = ""
    info: str = ""
    persistent: bool = True
    raw_expression: str = ""
    method_name: str | None = None

    def to_fact(self) -> ScheduleFact:
        return ScheduleFact(**self.model_dump())


class UnitParams(_FactParams):
    name: str = Field(min_length=1)
    timer: TimerParams = Field(default_factory=TimerParams)
    schedule: ScheduleParams | None = None

    def to_unit(self) -> MigrationUnit:
        return MigrationUnit(
            name=self.name,
            timer=self.timer.to_fact(),
            schedule=self.schedule.to_fact() if self.schedule else None,
        )


def parse_units(document: Any, *, source: str = "<facts>") -> list[MigrationUnit]:
    """Validate a decoded fact document into migration units.

    Raises:
        FactError: On structural problems, invalid fields or duplicate names.
    """
    if not isinstance(document, dict) or not isinstance(document.get("units"), list):
        raise FactError.parse_error(source, "document must be a mapping with a 'units' list")

    units: list[MigrationUnit] = []
    seen: set[str] = set()
    for index, raw in enumerate(document["units"]):
        label = raw.get("name", f"#{index}") if isinstance(raw, dict) else f"#{index}"
        try:
            params = UnitParams.model_validate(raw)
        except ValidationError as e:
            err = e.errors()[0]
            field = ".".join(str(loc) for loc in err["loc"]) or "unit"
            raise FactError.invalid(str(label), field, err["msg"]) from e

        if params.name in seen:
            raise FactError.invalid(params.name, "name", "duplicate unit name")
        seen.add(params.name)
        units.append(params.to_unit())

    return units


def load_units(path: Path) -> list[MigrationUnit]:
    """Read and validate a fact document from disk."""
    try:
        with path.open(encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise FactError.parse_error(str(path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise FactError.parse_error(str(path), f"not valid UTF-8 at byte {e.start}") from e
    except yaml.YAMLError as e:
        raise FactError.parse_error(str(path), str(e)) from e

    return parse_units(document, source=str(path))
