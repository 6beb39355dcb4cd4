"""Translate literal ``@Schedule`` fields into a Quartz cron expression.

Accepted grammar per field: ``*``, a number or name in the field's domain,
a range ``a-b``, a step ``a/b`` or ``*/b``, or a comma-separated list of
numbers, names, ranges and steps. Anything else (``Last``, ``1st Mon``,
negative offsets, wrapping ranges) is rejected, so a successful translation
is always a faithful one.

Weekdays are always rendered as names: the EJB numbering (0 and 7 are
Sunday) and the Quartz numbering (1 is Sunday) disagree, names do not.
A weekday step is expanded into the list of days it selects.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cronshift.config.constants import SYSTEM_TIMEZONE
from cronshift.core.errors import TranslationError
from cronshift.facts.models import SCHEDULE_FIELDS, WILDCARD, ScheduleFact

NO_SPECIFIC_VALUE = "?"

_MONTH_NAMES = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")
_DOW_NAMES = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")


@dataclass(frozen=True, slots=True)
class _FieldDomain:
    low: int
    high: int
    names: dict[str, int] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return self.high - self.low + 1


_DOMAINS: dict[str, _FieldDomain] = {
    "second": _FieldDomain(0, 59),
    "minute": _FieldDomain(0, 59),
    "hour": _FieldDomain(0, 23),
    "dayOfMonth": _FieldDomain(1, 31),
    "month": _FieldDomain(1, 12, {name: i + 1 for i, name in enumerate(_MONTH_NAMES)}),
    "dayOfWeek": _FieldDomain(0, 7, {name: i for i, name in enumerate(_DOW_NAMES)}),
    "year": _FieldDomain(1970, 2099),
}


@dataclass(frozen=True, slots=True)
class CronExpression:
    """Seven-field Quartz cron expression plus the zone it fires in."""

    second: str
    minute: str
    hour: str
    day_of_month: str
    month: str
    day_of_week: str
    year: str = WILDCARD
    timezone: str = SYSTEM_TIMEZONE

    def __str__(self) -> str:
        return " ".join(self._parts())

    def _parts(self) -> tuple[str, ...]:
        return (
            self.second,
            self.minute,
            self.hour,
            self.day_of_month,
            self.month,
            self.day_of_week,
            self.year,
        )

    @property
    def expression(self) -> str:
        return str(self)

    @property
    def quartz_expression(self) -> str:
        """Six fields when the year is unrestricted, seven otherwise."""
        parts = self._parts()
        if self.year == WILDCARD:
            parts = parts[:-1]
        return " ".join(parts)

    def schedule_fields(self) -> dict[str, str]:
        """Field set in schedule terms: the ``?`` placeholder reads back as ``*``."""
        return {
            name: WILDCARD if value == NO_SPECIFIC_VALUE else value
            for name, value in zip(SCHEDULE_FIELDS, self._parts(), strict=True)
        }

    @classmethod
    def parse(cls, text: str, timezone: str = SYSTEM_TIMEZONE) -> CronExpression:
        """Read back a six- or seven-field expression produced by ``translate``."""
        parts = text.split()
        if len(parts) == 6:
            parts.append(WILDCARD)
        if len(parts) != 7:
            raise ValueError(f"Expected 6 or 7 cron fields, got {len(parts)}: {text!r}")
        return cls(*parts, timezone=timezone)


def translate(schedule: ScheduleFact, *, default_timezone: str = SYSTEM_TIMEZONE) -> CronExpression:
    """Translate a literal schedule into a cron expression.

    Raises:
        TranslationError: ``NON_LITERAL_SCHEDULE`` when the extractor recorded a
            raw expression, ``UNSUPPORTED_TOKEN`` for any field outside the grammar.
    """
    if not schedule.is_literal:
        raise TranslationError.non_literal(schedule.raw_expression)

    rendered = {
        name: _translate_field(name, value) for name, value in schedule.fields().items()
    }

    day_of_month = rendered["dayOfMonth"]
    day_of_week = rendered["dayOfWeek"]
    if day_of_week == WILDCARD:
        day_of_week = NO_SPECIFIC_VALUE
    elif day_of_month == WILDCARD:
        day_of_month = NO_SPECIFIC_VALUE
    else:
        raise TranslationError.unsupported_token(
            "dayOfWeek",
            schedule.day_of_week,
            "cannot restrict dayOfMonth and dayOfWeek in the same trigger",
        )

    return CronExpression(
        second=rendered["second"],
        minute=rendered["minute"],
        hour=rendered["hour"],
        day_of_month=day_of_month,
        month=rendered["month"],
        day_of_week=day_of_week,
        year=rendered["year"],
        timezone=schedule.timezone.strip() or default_timezone,
    )


def _translate_field(name: str, raw: str) -> str:
    value = raw.strip()
    if value == WILDCARD:
        return WILDCARD
    if not value:
        raise TranslationError.unsupported_token(name, raw, "empty value")
    return ",".join(_translate_item(name, raw, item.strip()) for item in value.split(","))


def _translate_item(name: str, raw: str, item: str) -> str:
    domain = _DOMAINS[name]

    if "/" in item:
        start, _, step = item.partition("/")
        limit = len(_DOW_NAMES) if name == "dayOfWeek" else domain.size
        if not _is_number(step) or not (1 <= int(step) <= limit):
            raise TranslationError.unsupported_token(
                name, raw, f"step must be 1-{limit}, got '{step}'"
            )
        first = domain.low if start == WILDCARD else _value(name, raw, start)
        if name == "dayOfWeek":
            # Quartz reads NAME/n as NAME alone; spell the days out instead
            days = dict.fromkeys(
                _DOW_NAMES[n % 7] for n in range(first, domain.high + 1, int(step))
            )
            return ",".join(days)
        if start == WILDCARD:
            return f"{WILDCARD}/{int(step)}"
        # numeric start: a leading month name would drop the increment
        return f"{first}/{int(step)}"

    if "-" in item:
        start, _, end = item.partition("-")
        low = _value(name, raw, start)
        high = _value(name, raw, end)
        if low > high:
            raise TranslationError.unsupported_token(
                name, raw, f"range start {start} is after range end {end}"
            )
        if name == "dayOfWeek" and high == 7:
            # 7 is Sunday again; split it off so the range stays ascending
            if low in (0, 7):
                return "SUN-SAT" if low == 0 else "SUN"
            return f"{_DOW_NAMES[low]}-SAT,SUN"
        return f"{_render(name, start, low)}-{_render(name, end, high)}"

    return _render(name, item, _value(name, raw, item))


def _value(name: str, raw: str, token: str) -> int:
    domain = _DOMAINS[name]
    if _is_number(token):
        number = int(token)
    elif token.upper() in domain.names:
        number = domain.names[token.upper()]
    else:
        raise TranslationError.unsupported_token(name, raw, f"'{token}' is not a literal value")

    if not (domain.low <= number <= domain.high):
        raise TranslationError.unsupported_token(
            name, raw, f"{number} is outside {domain.low}-{domain.high}"
        )
    return number


def _render(name: str, token: str, number: int) -> str:
    if name == "dayOfWeek":
        return _DOW_NAMES[number % 7]
    if _is_number(token):
        return str(number)
    return token.upper()


def _is_number(token: str) -> bool:
    return token.isascii() and token.isdigit()
