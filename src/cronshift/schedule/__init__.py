"""Schedule module - literal schedule to cron translation."""

from cronshift.schedule.cron import NO_SPECIFIC_VALUE, CronExpression, translate

__all__ = [
    "NO_SPECIFIC_VALUE",
    "CronExpression",
    "translate",
]
