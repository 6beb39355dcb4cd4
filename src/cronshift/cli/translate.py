"""cronshift translate command - translate one schedule to cron."""

import json

import click

from cronshift.core.errors import TranslationError
from cronshift.facts.models import ScheduleFact
from cronshift.schedule.cron import translate


@click.command()
@click.option("--second", default="0", show_default=True)
@click.option("--minute", default="0", show_default=True)
@click.option("--hour", default="0", show_default=True)
@click.option("--day-of-month", "day_of_month", default="*", show_default=True)
@click.option("--month", default="*", show_default=True)
@click.option("--day-of-week", "day_of_week", default="*", show_default=True)
@click.option("--year", default="*", show_default=True)
@click.option("--timezone", default="", help="Schedule timezone (default: system)")
@click.option("--raw", "raw_expression", default="", help="Unresolved raw schedule expression")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def translate_command(
    second: str,
    minute: str,
    hour: str,
    day_of_month: str,
    month: str,
    day_of_week: str,
    year: str,
    timezone: str,
    raw_expression: str,
    as_json: bool,
) -> None:
    """Translate @Schedule fields into a Quartz cron expression.

    Defaults match the EJB schedule defaults (midnight every day).
    """
    schedule = ScheduleFact(
        second=second,
        minute=minute,
        hour=hour,
        day_of_month=day_of_month,
        month=month,
        day_of_week=day_of_week,
        year=year,
        timezone=timezone,
        raw_expression=raw_expression,
    )
    try:
        cron = translate(schedule)
    except TranslationError as e:
        if as_json:
            click.echo(json.dumps(e.to_dict()))
            raise SystemExit(1) from e
        raise click.ClickException(e.message) from e

    if as_json:
        click.echo(
            json.dumps(
                {
                    "cron": cron.quartz_expression,
                    "expression": cron.expression,
                    "timezone": cron.timezone,
                    "fields": cron.schedule_fields(),
                }
            )
        )
    else:
        click.echo(f"{cron.quartz_expression}  ({cron.timezone})")
