"""CronShift CLI - cronshift command."""

import click

from cronshift.cli.classify import classify_command
from cronshift.cli.init import init_command
from cronshift.cli.translate import translate_command
from cronshift.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="cronshift")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """CronShift - classify EJB timers for migration to a Quartz scheduler."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(classify_command, name="classify")
cli.add_command(translate_command, name="translate")
cli.add_command(init_command, name="init")


if __name__ == "__main__":
    cli()
