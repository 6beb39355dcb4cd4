"""cronshift classify command - classify a fact document."""

from pathlib import Path

import click
from rich.table import Table

from cronshift.config.loader import load_config
from cronshift.core.errors import CronShiftError
from cronshift.core.logging import bind_run, configure_logging
from cronshift.core.progress import get_console, pluralize, progress, status
from cronshift.engine.ops import EngineOptions, iter_reports
from cronshift.facts.loader import load_units
from cronshift.report.models import Report
from cronshift.report.render import RENDERERS, summarize

_STATUS_STYLES = {
    "automatic": "green",
    "partial-automatic": "yellow",
    "manual-required": "red",
    "error": "bold red",
}

EXIT_NEEDS_REVIEW = 2


@click.command()
@click.argument("facts", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(RENDERERS)),
    default=None,
    help="Report format (default: from config, json)",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the report here instead of stdout",
)
@click.option("--workers", type=int, default=None, help="Parallel classification workers")
@click.option(
    "--fail-on-manual",
    is_flag=True,
    help=f"Exit with {EXIT_NEEDS_REVIEW} when any unit needs manual migration",
)
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory holding .cronshift/config.yaml (default: current directory)",
)
@click.pass_context
def classify_command(
    ctx: click.Context,
    facts: Path,
    fmt: str | None,
    output: Path | None,
    workers: int | None,
    fail_on_manual: bool,
    project: Path | None,
) -> None:
    """Classify the timer facts in FACTS and emit migration reports.

    FACTS is a YAML or JSON fact document with a top-level 'units' list.
    """
    overrides = {"engine": {"max_workers": workers}} if workers is not None else {}
    try:
        config = load_config(project, **overrides)
        units = load_units(facts)
    except CronShiftError as e:
        raise click.ClickException(str(e)) from e

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    log_path = configure_logging(None if verbose else config.logging, level="DEBUG")
    bind_run()

    options = EngineOptions.from_config(config)
    ordered: list[Report | None] = [None] * len(units)
    for index, report in progress(
        iter_reports(units, options), desc="Classifying", total=len(units)
    ):
        ordered[index] = report
    reports = [r for r in ordered if r is not None]

    rendered = RENDERERS[fmt or config.report.format](reports)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered)
        status(f"Wrote {pluralize(len(reports), 'report')} to {output}", style="success")
    else:
        click.echo(rendered, nl=False)

    _print_summary(reports)

    if fail_on_manual and any(r.needs_review for r in reports):
        if log_path is not None:
            status(f"Details in {log_path}", style="info")
        ctx.exit(EXIT_NEEDS_REVIEW)


def _print_summary(reports: list[Report]) -> None:
    table = Table(title="Timer migration", title_justify="left", show_edge=False)
    table.add_column("Status")
    table.add_column("Units", justify="right")
    for name, count in summarize(reports).items():
        style = _STATUS_STYLES.get(name, "")
        table.add_row(f"[{style}]{name}[/{style}]" if style else name, str(count))
    get_console().print(table)
