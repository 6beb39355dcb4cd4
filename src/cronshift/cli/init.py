"""cronshift init command - write a project config file."""

from pathlib import Path

import click

from cronshift.config.constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME
from cronshift.config.loader import write_config_template
from cronshift.core.progress import status


@click.command()
@click.argument(
    "path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def init_command(path: Path, force: bool) -> None:
    """Create .cronshift/config.yaml with documented defaults.

    PATH is the project directory (default: current directory).
    """
    config_path = path.resolve() / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if config_path.exists() and not force:
        status(f"Already initialized: {config_path}", style="info")
        status("Use --force to overwrite", style="info")
        return

    write_config_template(config_path)
    status(f"Wrote {config_path}", style="success")
