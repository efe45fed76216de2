"""atpath CLI - inspect and maintain @path references in a document corpus."""

import logging
from pathlib import Path

import click

from .commands.config import config_group
from .commands.context import CliState
from .commands.refs import refs_cmd
from .commands.refs import resolve_cmd
from .commands.refs import root_cmd
from .commands.refs import suggest_cmd
from .commands.rename import mv_cmd
from .commands.rename import propagate_cmd
from .lib.settings import AppSettings
from .logging_setup import init_json_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="atpath")
@click.option(
    "--root",
    "root_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Corpus top directory (default: current directory)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Append JSONL logs to this file",
)
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level")
@click.pass_context
def cli(ctx: click.Context, root_dir: Path | None, log_file: Path | None, verbose: bool):
    """atpath - keep @path/to/file references resolvable as files move.

    Paths are corpus paths relative to --root; absolute paths are converted.
    """
    if log_file is not None:
        init_json_logging(log_file, "DEBUG" if verbose else None)

    root = (root_dir or Path.cwd()).resolve()
    ctx.obj = CliState(settings=AppSettings(), root=root)
    logger.debug(f"Corpus root: {root}")


cli.add_command(root_cmd)
cli.add_command(refs_cmd)
cli.add_command(resolve_cmd)
cli.add_command(suggest_cmd)
cli.add_command(mv_cmd)
cli.add_command(propagate_cmd)
cli.add_command(config_group)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
