"""Inspection commands: repository roots, references, resolution, suggestions."""

from __future__ import annotations

import sys

import click
from rich.table import Table

from ..console import console
from ..console import error_console
from ..lib.references import Suggester
from ..paths import locate_root
from ..paths import resolve_target
from ..paths import to_relative
from ..storage import CorpusError
from ..utils.error_format import escape_markup
from ..utils.error_format import format_error_message
from ..utils.mentions import extract_reference_path
from ..utils.mentions import find_references
from .context import CliState
from .context import fail
from .context import pass_state


def _read_document(state: CliState, path: str) -> str:
    try:
        return state.corpus.read(path)
    except (OSError, UnicodeError, CorpusError) as e:
        fail(f"cannot read {path}: {format_error_message(e)}")


@click.command(name="root")
@click.argument("path")
@pass_state
def root_cmd(state: CliState, path: str):
    """Show the repository root and relative path of PATH."""
    corpus_path = state.corpus_path(path)
    root = locate_root(corpus_path, state.marker)
    click.echo(f"root: {root if root else '(none)'}")
    click.echo(f"relative: {to_relative(corpus_path, root)}")


@click.command(name="refs")
@click.argument("file")
@click.option("--missing-only", is_flag=True, help="Only show references whose target does not exist")
@pass_state
def refs_cmd(state: CliState, file: str, missing_only: bool):
    """List @path references in FILE with their resolved targets."""
    path = state.corpus_path(file)
    content = _read_document(state, path)

    table = Table(title=f"References in {escape_markup(path)}")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Col", justify="right", style="dim")
    table.add_column("Reference", style="cyan")
    table.add_column("Target")
    table.add_column("Exists")

    rows = 0
    missing = 0
    for line_no, line in enumerate(content.splitlines(), start=1):
        for span in find_references(line):
            target = resolve_target(path, span.path, state.marker)
            exists = state.corpus.exists(target)
            if not exists:
                missing += 1
            if missing_only and exists:
                continue
            table.add_row(
                str(line_no),
                str(span.start + 1),
                escape_markup(span.text),
                escape_markup(target),
                "[green]yes[/green]" if exists else "[red]no[/red]",
            )
            rows += 1

    if rows == 0:
        console.print("[dim]No references found.[/dim]")
        return

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {rows} references, {missing} missing")


@click.command(name="resolve")
@click.argument("file")
@click.argument("capture")
@click.option("--no-check", is_flag=True, help="Print the target even if it does not exist")
@pass_state
def resolve_cmd(state: CliState, file: str, capture: str, no_check: bool):
    """Resolve reference CAPTURE as written in FILE to a corpus path."""
    path = state.corpus_path(file)
    target = resolve_target(path, extract_reference_path(capture), state.marker)
    click.echo(target)
    if not no_check and not state.corpus.exists(target):
        error_console.print(f"[yellow]Target does not exist:[/yellow] {escape_markup(target)}")
        sys.exit(1)


@click.command(name="suggest")
@click.argument("file")
@click.argument("query", required=False, default="")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum suggestions (default from settings)")
@pass_state
def suggest_cmd(state: CliState, file: str, query: str, limit: int | None):
    """Suggest reference targets for FILE matching QUERY."""
    suggester = Suggester(
        state.corpus,
        marker=state.marker,
        limit=limit or state.settings.get_suggestion_limit(),
    )
    suggestions = suggester.suggest(state.corpus_path(file), extract_reference_path(query))

    if not suggestions:
        console.print("[dim]No suggestions.[/dim]")
        return

    for suggestion in suggestions:
        click.echo(suggestion.completion_text.rstrip())
