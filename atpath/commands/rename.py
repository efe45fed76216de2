"""Rename commands: move entries and keep @path references pointing at them."""

from __future__ import annotations

import sys

import click

from ..console import console
from ..console import error_console
from ..events import DocumentRewritten
from ..events import DocumentUpdateFailed
from ..events import EventBus
from ..events.schemas import CorpusEvent
from ..lib.references import RenameHook
from ..lib.references import RenamePropagator
from ..models import PropagationReport
from ..models import RenameEvent
from ..storage import CorpusError
from ..utils.error_format import escape_markup
from .context import CliState
from .context import fail
from .context import pass_state


def _print_event(event: CorpusEvent, config: object = None) -> None:
    if isinstance(event, DocumentRewritten):
        console.print(f"  [green]✓[/green] {escape_markup(event.path)} [dim]({event.replacements} refs)[/dim]")
    elif isinstance(event, DocumentUpdateFailed):
        detail = f"{event.operation} failed: {escape_markup(event.message)}"
        error_console.print(f"  [red]✗[/red] {escape_markup(event.path)} [dim]({detail})[/dim]")


def _print_summary(report: PropagationReport, dry_run: bool) -> None:
    verb = "would update" if dry_run else "updated"
    if not report.updated and not report.errors:
        console.print("[dim]No references to update.[/dim]")
        return
    console.print(
        f"\n[bold]{verb.capitalize()}:[/bold] {len(report.updated)} documents, "
        f"{report.replacements} references"
    )
    if report.errors:
        error_console.print(f"[yellow]{len(report.errors)} documents could not be updated[/yellow]")


@click.command(name="mv")
@click.argument("old")
@click.argument("new")
@click.option("--dry-run", is_flag=True, help="Report documents that would change without moving or writing")
@pass_state
def mv_cmd(state: CliState, old: str, new: str, dry_run: bool):
    """Move OLD to NEW and rewrite every @path reference to it."""
    old_path = state.corpus_path(old)
    new_path = state.corpus_path(new)
    corpus = state.corpus

    if not corpus.exists(old_path):
        fail(f"{old_path} does not exist")

    bus = EventBus()
    bus.subscribe(_print_event)
    propagator = RenamePropagator(corpus, marker=state.marker, event_bus=bus, dry_run=dry_run)

    if dry_run:
        event = RenameEvent(old_path=old_path, new_path=new_path, is_folder=corpus.is_folder(old_path))
        _print_summary(propagator.propagate(event), dry_run=True)
        return

    try:
        corpus.move(old_path, new_path)
    except (OSError, CorpusError) as e:
        fail(e)

    console.print(f"[cyan]Moved[/cyan] {escape_markup(old_path)} → {escape_markup(new_path)}")
    hook = RenameHook(propagator, bus)
    hook.notify_rename(new_path, old_path)
    if not hook.reports:
        fail(f"Propagation failed for {old_path}")
    report = hook.reports[-1]
    _print_summary(report, dry_run=False)
    if not report.ok:
        sys.exit(1)


@click.command(name="propagate")
@click.argument("old")
@click.argument("new")
@click.option(
    "--folder/--file",
    "is_folder",
    default=None,
    help="Kind of entry that moved (default: detect from NEW)",
)
@click.option("--dry-run", is_flag=True, help="Report documents that would change without writing")
@pass_state
def propagate_cmd(state: CliState, old: str, new: str, is_folder: bool | None, dry_run: bool):
    """Rewrite references after OLD was already moved to NEW."""
    old_path = state.corpus_path(old)
    new_path = state.corpus_path(new)
    corpus = state.corpus

    if is_folder is None:
        event = RenameEvent.from_corpus(corpus, old_path, new_path)
    else:
        event = RenameEvent(old_path=old_path, new_path=new_path, is_folder=is_folder)

    bus = EventBus()
    bus.subscribe(_print_event)
    report = RenamePropagator(corpus, marker=state.marker, event_bus=bus, dry_run=dry_run).propagate(event)
    _print_summary(report, dry_run=dry_run)
    if not report.ok:
        sys.exit(1)
