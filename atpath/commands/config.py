"""Settings commands: show, set and unset atpath configuration values."""

from __future__ import annotations

from typing import cast

import click
import yaml

from ..console import console
from ..lib.settings import Scope
from ..utils.error_format import escape_markup
from .context import CliState
from .context import fail
from .context import pass_state

KNOWN_KEYS = ("marker", "suggestion_limit", "document_suffixes", "ignore_hidden")


def _check_key(key: str) -> None:
    if key not in KNOWN_KEYS:
        fail(f"Unknown setting {key!r} (expected one of: {', '.join(KNOWN_KEYS)})")


@click.group(name="config")
def config_group():
    """Show and change atpath settings."""


@config_group.command("show")
@pass_state
def config_show(state: CliState):
    """Show effective settings after merging scopes and environment."""
    settings = state.settings
    console.print(f"marker: {escape_markup(settings.get_marker())}")
    console.print(f"suggestion_limit: {settings.get_suggestion_limit()}")
    console.print(f"document_suffixes: {escape_markup(', '.join(settings.get_document_suffixes()))}")
    console.print(f"ignore_hidden: {str(settings.get_ignore_hidden()).lower()}")


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--local", "scope_flag", flag_value="local", help="Machine-local project settings")
@click.option("--project", "scope_flag", flag_value="project", help="Project settings (default)")
@click.option("--global", "scope_flag", flag_value="global", help="User settings (~/.atpath/settings.yaml)")
@pass_state
def config_set(state: CliState, key: str, value: str, scope_flag: str | None):
    """Set KEY to VALUE (parsed as YAML) in a settings scope."""
    _check_key(key)
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError as e:
        fail(f"Invalid value for {key}: {e}")

    scope = cast(Scope, scope_flag or "project")
    state.settings.set_value(key, parsed, scope=scope)
    console.print(f"[green]✓[/green] Set {key} at {scope} scope")


@config_group.command("unset")
@click.argument("key")
@click.option("--local", "scope_flag", flag_value="local", help="Machine-local project settings")
@click.option("--project", "scope_flag", flag_value="project", help="Project settings (default)")
@click.option("--global", "scope_flag", flag_value="global", help="User settings (~/.atpath/settings.yaml)")
@pass_state
def config_unset(state: CliState, key: str, scope_flag: str | None):
    """Remove KEY from a settings scope."""
    _check_key(key)
    scope = cast(Scope, scope_flag or "project")
    state.settings.remove_value(key, scope=scope)
    console.print(f"[green]✓[/green] Removed {key} from {scope} scope")
