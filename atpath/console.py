"""Shared Rich console instances for CLI output."""

from rich.console import Console

console = Console()

# Errors go to stderr so command output stays pipeable
error_console = Console(stderr=True)

__all__ = ["console", "error_console"]
