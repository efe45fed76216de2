"""Shared state handed from the root CLI group to its commands."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import click

from ..console import error_console
from ..lib.settings import AppSettings
from ..storage import CorpusError
from ..storage import FileSystemCorpus
from ..storage import create_corpus
from ..utils.error_format import escape_markup
from ..utils.error_format import format_error_message


def fail(error: BaseException | str) -> NoReturn:
    """Print a red error line to stderr and exit with status 1."""
    message = error if isinstance(error, str) else format_error_message(error)
    error_console.print(f"[red]Error:[/red] {escape_markup(message)}")
    sys.exit(1)


@dataclass
class CliState:
    """Corpus and settings for one CLI invocation."""

    settings: AppSettings
    root: Path
    _corpus: FileSystemCorpus | None = None

    @property
    def corpus(self) -> FileSystemCorpus:
        if self._corpus is None:
            self._corpus = create_corpus(self.settings, self.root)
        return self._corpus

    @property
    def marker(self) -> str:
        return self.settings.get_marker()

    def corpus_path(self, value: str) -> str:
        """Normalize a CLI path argument to a corpus path, exiting on bad input."""
        try:
            return self.to_corpus_path(value)
        except CorpusError as e:
            fail(e)

    def to_corpus_path(self, value: str) -> str:
        """Normalize a CLI path argument to a corpus path.

        Absolute filesystem paths are converted relative to the corpus root;
        anything else is already a corpus path.

        Raises:
            CorpusError: If the path is outside the corpus or names its root
        """
        if Path(value).is_absolute():
            normalized = self.corpus.to_corpus_path(Path(value))
        else:
            normalized = value.replace("\\", "/")
            while normalized.startswith("./"):
                normalized = normalized[2:]
            normalized = normalized.rstrip("/")
        if not normalized or normalized == ".":
            raise CorpusError(f"Path names the corpus root, not an entry: {value!r}")
        return normalized


pass_state = click.make_pass_decorator(CliState)
