"""Corpus capability required by the reference engine.

The engine never touches the filesystem directly. Hosts hand it an object
implementing CorpusProtocol, which keeps the core testable in memory.
"""

from __future__ import annotations

from typing import Protocol
from typing import runtime_checkable


class CorpusError(Exception):
    """Raised when the corpus cannot satisfy a request (bad path, missing source)."""


@runtime_checkable
class CorpusProtocol(Protocol):
    """Protocol defining the corpus interface.

    Paths are ``/`` separated corpus paths. Enumeration order is stable for a
    given corpus state; suggestion results depend on it.
    """

    def list_files(self) -> list[str]:
        """List every file path in the corpus."""
        ...

    def list_documents(self) -> list[str]:
        """List text documents that may contain @ references."""
        ...

    def read(self, path: str) -> str:
        """Read the full text of a document."""
        ...

    def write(self, path: str, content: str) -> None:
        """Overwrite the full text of a document."""
        ...

    def exists(self, path: str) -> bool:
        """Check if a file or folder exists at path."""
        ...

    def is_folder(self, path: str) -> bool:
        """Check if path is an existing folder."""
        ...
