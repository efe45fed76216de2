"""In-memory corpus for embedding hosts and deterministic tests."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Mapping

from .protocol import CorpusError

logger = logging.getLogger(__name__)


class MemoryCorpus:
    """Corpus backed by a dict of path -> content.

    Contract:
    - Enumeration follows insertion order
    - Folders are implied by path prefixes; there are no empty folders
    - Every write is recorded in ``writes`` (paths, in call order)
    """

    def __init__(
        self,
        files: Mapping[str, str] | None = None,
        document_suffixes: Iterable[str] = (".md",),
    ) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.document_suffixes = tuple(document_suffixes)
        self.writes: list[str] = []

    def list_files(self) -> list[str]:
        return list(self.files)

    def list_documents(self) -> list[str]:
        return [path for path in self.files if path.endswith(self.document_suffixes)]

    def read(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise CorpusError(f"No such document: {path}") from None

    def write(self, path: str, content: str) -> None:
        self.files[path] = content
        self.writes.append(path)

    def exists(self, path: str) -> bool:
        return path in self.files or self.is_folder(path)

    def is_folder(self, path: str) -> bool:
        prefix = path.rstrip("/") + "/"
        return any(existing.startswith(prefix) for existing in self.files)

    def move(self, old_path: str, new_path: str) -> None:
        """Move a file, or every file under a folder, preserving order."""
        if old_path in self.files:
            self.files = {(new_path if p == old_path else p): c for p, c in self.files.items()}
            return

        prefix = old_path.rstrip("/") + "/"
        if not self.is_folder(old_path):
            raise CorpusError(f"Cannot move missing path: {old_path}")

        new_prefix = new_path.rstrip("/") + "/"
        self.files = {
            (new_prefix + p[len(prefix) :] if p.startswith(prefix) else p): c for p, c in self.files.items()
        }
        logger.debug(f"Moved folder {old_path} -> {new_path}")

    def __repr__(self) -> str:
        return f"MemoryCorpus(files={len(self.files)})"
