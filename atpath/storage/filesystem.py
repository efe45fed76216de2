"""
Filesystem-backed corpus.

Maps a directory tree to corpus paths (POSIX, relative to the base
directory) with deterministic enumeration and atomic writes.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from .protocol import CorpusError

logger = logging.getLogger(__name__)


class FileSystemCorpus:
    """
    Corpus over a local directory.

    Contract:
    - Inputs: base_dir (Path), document suffixes, hidden-entry policy
    - Outputs: corpus paths like ``_repos/proj/src/util.ts``
    - Side Effects: writes and moves under base_dir only
    - Errors: CorpusError for paths escaping base_dir or missing move sources,
      OSError/UnicodeDecodeError from the underlying files
    """

    def __init__(
        self,
        base_dir: Path,
        document_suffixes: Iterable[str] = (".md",),
        ignore_hidden: bool = True,
    ):
        """Initialize with the directory that holds the corpus.

        Args:
            base_dir: Corpus top directory
            document_suffixes: File suffixes treated as reference-bearing documents
            ignore_hidden: Skip files and directories whose name starts with "."
        """
        self.base_dir = Path(base_dir).resolve()
        self.document_suffixes = tuple(document_suffixes)
        self.ignore_hidden = ignore_hidden

    def list_files(self) -> list[str]:
        """List all files, sorted per directory, directories walked top-down."""
        paths: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self.base_dir):
            if self.ignore_hidden:
                dirnames[:] = [d for d in dirnames if not d.startswith(".")]
                filenames = [f for f in filenames if not f.startswith(".")]
            dirnames.sort()
            rel_dir = Path(dirpath).relative_to(self.base_dir).as_posix()
            for filename in sorted(filenames):
                paths.append(filename if rel_dir == "." else f"{rel_dir}/{filename}")
        return paths

    def list_documents(self) -> list[str]:
        return [path for path in self.list_files() if path.endswith(self.document_suffixes)]

    def read(self, path: str) -> str:
        # newline="" keeps CRLF documents byte-identical across a rewrite
        with open(self._full_path(path), encoding="utf-8", newline="") as f:
            return f.read()

    def write(self, path: str, content: str) -> None:
        """Write content atomically (temp file in the same directory, then rename)."""
        target = self._full_path(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=target.parent,
            prefix=f".{target.name}_",
            suffix=".tmp",
            delete=False,
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            try:
                tmp_file.write(content)
                tmp_file.flush()
            except Exception:
                with contextlib.suppress(Exception):
                    temp_path.unlink()
                raise

        try:
            temp_path.replace(target)
        except Exception:
            with contextlib.suppress(Exception):
                temp_path.unlink()
            raise

    def exists(self, path: str) -> bool:
        try:
            return self._full_path(path).exists()
        except CorpusError:
            return False

    def is_folder(self, path: str) -> bool:
        try:
            return self._full_path(path).is_dir()
        except CorpusError:
            return False

    def move(self, old_path: str, new_path: str) -> None:
        """Move a file or folder within the corpus.

        Raises:
            CorpusError: If the source is missing or the destination exists
        """
        source = self._full_path(old_path)
        destination = self._full_path(new_path)

        if not source.exists():
            raise CorpusError(f"Cannot move missing path: {old_path}")
        if destination.exists():
            raise CorpusError(f"Destination already exists: {new_path}")

        destination.parent.mkdir(parents=True, exist_ok=True)
        source.rename(destination)
        logger.info(f"Moved {old_path} -> {new_path}")

    def to_corpus_path(self, path: Path) -> str:
        """Convert a filesystem path (absolute or CWD-relative) to a corpus path."""
        resolved = Path(path).resolve()
        try:
            return resolved.relative_to(self.base_dir).as_posix()
        except ValueError:
            raise CorpusError(f"Path is outside corpus {self.base_dir}: {path}") from None

    def _full_path(self, path: str) -> Path:
        """Map a corpus path to a filesystem path, refusing traversal."""
        if not path or path.startswith("/") or ".." in path.split("/"):
            raise CorpusError(f"Invalid corpus path: {path!r}")
        return self.base_dir / path

    def __repr__(self) -> str:
        return f"FileSystemCorpus(base_dir={self.base_dir})"
