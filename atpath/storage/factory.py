"""Factory for creating a corpus from settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .filesystem import FileSystemCorpus

if TYPE_CHECKING:
    from ..lib.settings import AppSettings

logger = logging.getLogger(__name__)


def create_corpus(settings: AppSettings, base_dir: Path | None = None) -> FileSystemCorpus:
    """Create a filesystem corpus configured from settings.

    Args:
        settings: AppSettings providing document suffixes and hidden-entry policy
        base_dir: Corpus top directory (default: current working directory)

    Returns:
        FileSystemCorpus rooted at base_dir
    """
    base_dir = base_dir or Path.cwd()
    corpus = FileSystemCorpus(
        base_dir=base_dir,
        document_suffixes=settings.get_document_suffixes(),
        ignore_hidden=settings.get_ignore_hidden(),
    )
    logger.debug(
        "Created corpus (base_dir=%s, suffixes=%s)",
        corpus.base_dir,
        corpus.document_suffixes,
    )
    return corpus
