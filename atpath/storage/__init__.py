"""Corpus storage for the @path reference engine.

This module provides:
- CorpusProtocol: Capability the engine needs (list, read, write, exists)
- MemoryCorpus: Dict-backed corpus for embedding hosts and tests
- FileSystemCorpus: Directory-backed corpus with atomic writes
- create_corpus: Factory building a FileSystemCorpus from settings
"""

from .factory import create_corpus
from .filesystem import FileSystemCorpus
from .memory import MemoryCorpus
from .protocol import CorpusError
from .protocol import CorpusProtocol

__all__ = [
    "CorpusError",
    "CorpusProtocol",
    "FileSystemCorpus",
    "MemoryCorpus",
    "create_corpus",
]
