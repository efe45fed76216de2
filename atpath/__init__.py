"""atpath - resolve, suggest, and maintain @path/to/file references.

Documents in a corpus refer to each other with ``@relative/path`` tokens.
Inside a repository (the subtree after a ``_repos/<name>`` segment) paths are
relative to the repository root; everywhere else they are full corpus paths.
"""

from .lib.references import RenameHook
from .lib.references import RenamePropagator
from .lib.references import Suggester
from .lib.references import find_trigger
from .lib.references import propagate
from .lib.references import suggest
from .models import PropagationReport
from .models import ReferenceSpan
from .models import RenameEvent
from .models import Suggestion
from .paths import REPOS_MARKER
from .paths import locate_root
from .paths import resolve_target
from .paths import to_relative
from .storage import CorpusProtocol
from .storage import FileSystemCorpus
from .storage import MemoryCorpus
from .utils.mentions import find_references

__all__ = [
    "REPOS_MARKER",
    "CorpusProtocol",
    "FileSystemCorpus",
    "MemoryCorpus",
    "PropagationReport",
    "ReferenceSpan",
    "RenameEvent",
    "RenameHook",
    "RenamePropagator",
    "Suggester",
    "Suggestion",
    "find_references",
    "find_trigger",
    "locate_root",
    "propagate",
    "resolve_target",
    "suggest",
    "to_relative",
]
