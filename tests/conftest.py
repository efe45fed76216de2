"""Pytest configuration for atpath tests."""

import pytest
from atpath.storage import MemoryCorpus


@pytest.fixture
def vault() -> MemoryCorpus:
    """A small corpus with two repositories and global notes.

    Enumeration order is insertion order, so tests can rely on it.
    """
    return MemoryCorpus(
        {
            "_repos/proj/README.md": "Start at @src/util.ts and @docs/guide.md\n",
            "_repos/proj/src/util.ts": "export const x = 1;\n",
            "_repos/proj/src/main.ts": "import './util';\n",
            "_repos/proj/docs/guide.md": "See @src/main.ts for the entry point.\n",
            "_repos/other/notes.md": "Borrowed from @_repos/proj/src/util.ts today.\n",
            "_repos/other/src/util.ts": "export const y = 2;\n",
            "inbox.md": "Look at @_repos/proj/src/util.ts and @journal/today.md\n",
            "journal/today.md": "Nothing here.\n",
        }
    )
