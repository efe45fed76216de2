"""Autocomplete suggestions for @ references, scoped to the current repository."""

import logging

from ...models import Suggestion
from ...models import TriggerContext
from ...paths import REPOS_MARKER
from ...paths import locate_root
from ...paths import to_relative
from ...storage.protocol import CorpusProtocol

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


def find_trigger(line: str, cursor: int) -> TriggerContext | None:
    """Find the @ reference being typed at the cursor.

    Walks backwards from the cursor over non-whitespace characters until an
    ``@`` is found. The ``@`` must start the line or follow whitespace.

    Args:
        line: Full text of the editor line
        cursor: Cursor column (0 <= cursor <= len(line))

    Returns:
        TriggerContext spanning from the @ to the cursor, or None

    Examples:
        >>> find_trigger("see @src/ut", 11).query
        'src/ut'
        >>> find_trigger("me@host", 7) is None
        True
    """
    start = cursor - 1
    while start >= 0 and not line[start].isspace() and line[start] != "@":
        start -= 1

    if start < 0 or line[start] != "@":
        return None
    if start > 0 and not line[start - 1].isspace():
        return None

    return TriggerContext(start=start, end=cursor, query=line[start + 1 : cursor])


def suggest(
    corpus: CorpusProtocol,
    current_path: str,
    query: str,
    *,
    marker: str = REPOS_MARKER,
    limit: int = DEFAULT_LIMIT,
) -> list[Suggestion]:
    """Suggest reference targets for a document.

    Candidates are the files of the current document's repository (every
    file when the document is outside all repositories), in corpus
    enumeration order, whose relative path contains the query
    (case-insensitive). Collection stops as soon as ``limit`` matches exist.

    Args:
        corpus: Corpus to enumerate
        current_path: Corpus path of the document being edited
        query: Text typed after @ (empty matches everything)
        marker: Repository marker segment
        limit: Maximum number of suggestions

    Returns:
        Suggestions in enumeration order, possibly empty
    """
    root = locate_root(current_path, marker)
    scope_prefix = root + "/" if root else ""
    needle = query.lower()

    results: list[Suggestion] = []
    for path in corpus.list_files():
        if not path.startswith(scope_prefix):
            continue
        display = to_relative(path, root)
        if needle and needle not in display.lower():
            continue
        results.append(Suggestion(display_path=display, target_path=path))
        if len(results) >= limit:
            break

    logger.debug(f"{len(results)} suggestions for {query!r} in scope {root or '<corpus>'}")
    return results


class Suggester:
    """Suggestion resolver bound to a corpus and its settings."""

    def __init__(self, corpus: CorpusProtocol, marker: str = REPOS_MARKER, limit: int = DEFAULT_LIMIT):
        self.corpus = corpus
        self.marker = marker
        self.limit = limit

    def suggest(self, current_path: str, query: str) -> list[Suggestion]:
        return suggest(self.corpus, current_path, query, marker=self.marker, limit=self.limit)

    def suggest_at(self, current_path: str, line: str, cursor: int) -> list[Suggestion]:
        """Detect a trigger at the cursor and suggest for its query."""
        trigger = find_trigger(line, cursor)
        if trigger is None:
            return []
        return self.suggest(current_path, trigger.query)
