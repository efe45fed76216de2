"""Repository path policy for @path references.

A corpus is partitioned into repositories. A repository is the subtree
rooted at the segment that follows the marker segment (default ``_repos``):

    _repos/proj/src/util.ts  ->  root "_repos/proj", relative "src/util.ts"

Paths with no marker segment, or with the marker as their last segment,
belong to no repository and reference each other by full corpus path.
"""

# Default marker segment that introduces a repository name
REPOS_MARKER = "_repos"

SEPARATOR = "/"


def locate_root(path: str, marker: str = REPOS_MARKER) -> str | None:
    """Find the repository root that encloses a corpus path.

    Args:
        path: Corpus path (``/`` separated)
        marker: Marker segment whose following segment names the repository

    Returns:
        Root prefix without trailing separator, or None when the path lies
        outside every repository

    Examples:
        >>> locate_root("_repos/proj/src/util.ts")
        '_repos/proj'
        >>> locate_root("notes/today.md") is None
        True
        >>> locate_root("_repos/proj") is None
        True
    """
    token = marker + SEPARATOR
    idx = path.find(token)
    if idx == -1:
        return None

    name_start = idx + len(token)
    slash = path.find(SEPARATOR, name_start)
    if slash == -1:
        return None

    return path[:slash]


def to_relative(path: str, root: str | None) -> str:
    """Strip a repository root (and its separator) from a corpus path.

    The caller guarantees ``path`` starts with ``root + "/"``.

    Examples:
        >>> to_relative("_repos/proj/src/util.ts", "_repos/proj")
        'src/util.ts'
        >>> to_relative("notes/today.md", None)
        'notes/today.md'
    """
    if not root:
        return path
    return path[len(root) + 1 :]


def to_corpus_path(relative: str, root: str | None) -> str:
    """Join a repository-relative path back onto its root."""
    if not root:
        return relative
    return root + SEPARATOR + relative


def relative_identity(path: str, marker: str = REPOS_MARKER) -> tuple[str | None, str]:
    """Return ``(root, relative)`` for a corpus path."""
    root = locate_root(path, marker)
    return root, to_relative(path, root)


def resolve_target(source_path: str, captured: str, marker: str = REPOS_MARKER) -> str:
    """Resolve a captured reference against the document it was found in.

    References inside a repository are relative to that repository's root.
    Documents outside any repository use full corpus paths, so the capture
    is returned unchanged. The result is not checked for existence.

    Examples:
        >>> resolve_target("_repos/proj/README.md", "src/util.ts")
        '_repos/proj/src/util.ts'
        >>> resolve_target("inbox.md", "_repos/proj/src/util.ts")
        '_repos/proj/src/util.ts'
    """
    return to_corpus_path(captured, locate_root(source_path, marker))
