"""Pure text processing for @path references - no file I/O."""

import re
from collections.abc import Iterator
from re import Pattern

from ..models import ReferenceSpan

# An @ starts a reference only at the start of text or after whitespace or "(".
# Fixed-width negative lookbehind: "not preceded by anything else".
BOUNDARY = r"(?<![^\s(])"

# Characters that may follow a full reference when rewriting it
TRAILING_BOUNDARY = r"(?=$|[\s)\]},;:!?])"

# @path pattern: a filename-like token that must end in ".<ext>".
# Second alternative allows embedded spaces and parentheses with a lazy middle
# so the first extension found terminates the capture.
REFERENCE_PATTERN: Pattern = re.compile(BOUNDARY + r"@([\w./_-]+\.\w+|[\w./_-][\w./ _()-]+?\.\w+)")


def find_references(text: str) -> Iterator[ReferenceSpan]:
    """
    Scan text for @path references, left to right.

    Spans never overlap. Each call starts a fresh scan, so the iterator can
    be recreated any number of times over the same text.

    Args:
        text: Text to scan

    Yields:
        ReferenceSpan for each reference found

    Examples:
        >>> [span.path for span in find_references("see @docs/a.md and @b.txt")]
        ['docs/a.md', 'b.txt']
        >>> list(find_references("mail me@host.com"))
        []
    """
    for match in REFERENCE_PATTERN.finditer(text):
        yield ReferenceSpan(
            start=match.start(),
            end=match.end(),
            text=match.group(0),
            path=match.group(1),
        )


def parse_references(text: str) -> list[str]:
    """
    Extract the captured paths of all @path references in text.

    Examples:
        >>> parse_references("(@notes/todo.md) then @My Notes.md")
        ['notes/todo.md', 'My Notes.md']
        >>> parse_references("No references here")
        []
    """
    return [span.path for span in find_references(text)]


def has_references(text: str) -> bool:
    """
    Check if text contains any @path reference.

    Examples:
        >>> has_references("Check @AGENTS.md")
        True
        >>> has_references("x@AGENTS.md")
        False
    """
    return bool(REFERENCE_PATTERN.search(text))


def extract_reference_path(reference: str) -> str:
    """
    Extract path from an @path reference (remove @ prefix).

    Examples:
        >>> extract_reference_path('@src/util.ts')
        'src/util.ts'
    """
    return reference[1:] if reference.startswith("@") else reference


def build_rewrite_pattern(old_path: str, *, is_folder: bool) -> Pattern:
    """
    Build the pattern matching references to a literal path.

    Folders match ``@<path>/`` so only descendants are rewritten. Files match
    ``@<path>`` only when followed by end of line, whitespace or closing
    punctuation, so ``@a.md`` never matches inside ``@a.md.bak``.

    Args:
        old_path: Literal path; every regex metacharacter is escaped
        is_folder: Whether the path names a folder

    Returns:
        Compiled multiline pattern
    """
    escaped = re.escape(old_path)
    if is_folder:
        pattern = BOUNDARY + "@" + escaped + "/"
    else:
        pattern = BOUNDARY + "@" + escaped + TRAILING_BOUNDARY
    return re.compile(pattern, re.MULTILINE)


def rewrite_references(text: str, old_path: str, new_path: str, *, is_folder: bool) -> tuple[str, int]:
    """
    Rewrite every reference to ``old_path`` so it points at ``new_path``.

    Returns:
        Tuple of (rewritten text, number of occurrences replaced)

    Examples:
        >>> rewrite_references("@a.md and @a.md.bak", "a.md", "b.md", is_folder=False)
        ('@b.md and @a.md.bak', 1)
        >>> rewrite_references("@src/x.ts", "src", "lib", is_folder=True)
        ('@lib/x.ts', 1)
    """
    pattern = build_rewrite_pattern(old_path, is_folder=is_folder)
    replacement = "@" + new_path + ("/" if is_folder else "")
    # Function replacement: new_path is literal text, never a template
    return pattern.subn(lambda _match: replacement, text)
