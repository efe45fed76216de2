"""Value types for @path reference resolution and rename propagation."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

if TYPE_CHECKING:
    from .storage.protocol import CorpusProtocol


class ReferenceSpan(BaseModel):
    """A located @path reference inside a text buffer.

    Attributes:
        start: Offset of the leading ``@``
        end: Offset just past the last character of the match
        text: Raw matched text, including ``@``
        path: Captured path, excluding ``@``
    """

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    text: str
    path: str


class TriggerContext(BaseModel):
    """Where an in-progress @ reference sits in an editor line."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(description="Column of the triggering @")
    end: int = Field(description="Cursor column")
    query: str = Field(description="Text typed after @")


class Suggestion(BaseModel):
    """Autocomplete candidate for an @ reference."""

    model_config = ConfigDict(frozen=True)

    display_path: str = Field(description="Path as written after @ (repository relative)")
    target_path: str = Field(description="Corpus path of the suggested file")

    @property
    def completion_text(self) -> str:
        """Text inserted in place of the trigger when the suggestion is accepted."""
        return "@" + self.display_path + " "


class RenameEvent(BaseModel):
    """A file or folder moved from ``old_path`` to ``new_path``."""

    model_config = ConfigDict(frozen=True)

    old_path: str = Field(min_length=1)
    new_path: str = Field(min_length=1)
    is_folder: bool = False

    @classmethod
    def from_corpus(cls, corpus: CorpusProtocol, old_path: str, new_path: str) -> RenameEvent:
        """Build an event after the move, asking the corpus what ``new_path`` is.

        When the corpus does not know the new path, a final segment without
        an extension is taken to be a folder.
        """
        if corpus.exists(new_path):
            is_folder = corpus.is_folder(new_path)
        else:
            is_folder = "." not in posixpath.basename(new_path)
        return cls(old_path=old_path, new_path=new_path, is_folder=is_folder)


class DocumentError(BaseModel):
    """A document that could not be updated during propagation."""

    path: str
    operation: Literal["read", "write"]
    message: str


class PropagationReport(BaseModel):
    """Outcome of propagating one rename across the corpus.

    Attributes:
        event: The rename that was propagated
        updated: Documents written, in order of first write
        errors: Documents skipped because they could not be read or written
        replacements: Total reference occurrences rewritten
    """

    event: RenameEvent
    updated: list[str] = Field(default_factory=list)
    errors: list[DocumentError] = Field(default_factory=list)
    replacements: int = 0

    @property
    def ok(self) -> bool:
        """True when every in-scope document was processed."""
        return not self.errors
