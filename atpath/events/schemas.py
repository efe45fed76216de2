"""Corpus event schemas for rename notifications and document updates."""

from typing import Literal

from pydantic import BaseModel
from pydantic import Field


class DocumentRenamed(BaseModel):
    """A file or folder was moved. Folder moves are delivered once, for the folder."""

    type: Literal["document_renamed"] = "document_renamed"
    old_path: str = Field(description="Corpus path before the move")
    new_path: str = Field(description="Corpus path after the move")
    is_folder: bool = Field(default=False, description="Whether the moved entity is a folder")


class DocumentRewritten(BaseModel):
    """Propagation wrote updated references into a document."""

    type: Literal["document_rewritten"] = "document_rewritten"
    path: str = Field(description="Corpus path of the rewritten document")
    replacements: int = Field(description="Reference occurrences replaced")


class DocumentUpdateFailed(BaseModel):
    """Propagation skipped a document it could not read or write."""

    type: Literal["document_update_failed"] = "document_update_failed"
    path: str = Field(description="Corpus path of the skipped document")
    operation: Literal["read", "write"] = Field(description="Failed operation")
    message: str = Field(description="Error description")


CorpusEvent = DocumentRenamed | DocumentRewritten | DocumentUpdateFailed
