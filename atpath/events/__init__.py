"""Corpus event system for rename notifications and document updates."""

from atpath.events.bus import EventBus
from atpath.events.schemas import CorpusEvent
from atpath.events.schemas import DocumentRenamed
from atpath.events.schemas import DocumentRewritten
from atpath.events.schemas import DocumentUpdateFailed

__all__ = [
    "EventBus",
    "CorpusEvent",
    "DocumentRenamed",
    "DocumentRewritten",
    "DocumentUpdateFailed",
]
