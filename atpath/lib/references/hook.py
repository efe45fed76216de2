"""Wires host rename notifications to the propagator through the event bus."""

from __future__ import annotations

import logging
from typing import Any

from ...events.bus import EventBus
from ...events.schemas import CorpusEvent
from ...events.schemas import DocumentRenamed
from ...models import PropagationReport
from ...models import RenameEvent
from .propagator import RenamePropagator

logger = logging.getLogger(__name__)


class RenameHook:
    """Runs propagation once per DocumentRenamed event.

    Usage:
        bus = EventBus()
        hook = RenameHook(RenamePropagator(corpus, event_bus=bus), bus)
        hook.notify_rename("_repos/proj/lib", "_repos/proj/src")
    """

    def __init__(self, propagator: RenamePropagator, bus: EventBus):
        self.propagator = propagator
        self.bus = bus
        self.reports: list[PropagationReport] = []
        bus.subscribe(self.handle)

    def handle(self, event: CorpusEvent, config: Any = None) -> None:
        """Event bus handler; ignores everything but renames."""
        if not isinstance(event, DocumentRenamed):
            return
        rename = RenameEvent(old_path=event.old_path, new_path=event.new_path, is_folder=event.is_folder)
        self.reports.append(self.propagator.propagate(rename))

    def notify_rename(self, new_path: str, old_path: str) -> None:
        """Host callback: ``(new_path, old_path)``, called after the move happened."""
        rename = RenameEvent.from_corpus(self.propagator.corpus, old_path, new_path)
        logger.debug(f"Rename notification {old_path} -> {new_path} (folder={rename.is_folder})")
        self.bus.publish(DocumentRenamed(old_path=old_path, new_path=new_path, is_folder=rename.is_folder))

    def close(self) -> None:
        """Stop listening for renames."""
        self.bus.unsubscribe(self.handle)
