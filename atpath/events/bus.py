"""Event bus for corpus events."""

import logging
from collections.abc import Callable
from typing import Any

from atpath.events.schemas import CorpusEvent

logger = logging.getLogger(__name__)


class EventBus:
    """Simple event bus for publishing and subscribing to corpus events.

    Subscribers are called synchronously. Errors in handlers are isolated
    and logged to prevent one failing handler from breaking others.
    """

    def __init__(self, config: Any = None) -> None:
        self._subscribers: list[Callable[[CorpusEvent, Any], None]] = []
        self._config = config

    def subscribe(self, handler: Callable[[CorpusEvent, Any], None]) -> None:
        """Subscribe a handler to receive all corpus events.

        Args:
            handler: Callable that takes a CorpusEvent and config
        """
        self._subscribers.append(handler)

    def unsubscribe(self, handler: Callable[[CorpusEvent, Any], None]) -> None:
        """Remove a previously subscribed handler (no-op when absent)."""
        if handler in self._subscribers:
            self._subscribers.remove(handler)

    def publish(self, event: CorpusEvent) -> None:
        """Publish an event to all subscribers.

        Errors in handlers are caught and logged to prevent cascading failures.

        Args:
            event: CorpusEvent to publish
        """
        for handler in list(self._subscribers):
            try:
                handler(event, self._config)
            except Exception:
                logger.exception(f"Error in event handler {getattr(handler, '__name__', handler)!r}")
