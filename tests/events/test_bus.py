"""Tests for EventBus."""

import logging
from unittest.mock import Mock

from atpath.events.bus import EventBus
from atpath.events.schemas import DocumentRenamed
from atpath.events.schemas import DocumentRewritten
from atpath.events.schemas import DocumentUpdateFailed


class TestEventBus:
    """Test EventBus subscription and publishing."""

    def test_subscribe_single_handler(self):
        """Test subscribing a single handler."""
        bus = EventBus()
        handler = Mock()

        bus.subscribe(handler)
        event = DocumentRenamed(old_path="a.md", new_path="b.md")
        bus.publish(event)

        handler.assert_called_once_with(event, None)

    def test_config_passed_to_handlers(self):
        config = {"dry_run": True}
        bus = EventBus(config)
        handler = Mock()

        bus.subscribe(handler)
        event = DocumentRewritten(path="a.md", replacements=1)
        bus.publish(event)

        handler.assert_called_once_with(event, config)

    def test_publish_order(self):
        """Test publishing reaches all subscribers in subscription order."""
        bus = EventBus()
        received = []

        def handler1(event, config):
            received.append(("handler1", event))

        def handler2(event, config):
            received.append(("handler2", event))

        bus.subscribe(handler1)
        bus.subscribe(handler2)

        event1 = DocumentRenamed(old_path="a.md", new_path="b.md")
        event2 = DocumentRewritten(path="c.md", replacements=2)
        bus.publish(event1)
        bus.publish(event2)

        assert received == [
            ("handler1", event1),
            ("handler2", event1),
            ("handler1", event2),
            ("handler2", event2),
        ]

    def test_error_isolation_handler_exception(self, caplog):
        """Test that handler exceptions don't crash bus or affect other handlers."""
        bus = EventBus()
        handler1 = Mock()
        handler3 = Mock()

        def failing_handler(event, config):
            raise ValueError("Handler 2 failed")

        bus.subscribe(handler1)
        bus.subscribe(failing_handler)
        bus.subscribe(handler3)

        event = DocumentUpdateFailed(path="a.md", operation="read", message="gone")

        with caplog.at_level(logging.ERROR):
            bus.publish(event)

        handler1.assert_called_once_with(event, None)
        handler3.assert_called_once_with(event, None)
        assert "Error in event handler" in caplog.text
        assert "failing_handler" in caplog.text

    def test_unsubscribe(self):
        bus = EventBus()
        handler = Mock()

        bus.subscribe(handler)
        bus.unsubscribe(handler)
        bus.publish(DocumentRenamed(old_path="a.md", new_path="b.md"))

        handler.assert_not_called()

    def test_unsubscribe_unknown_handler_is_noop(self):
        bus = EventBus()
        bus.unsubscribe(Mock())  # Should not raise

    def test_handler_may_unsubscribe_during_publish(self):
        bus = EventBus()
        later = Mock()

        def once(event, config):
            bus.unsubscribe(once)

        bus.subscribe(once)
        bus.subscribe(later)
        bus.publish(DocumentRenamed(old_path="a.md", new_path="b.md"))
        bus.publish(DocumentRenamed(old_path="b.md", new_path="c.md"))

        assert later.call_count == 2

    def test_no_subscribers(self):
        """Test publishing with no subscribers doesn't crash."""
        EventBus().publish(DocumentRenamed(old_path="a.md", new_path="b.md"))
