"""Tests for EventHandlerRegistry."""

import pytest

from herd.event_handlers import EventHandlerRegistry
from herd.events import Event, RelationshipEventType
from herd.exceptions import HandlerExecutionError


@pytest.fixture
def registry():
    """Create a fresh EventHandlerRegistry for each test."""
    return EventHandlerRegistry()


@pytest.fixture
def sample_event():
    """Create a sample status event for testing."""
    return Event.create(
        RelationshipEventType.STATUS_OVER, "pair", status="over", previous="in_range"
    )


class TestEventHandlerRegistry:
    """Test EventHandlerRegistry functionality."""

    def test_register_handler(self, registry):
        """Handlers can be registered for specific event types."""
        registry.on(RelationshipEventType.STATUS_OVER, lambda event: None)

        assert registry.get_handler_count(RelationshipEventType.STATUS_OVER) == 1
        assert registry.get_handler_count("status.over") == 1
        assert registry.get_handler_count() == 1

    def test_dispatch_to_specific_handler(self, registry, sample_event):
        """Events are dispatched to handlers registered for that type."""
        over_calls = []
        under_calls = []

        registry.on(RelationshipEventType.STATUS_OVER, over_calls.append)
        registry.on(RelationshipEventType.STATUS_UNDER, under_calls.append)

        registry.dispatch(sample_event)

        assert over_calls == [sample_event]
        assert under_calls == []

    def test_wildcard_handler(self, registry, sample_event):
        """Wildcard handlers receive every event after typed handlers."""
        order = []

        registry.on_all(lambda event: order.append("wildcard"))
        registry.on(RelationshipEventType.STATUS_OVER, lambda event: order.append("typed"))

        registry.dispatch(sample_event)

        assert order == ["typed", "wildcard"]
        assert registry.get_handler_count() == 2

    def test_unregister_handler(self, registry, sample_event):
        """Handlers can be unregistered."""
        calls = []

        def handler(event):
            calls.append(event)

        registry.on(RelationshipEventType.STATUS_OVER, handler)
        assert registry.off(RelationshipEventType.STATUS_OVER, handler)
        assert not registry.off(RelationshipEventType.STATUS_OVER, handler)

        registry.dispatch(sample_event)
        assert calls == []

    def test_unregister_wildcard(self, registry):
        def handler(event):
            pass

        registry.on_all(handler)
        assert registry.off_all(handler)
        assert not registry.off_all(handler)

    def test_handler_error_does_not_stop_others(self, registry, sample_event):
        """A failing handler does not prevent later handlers from running."""
        calls = []

        def failing_handler(event):
            raise ValueError("Handler error")

        registry.on(RelationshipEventType.STATUS_OVER, failing_handler)
        registry.on(RelationshipEventType.STATUS_OVER, calls.append)

        registry.dispatch(sample_event)

        assert calls == [sample_event]

    def test_fail_fast(self, registry, sample_event):
        """With fail_fast the first handler error is raised."""

        def failing_handler(event):
            raise ValueError("Handler error")

        registry.on(RelationshipEventType.STATUS_OVER, failing_handler)

        with pytest.raises(HandlerExecutionError) as exc_info:
            registry.dispatch(sample_event, fail_fast=True)

        assert "failing_handler" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_dispatch_without_handlers(self, registry, sample_event):
        """Dispatching with nothing registered is a no-op."""
        registry.dispatch(sample_event)

    def test_clear(self, registry):
        registry.on(RelationshipEventType.UPDATED, lambda event: None)
        registry.on_all(lambda event: None)

        registry.clear()

        assert registry.get_handler_count() == 0
