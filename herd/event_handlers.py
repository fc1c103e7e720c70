# herd/event_handlers.py

"""Synchronous handler registry for relationship events."""

from collections import defaultdict
from typing import Callable

from .events import Event, RelationshipEventType
from .exceptions import HandlerExecutionError
from .logging import get_logger

# Handlers are plain callables run inline during read() and mutation
EventHandler = Callable[[Event], None]


def _type_key(event_type: RelationshipEventType | str) -> str:
    return event_type.value if isinstance(event_type, RelationshipEventType) else event_type


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", repr(handler))


class EventHandlerRegistry:
    """Registry for managing type-specific event subscriptions."""

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._wildcard_handlers: list[EventHandler] = []
        self.logger = get_logger(f"{__name__}.EventHandlerRegistry")

    def on(self, event_type: RelationshipEventType | str, handler: EventHandler) -> None:
        """Subscribe a handler to a specific event type.

        Args:
            event_type: The type of event to subscribe to
            handler: Callable that processes the event
        """
        key = _type_key(event_type)
        self._handlers[key].append(handler)

        self.logger.debug(
            "handler.registered",
            event_type=key,
            handler_count=len(self._handlers[key]),
        )

    def on_all(self, handler: EventHandler) -> None:
        """Subscribe a handler to every event type."""
        self._wildcard_handlers.append(handler)
        self.logger.debug(
            "handler.registered_wildcard",
            wildcard_handler_count=len(self._wildcard_handlers),
        )

    def off(self, event_type: RelationshipEventType | str, handler: EventHandler) -> bool:
        """Unsubscribe a handler from a specific event type.

        Returns:
            True if handler was removed, False if not found
        """
        key = _type_key(event_type)
        if key in self._handlers and handler in self._handlers[key]:
            self._handlers[key].remove(handler)
            self.logger.debug("handler.unregistered", event_type=key)
            return True
        return False

    def off_all(self, handler: EventHandler) -> bool:
        if handler in self._wildcard_handlers:
            self._wildcard_handlers.remove(handler)
            self.logger.debug("handler.unregistered_wildcard")
            return True
        return False

    def dispatch(self, event: Event, fail_fast: bool = False) -> None:
        """Dispatch an event to all interested handlers.

        Args:
            event: The event to dispatch
            fail_fast: If True, raise on first handler error. If False, log and continue.

        Raises:
            HandlerExecutionError: If fail_fast=True and a handler raises an exception
        """
        key = event.type_name
        all_handlers = list(self._handlers.get(key, [])) + list(self._wildcard_handlers)
        if not all_handlers:
            return

        errors = []
        for handler in all_handlers:
            try:
                handler(event)
            except Exception as e:
                name = _handler_name(handler)
                self.logger.error(
                    "handler.execution_failed",
                    event_type=key,
                    relationship_id=event.relationship_id,
                    handler=name,
                    error=str(e),
                )
                if fail_fast:
                    raise HandlerExecutionError(
                        f"Handler {name} failed for event {key}: {e}"
                    ) from e
                errors.append((handler, e))

        if errors:
            self.logger.warning(
                "event.dispatch_completed_with_errors",
                event_type=key,
                relationship_id=event.relationship_id,
                error_count=len(errors),
            )

    def get_handler_count(self, event_type: RelationshipEventType | str | None = None) -> int:
        """Get the number of handlers registered.

        Args:
            event_type: If provided, count handlers for this type only.
                       If None, count all handlers including wildcards.
        """
        if event_type is None:
            total = sum(len(handlers) for handlers in self._handlers.values())
            return total + len(self._wildcard_handlers)
        return len(self._handlers.get(_type_key(event_type), []))

    def clear(self) -> None:
        """Remove all registered handlers."""
        self._handlers.clear()
        self._wildcard_handlers.clear()
        self.logger.info("handlers.cleared")
