"""Event bus carrying discovery failure events to listeners.

Handlers subscribe to an event class and receive every event whose type
is that class or a subclass of it, so subscribing to DomainEvent sees
everything.
"""

import threading
from typing import Callable, Dict, List, Type

from ..domain.events import DomainEvent
from ..logging_config import get_logger

logger = get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventBus:
    """
    Thread-safe publish/subscribe for domain events.

    Dispatch follows the event's MRO, most specific class first; within a
    class, handlers run in subscription order. A handler is called at most
    once per event even if subscribed under several classes.
    """

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> Callable[[], None]:
        """
        Subscribe a handler to an event class and its subclasses.

        Returns:
            A callable that removes this subscription.
        """
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)

        logger.debug("event_handler_subscribed", event_type=event_type.__name__)
        return lambda: self.unsubscribe(event_type, handler)

    def subscribe_to_all(self, handler: EventHandler) -> Callable[[], None]:
        """Subscribe a handler to every event."""
        return self.subscribe(DomainEvent, handler)

    def unsubscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        with self._lock:
            handlers = self._handlers.get(event_type)
            if handlers and handler in handlers:
                handlers.remove(handler)
                if not handlers:
                    del self._handlers[event_type]

    def _handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        selected: List[EventHandler] = []
        with self._lock:
            for cls in type(event).__mro__:
                for handler in self._handlers.get(cls, ()):
                    if handler not in selected:
                        selected.append(handler)
        return selected

    def publish(self, event: DomainEvent) -> None:
        """
        Deliver an event to every matching handler.

        Handlers run outside the lock. A failing handler is logged and the
        remaining handlers still run.
        """
        handlers = self._handlers_for(event)
        logger.debug("event_published", event_type=type(event).__name__, handlers=len(handlers))

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.error("event_handler_failed", event_type=type(event).__name__, exc_info=True)

    def clear(self) -> None:
        """Drop all subscriptions."""
        with self._lock:
            self._handlers.clear()


_event_bus: EventBus | None = None
_event_bus_lock = threading.Lock()


def get_event_bus() -> EventBus:
    """Get the process-wide event bus, creating it on first use."""
    global _event_bus

    if _event_bus is None:
        with _event_bus_lock:
            if _event_bus is None:
                _event_bus = EventBus()

    return _event_bus


def reset_event_bus() -> None:
    """Drop the process-wide event bus (mainly for testing)."""
    global _event_bus

    with _event_bus_lock:
        _event_bus = None
