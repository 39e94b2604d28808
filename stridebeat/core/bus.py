"""
Event bus for StrideBeat.

Publishing validates the event against the registry, records it with the
tracer and hands it to every subscriber at once. A failing subscriber is
logged; the publisher and the other subscribers never see the error.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Callable, Awaitable
from .events import EventType, BaseEvent
from .registry import EventRegistry
from .tracing import EventTracer

EventHandler = Callable[[BaseEvent], Awaitable[None]]

def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, '__qualname__', repr(handler))

class EventBus:
    """Routes typed events from producers to subscribed handlers."""

    def __init__(self, registry: EventRegistry, tracer: Optional[EventTracer] = None):
        self.registry = registry
        self.tracer = tracer
        self.subscribers: Dict[EventType, List[EventHandler]] = {}
        # Handlers registered with event_type=None see everything
        self.wildcard_subscribers: List[EventHandler] = []
        self.logger = logging.getLogger(__name__)

    async def publish(self, event: BaseEvent, sender: str) -> None:
        """
        Deliver `event` to its subscribers and wait for all of them.

        Args:
            event: The event to publish
            sender: Name of the publishing service, used if the event has no producer yet
        """
        if not event.producer_name:
            event.producer_name = sender

        try:
            self.registry.validate_schema(event)
        except (ValueError, TypeError) as e:
            self.logger.error(f"Event validation failed: {e}")
            return

        if self.tracer:
            self.tracer.record_event(event)

        handlers = self.subscribers.get(EventType(event.type), []) + self.wildcard_subscribers
        if not handlers:
            return

        await asyncio.gather(*(self._deliver_event(handler, event) for handler in handlers))

    async def _deliver_event(self, handler: EventHandler, event: BaseEvent) -> None:
        try:
            await handler(event)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.logger.error(f"Handler {_handler_name(handler)} failed on {event.type}: {e}", exc_info=True)

    def subscribe(self, event_type: Optional[EventType], handler: EventHandler, service_name: str) -> None:
        """Call `handler` for every event of `event_type`, or for every event if it is None."""
        if event_type is None:
            self.wildcard_subscribers.append(handler)
        else:
            self.subscribers.setdefault(event_type, []).append(handler)
            self.registry.register_consumer(service_name, event_type)
        self.logger.debug(f"{service_name} subscribed to {event_type.value if event_type else 'all events'}")

    def unsubscribe(self, event_type: Optional[EventType], handler: EventHandler) -> None:
        handlers = self.wildcard_subscribers if event_type is None else self.subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            self.logger.debug(f"Handler {_handler_name(handler)} unsubscribed")
