"""
Base service for StrideBeat.

A service declares the events it produces and consumes as class attributes.
Construction registers those schemas and the service itself; `start` and
`stop` wire its handlers onto the bus and announce the lifecycle change.
"""

import asyncio
import structlog
from abc import ABC, abstractmethod
from typing import Dict, Set, Any, Optional, ClassVar, Type
from .events import EventType, BaseEvent
from .registry import ServiceRegistry
from .bus import EventBus

class BaseService(ABC):
    """
    Lifecycle and event plumbing shared by all services.

    Class attributes:
        PRODUCES_EVENTS: EventType -> {'schema': event class, 'description': text}
        CONSUMES_EVENTS: EventType -> {'schema': event class, 'handler': method name}
        REQUIRED_SERVICES: names of services that must be running before this one starts

    Consumed schemas are registered as well as produced ones, so a consumer
    works with any producer on the bus, not only the one that normally feeds it.
    """

    PRODUCES_EVENTS: ClassVar[Dict[EventType, Dict[str, Any]]] = {}
    CONSUMES_EVENTS: ClassVar[Dict[EventType, Dict[str, Any]]] = {}
    REQUIRED_SERVICES: ClassVar[Set[str]] = set()

    def __init__(self,
                 event_bus: EventBus,
                 service_registry: ServiceRegistry,
                 name: Optional[str] = None,
                 config: Optional[Any] = None):
        from stridebeat.events.system import ServiceStateChangedEvent

        self.event_bus = event_bus
        self.service_registry = service_registry
        self.name = name or self.__class__.__name__
        self.config = config
        self.logger = structlog.get_logger(service=self.name)

        self._running = False
        self._lock = asyncio.Lock()

        registry = event_bus.registry
        self._register_schema(EventType.SERVICE_STATE_CHANGED, ServiceStateChangedEvent,
                              "Service lifecycle state changed")
        registry.register_producer(self.name, EventType.SERVICE_STATE_CHANGED)

        for event_type, info in self.PRODUCES_EVENTS.items():
            registry.register_producer(self.name, event_type)
            self._register_schema(event_type, info['schema'], info.get('description', ""))

        for event_type, info in self.CONSUMES_EVENTS.items():
            self._register_schema(event_type, info['schema'], info.get('description', ""))

        service_registry.register_service(self.name)
        for dependency in self.REQUIRED_SERVICES:
            service_registry.register_dependency(self.name, dependency)

    def _register_schema(self, event_type: EventType, schema: Type[BaseEvent], description: str) -> None:
        self.event_bus.registry.register_event(event_type, schema, description)

    @property
    def is_running(self) -> bool:
        return self._running

    def _handlers(self):
        for event_type, info in self.CONSUMES_EVENTS.items():
            yield event_type, getattr(self, info['handler'])

    async def start(self) -> None:
        """
        Subscribe to consumed events and mark the service running.

        Subclasses call super().start() before acquiring their own resources.

        Raises:
            RuntimeError: a required service is not running
        """
        async with self._lock:
            if self._running:
                self.logger.warning("Service already running")
                return

            missing = [d for d in self.service_registry.get_dependencies(self.name)
                       if self.service_registry.get_service_state(d) != 'running']
            if missing:
                raise RuntimeError(f"Required service {', '.join(sorted(missing))} is not running")

            for event_type, handler in self._handlers():
                self.event_bus.subscribe(event_type, handler, self.name)

            self._running = True
            self.service_registry.set_service_state(self.name, 'running')
            self.logger.info("Service started")
            await self.publish_service_state('started')

    async def stop(self) -> None:
        """Unsubscribe and mark the service stopped. Subclasses release resources first."""
        async with self._lock:
            if not self._running:
                self.logger.warning("Service already stopped")
                return

            await self.publish_service_state('stopping')
            for event_type, handler in self._handlers():
                self.event_bus.unsubscribe(event_type, handler)

            self._running = False
            self.service_registry.set_service_state(self.name, 'stopped')
            self.logger.info("Service stopped")
            await self.publish_service_state('stopped')

    async def publish(self, event: BaseEvent) -> None:
        """Publish through the bus; dropped with a warning once the service is stopped."""
        if not self._running:
            self.logger.warning("Attempted publish while stopped", event_type=event.type)
            return
        await self.event_bus.publish(event, self.name)

    async def publish_service_state(self, state: str) -> None:
        from stridebeat.events.system import ServiceStateChangedEvent

        await self.event_bus.publish(
            ServiceStateChangedEvent(service_name=self.name, state=state),
            self.name
        )

    @abstractmethod
    async def handle_event(self, event: BaseEvent) -> None:
        """Entry point for the events listed in CONSUMES_EVENTS."""
        pass
