"""
Registries for StrideBeat.

The event registry maps each EventType to the pydantic class allowed on the
bus and remembers who produces and consumes it. The service registry holds
services by name, what they depend on and their lifecycle state.
"""

import logging
from typing import Dict, Set, Type, Optional
from .events import EventType, BaseEvent

class EventRegistry:
    """Event schemas plus their producers and consumers."""

    def __init__(self):
        self._schemas: Dict[EventType, Type[BaseEvent]] = {}
        self._descriptions: Dict[EventType, str] = {}
        self.producers: Dict[EventType, Set[str]] = {}
        self.consumers: Dict[EventType, Set[str]] = {}
        self._logger = logging.getLogger(__name__)

    def register_event(self, event_type: EventType, event_schema: Type[BaseEvent], description: str):
        """
        Allow `event_schema` instances on the bus under `event_type`.

        Registering the same type again replaces the schema, so producer and
        consumer services may both declare the events they rely on.
        """
        self._schemas[event_type] = event_schema
        self._descriptions[event_type] = description
        self._logger.debug(f"Event {event_type.value} -> {event_schema.__name__}")

    def register_producer(self, service_name: str, event_type: EventType):
        self.producers.setdefault(event_type, set()).add(service_name)

    def register_consumer(self, service_name: str, event_type: EventType):
        self.consumers.setdefault(event_type, set()).add(service_name)

    def validate_schema(self, event: BaseEvent) -> bool:
        """
        Check an event against the class registered for its type.

        Raises:
            ValueError: the type was never registered
            TypeError: the event is not an instance of the registered class
        """
        event_type = EventType(event.type)
        schema = self._schemas.get(event_type)
        if schema is None:
            raise ValueError(f"Unknown event type: {event_type.value}")
        if not isinstance(event, schema):
            raise TypeError(f"{type(event).__name__} is not a {schema.__name__}")
        return True

    def describe(self) -> Dict[str, Dict[str, object]]:
        """Description, producers and consumers for every registered event, keyed by type value."""
        return {
            event_type.value: {
                "description": self._descriptions[event_type],
                "producers": sorted(self.producers.get(event_type, ())),
                "consumers": sorted(self.consumers.get(event_type, ())),
            }
            for event_type in self._schemas
        }


class ServiceRegistry:
    """Service names with their dependencies and lifecycle state."""

    def __init__(self):
        self._dependencies: Dict[str, Set[str]] = {}
        self._states: Dict[str, str] = {}
        self._logger = logging.getLogger(__name__)

    def register_service(self, service_name: str):
        self._states[service_name] = "registered"

    def register_dependency(self, service_name: str, depends_on: str):
        """`service_name` refuses to start unless `depends_on` is running."""
        self._dependencies.setdefault(service_name, set()).add(depends_on)

    def get_dependencies(self, service_name: str) -> Set[str]:
        return self._dependencies.get(service_name, set())

    def set_service_state(self, service_name: str, state: str):
        self._states[service_name] = state
        self._logger.debug(f"{service_name}: {state}")

    def get_service_state(self, service_name: str) -> Optional[str]:
        return self._states.get(service_name)
