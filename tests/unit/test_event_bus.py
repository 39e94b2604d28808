"""
Unit tests for the EventBus, EventRegistry and EventTracer.
"""

import unittest
from unittest.mock import AsyncMock

from stridebeat.core.bus import EventBus
from stridebeat.core.events import EventType
from stridebeat.core.registry import EventRegistry, ServiceRegistry
from stridebeat.core.tracing import EventTracer
from stridebeat.events.walking import TempoChangedEvent, WalkingStoppedEvent

class TestEventBus(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.registry = EventRegistry()
        self.registry.register_event(EventType.TEMPO_CHANGED, TempoChangedEvent, "tempo")
        self.tracer = EventTracer(max_events=10)
        self.bus = EventBus(self.registry, self.tracer)

    async def test_delivers_to_subscriber(self):
        handler = AsyncMock()
        self.bus.subscribe(EventType.TEMPO_CHANGED, handler, "listener")

        event = TempoChangedEvent(bpm=110.0, raw_bpm=108.2)
        await self.bus.publish(event, "cadence")

        handler.assert_awaited_once_with(event)
        self.assertEqual(event.producer_name, "cadence")
        self.assertEqual(self.registry.consumers[EventType.TEMPO_CHANGED], {"listener"})

    async def test_wildcard_sees_every_registered_event(self):
        self.registry.register_event(EventType.WALKING_STOPPED, WalkingStoppedEvent, "stopped")
        handler = AsyncMock()
        self.bus.subscribe(None, handler, "listener")

        await self.bus.publish(TempoChangedEvent(bpm=90.0), "cadence")
        await self.bus.publish(WalkingStoppedEvent(), "cadence")

        self.assertEqual(handler.await_count, 2)

    async def test_unregistered_event_is_dropped(self):
        handler = AsyncMock()
        self.bus.subscribe(None, handler, "listener")

        await self.bus.publish(WalkingStoppedEvent(), "cadence")

        handler.assert_not_awaited()
        self.assertEqual(self.tracer.get_event_stats()['total_events'], 0)

    async def test_handler_error_does_not_reach_publisher(self):
        failing = AsyncMock(side_effect=RuntimeError("display gone"))
        healthy = AsyncMock()
        self.bus.subscribe(EventType.TEMPO_CHANGED, failing, "a")
        self.bus.subscribe(EventType.TEMPO_CHANGED, healthy, "b")

        await self.bus.publish(TempoChangedEvent(bpm=90.0), "cadence")

        healthy.assert_awaited_once()

    async def test_unsubscribe(self):
        handler = AsyncMock()
        self.bus.subscribe(EventType.TEMPO_CHANGED, handler, "listener")
        self.bus.unsubscribe(EventType.TEMPO_CHANGED, handler)

        await self.bus.publish(TempoChangedEvent(bpm=90.0), "cadence")

        handler.assert_not_awaited()

    async def test_tracer_counts_published_events(self):
        for bpm in (90.0, 110.0, 130.0):
            await self.bus.publish(TempoChangedEvent(bpm=bpm), "cadence")

        stats = self.tracer.get_event_stats()
        self.assertEqual(stats['total_events'], 3)
        self.assertEqual(stats['producers'], {"cadence": 3})
        self.assertEqual(list(stats['event_types'].values()), [3])

class TestRegistries(unittest.TestCase):

    def test_unknown_type_raises(self):
        registry = EventRegistry()
        with self.assertRaises(ValueError):
            registry.validate_schema(WalkingStoppedEvent())

    def test_schema_mismatch_raises(self):
        registry = EventRegistry()
        registry.register_event(EventType.WALKING_STOPPED, TempoChangedEvent, "wrong class")
        with self.assertRaises(TypeError):
            registry.validate_schema(WalkingStoppedEvent())

    def test_service_dependencies(self):
        registry = ServiceRegistry()
        registry.register_service("cadence")
        registry.register_dependency("cadence", "motion")
        self.assertEqual(registry.get_service_state("cadence"), "registered")
        self.assertEqual(registry.get_dependencies("cadence"), {"motion"})

class TestTracerBuffer(unittest.TestCase):

    def test_buffer_is_bounded(self):
        tracer = EventTracer(max_events=2)
        for bpm in (90.0, 110.0, 130.0):
            tracer.record_event(TempoChangedEvent(bpm=bpm, producer_name="x"))
        self.assertEqual(tracer.get_event_stats()['total_events'], 2)

if __name__ == '__main__':
    unittest.main()
