"""
Cadence service: runs the walking session on incoming motion samples.

The session does its work synchronously inside each sample delivery and in
its own timer callbacks. Its status notifications are turned into bus events
here, scheduled as tasks so they go out in the order they were raised.
"""

import asyncio
from typing import Optional, Set
from stridebeat.cadence.pulse import PulseEmitter, ToneEnvelope
from stridebeat.cadence.session import WalkingSession, StatusKind, StatusNotification
from stridebeat.core.config import ApplicationConfig
from stridebeat.core.events import EventType, BaseEvent
from stridebeat.core.service import BaseService
from stridebeat.events.sensors import MotionSampleEvent
from stridebeat.events.walking import WalkingStartedEvent, TempoChangedEvent, WalkingStoppedEvent
from stridebeat.events.system import HardwareErrorEvent
from stridebeat.hardware.audio import AudioHardware

class CadenceService(BaseService):
    """Tracks walking cadence and drives the metronome"""

    PRODUCES_EVENTS = {
        EventType.WALKING_STARTED: {
            'schema': WalkingStartedEvent,
            'description': "First step detected after being idle"
        },
        EventType.TEMPO_CHANGED: {
            'schema': TempoChangedEvent,
            'description': "Metronome (re)started at a tempo class"
        },
        EventType.WALKING_STOPPED: {
            'schema': WalkingStoppedEvent,
            'description': "No step within the idle timeout; metronome stopped"
        },
        EventType.HARDWARE_ERROR: {
            'schema': HardwareErrorEvent,
            'description': "A hardware component failed"
        },
    }

    CONSUMES_EVENTS = {
        EventType.MOTION_SAMPLE: {'schema': MotionSampleEvent, 'handler': 'handle_event'},
    }

    def __init__(self, event_bus, service_registry, name=None, config=None,
                 audio: Optional[AudioHardware] = None):
        super().__init__(event_bus, service_registry, name, config or ApplicationConfig())
        self.audio = audio or AudioHardware.create(self.config.audio)
        self.session: Optional[WalkingSession] = None
        self._status_tasks: Set[asyncio.Task] = set()

    async def start(self):
        await super().start()

        try:
            await self.audio.initialize()
        except Exception as e:
            # Keep tracking cadence; the emitter stays silent while audio is not ready
            self.logger.error(f"Audio unavailable, running silent: {e}")
            await self.publish(HardwareErrorEvent(
                component="audio",
                error_type=type(e).__name__,
                error_message=str(e),
            ))

        tone = self.config.tone
        emitter = PulseEmitter(
            self.audio,
            frequency_hz=tone.frequency_hz,
            duration_s=tone.duration_s,
            envelope=ToneEnvelope(tone.peak_gain, tone.floor_gain),
        )
        self.session = WalkingSession.from_config(
            asyncio.get_running_loop(),
            emitter,
            self.config.cadence,
            status_sink=self._on_status,
        )
        self.session.start()

    async def stop(self):
        if self.session is not None:
            self.session.stop()
        # Flush status events raised during teardown while we can still publish
        if self._status_tasks:
            await asyncio.gather(*self._status_tasks, return_exceptions=True)
        if self.audio.is_initialized():
            await self.audio.shutdown()
        await super().stop()

    async def handle_event(self, event: BaseEvent):
        if event.type == EventType.MOTION_SAMPLE and self.session is not None:
            self.session.observe_acceleration(event.acceleration, event.timestamp_ms)

    def _on_status(self, notification: StatusNotification) -> None:
        if notification.kind is StatusKind.STARTED_WALKING:
            event = WalkingStartedEvent()
        elif notification.kind is StatusKind.TEMPO_CHANGED:
            event = TempoChangedEvent(bpm=notification.bpm, raw_bpm=notification.raw_bpm)
        else:
            event = WalkingStoppedEvent()

        task = asyncio.get_running_loop().create_task(self.publish(event))
        self._status_tasks.add(task)
        task.add_done_callback(self._status_tasks.discard)
