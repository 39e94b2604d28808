"""
This service reads the accelerometer and publishes every reading to the event bus.

The source is a MotionHardware implementation; by default the simulated walk
configured in MotionConfig.
"""

import asyncio
from typing import Optional
from stridebeat.core.events import EventType, BaseEvent
from stridebeat.core.config import ApplicationConfig
from stridebeat.core.service import BaseService
from stridebeat.events.sensors import MotionSampleEvent
from stridebeat.events.system import HardwareErrorEvent
from stridebeat.hardware.motion import MotionHardware

class MotionService(BaseService):
    """Service for streaming accelerometer readings"""

    PRODUCES_EVENTS = {
        EventType.MOTION_SAMPLE: {
            'schema': MotionSampleEvent,
            'description': "Raw acceleration including gravity, one per sensor reading"
        },
        EventType.HARDWARE_ERROR: {
            'schema': HardwareErrorEvent,
            'description': "A hardware component failed"
        },
    }

    def __init__(self, event_bus, service_registry, name=None, config=None,
                 hardware: Optional[MotionHardware] = None):
        super().__init__(event_bus, service_registry, name, config or ApplicationConfig())
        self.hardware = hardware or MotionHardware.create(self.config.motion)
        self.read_task: Optional[asyncio.Task] = None
        self.samples_published = 0

    async def start(self):
        """Start the motion service"""
        await super().start()
        try:
            await self.hardware.initialize()
        except Exception as e:
            self.logger.error(f"Failed to initialize motion hardware: {e}")
            raise
        self.read_task = asyncio.create_task(self._read_loop())
        self.logger.info("Motion stream started")

    async def stop(self):
        """Stop the motion service"""
        if self.read_task:
            self.read_task.cancel()
            try:
                await self.read_task
            except asyncio.CancelledError:
                pass
            self.read_task = None
        if self.hardware.is_initialized():
            await self.hardware.shutdown()
        await super().stop()

    async def _read_loop(self):
        """Continuous loop publishing readings until the source ends"""
        try:
            async for reading in self.hardware.readings():
                await self.publish(MotionSampleEvent(
                    x=reading.x,
                    y=reading.y,
                    z=reading.z,
                    timestamp_ms=reading.timestamp_ms,
                ))
                self.samples_published += 1
            self.logger.info("Motion source exhausted", samples=self.samples_published)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.logger.error(f"Error reading motion hardware: {e}")
            await self.publish(HardwareErrorEvent(
                component="motion",
                error_type=type(e).__name__,
                error_message=str(e),
            ))

    async def handle_event(self, event: BaseEvent):
        """The motion service consumes no events"""
        pass
