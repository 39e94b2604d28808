"""
Sensor events for StrideBeat.

This module defines the raw motion sample event produced by the motion service.
"""

from typing import Literal, Tuple
from stridebeat.core.events import BaseEvent, EventType

class MotionSampleEvent(BaseEvent):
    """
    Event published for every accelerometer reading.

    Acceleration includes gravity and is expressed in m/s^2 on the device axes.
    The timestamp comes from the sensor's monotonic clock, in milliseconds.
    """
    type: Literal[EventType.MOTION_SAMPLE] = EventType.MOTION_SAMPLE
    x: float
    y: float
    z: float
    timestamp_ms: float

    @property
    def acceleration(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)
