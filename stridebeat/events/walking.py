"""
Walking events for StrideBeat.

These are the status notifications of the cadence pipeline: the walker started
moving, the metronome tempo changed, or the walker stopped.
"""

from typing import Literal, Optional
from stridebeat.core.events import BaseEvent, EventType

class WalkingStartedEvent(BaseEvent):
    """Event published on the first accepted step after being idle."""
    type: Literal[EventType.WALKING_STARTED] = EventType.WALKING_STARTED

class TempoChangedEvent(BaseEvent):
    """
    Event published when the metronome (re)starts at a tempo.

    `raw_bpm` is None when playback resumed at the previously held tempo
    before a new cadence estimate was available.
    """
    type: Literal[EventType.TEMPO_CHANGED] = EventType.TEMPO_CHANGED
    bpm: float
    raw_bpm: Optional[float] = None

class WalkingStoppedEvent(BaseEvent):
    """Event published when no step was detected within the idle timeout."""
    type: Literal[EventType.WALKING_STOPPED] = EventType.WALKING_STOPPED
