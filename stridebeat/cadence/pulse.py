"""
Pulse emission: turns a scheduler tick into one short metronome click.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ToneEnvelope:
    """Exponential amplitude ramp from `peak_gain` down to `floor_gain` over the tone."""
    peak_gain: float = 0.5
    floor_gain: float = 0.0001


class AudioEngine(Protocol):
    def is_ready(self) -> bool: ...

    def play_tone(self, frequency_hz: float, duration_s: float, envelope: ToneEnvelope) -> None: ...


class PulseEmitter:
    """Requests a fixed sine click from the audio engine when it is ready."""

    def __init__(self, engine: AudioEngine,
                 frequency_hz: float = 440.0,
                 duration_s: float = 0.05,
                 envelope: ToneEnvelope = ToneEnvelope()):
        self.engine = engine
        self.frequency_hz = frequency_hz
        self.duration_s = duration_s
        self.envelope = envelope

    def emit(self) -> bool:
        """Play one click. Returns False, without raising, if the engine is not ready."""
        if not self.engine.is_ready():
            return False
        self.engine.play_tone(self.frequency_hz, self.duration_s, self.envelope)
        return True
