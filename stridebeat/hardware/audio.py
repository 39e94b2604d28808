"""
Audio hardware abstraction for StrideBeat.

This module provides the output side of the metronome: a tone renderer and
a hardware abstraction whose backends are selected by configuration.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Optional
from .base import BaseHardware
from stridebeat.cadence.pulse import ToneEnvelope
from stridebeat.core.config import AudioConfig

def render_tone(frequency_hz: float,
                duration_s: float,
                envelope: ToneEnvelope,
                sample_rate: int,
                volume: float = 1.0) -> np.ndarray:
    """
    Render a sine click with an exponential decay.

    The gain starts at `envelope.peak_gain` and falls geometrically to
    `envelope.floor_gain` at the end of the tone.

    Args:
        frequency_hz: Pitch of the sine
        duration_s: Length of the tone
        envelope: Gain ramp endpoints
        sample_rate: Output sample rate in Hz
        volume: Master volume multiplier (0.0 to 1.0)

    Returns:
        float32 mono buffer
    """
    n_samples = max(1, int(round(duration_s * sample_rate)))
    t = np.arange(n_samples, dtype=np.float64) / sample_rate
    ratio = envelope.floor_gain / envelope.peak_gain
    gain = envelope.peak_gain * np.power(ratio, t / duration_s)
    wave = np.sin(2.0 * np.pi * frequency_hz * t) * gain * volume
    return wave.astype(np.float32)

class AudioHardware(BaseHardware, ABC):
    """
    Base class for audio output implementations.

    `play_tone` is called from event loop timer callbacks, so backends must
    hand the buffer off without blocking.
    """

    def __init__(self, config: AudioConfig, name: Optional[str] = None):
        super().__init__(config, name or "AudioHardware")
        self.volume = config.default_volume

    def is_ready(self) -> bool:
        return self._initialized

    def play_tone(self, frequency_hz: float, duration_s: float, envelope: ToneEnvelope) -> None:
        """Render and queue one tone. Dropped silently when the device is not ready."""
        if not self.is_ready():
            return
        buffer = render_tone(frequency_hz, duration_s, envelope, self.config.sample_rate, self.volume)
        self._play_buffer(buffer)

    @abstractmethod
    def _play_buffer(self, buffer: np.ndarray) -> None:
        pass

    async def set_volume(self, volume: float) -> None:
        """
        Set the audio output volume.

        Args:
            volume: Volume level (0.0 to 1.0)
        """
        if volume < 0.0 or volume > 1.0:
            raise ValueError("Volume must be between 0.0 and 1.0")
        self.volume = volume

    def get_volume(self) -> float:
        return self.volume

    @classmethod
    def create(cls, config: AudioConfig) -> 'AudioHardware':
        """
        Create the audio backend named in the configuration.

        Args:
            config: Audio configuration

        Returns:
            AudioHardware instance for `config.backend`
        """
        if config.backend == "sounddevice":
            from .audio_sounddevice import SoundDeviceAudioHardware
            return SoundDeviceAudioHardware(config)
        elif config.backend == "silent":
            return SilentAudioHardware(config)
        else:
            raise RuntimeError(f"Unsupported audio backend: {config.backend}")

class SilentAudioHardware(AudioHardware):
    """Renders tones and discards them. Used on headless machines."""

    def __init__(self, config: AudioConfig, name: Optional[str] = None):
        super().__init__(config, name or "SilentAudioHardware")
        self.tones_played = 0

    async def _initialize_impl(self) -> None:
        pass

    async def _shutdown_impl(self) -> None:
        pass

    def _play_buffer(self, buffer: np.ndarray) -> None:
        self.tones_played += 1
