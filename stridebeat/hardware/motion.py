"""
Motion hardware abstraction for StrideBeat.

Real sensor acquisition lives outside this package; a device adapter only
has to yield `MotionReading`s. The simulated source synthesizes a walk from
a cadence profile so the whole pipeline can run without a phone attached.
"""

import asyncio
import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Sequence, Tuple
from .base import BaseHardware
from stridebeat.core.config import MotionConfig

GRAVITY = 9.81

@dataclass(frozen=True)
class MotionReading:
    """Acceleration including gravity (m/s^2) and sensor time in milliseconds."""
    x: float
    y: float
    z: float
    timestamp_ms: float

def synthesize_walk(profile: Sequence[Tuple[float, float]],
                    sample_rate_hz: float,
                    stride_amplitude: float = 4.0,
                    noise_std: float = 0.0,
                    rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Synthesize device acceleration for a walk.

    Each step is one period of a sinusoid on the vertical axis riding on
    gravity. Phase is accumulated across segments so cadence changes do not
    produce a spurious extra bump.

    Args:
        profile: Sequence of (duration seconds, steps per minute); 0 means standing
        sample_rate_hz: Output sample rate
        stride_amplitude: Peak vertical acceleration per step in m/s^2
        noise_std: Gaussian noise added to every axis
        rng: Random generator for the noise

    Returns:
        Array of shape (n, 4): timestamp_ms, x, y, z
    """
    rates = [np.full(int(round(duration * sample_rate_hz)), spm / 60.0) for duration, spm in profile]
    step_hz = np.concatenate(rates) if rates else np.zeros(0)
    n = len(step_hz)

    phase = 2.0 * np.pi * np.cumsum(step_hz) / sample_rate_hz
    walking = step_hz > 0
    vertical = np.where(walking, stride_amplitude * np.sin(phase), 0.0)

    timestamps_ms = np.arange(n) * 1000.0 / sample_rate_hz
    xyz = np.zeros((n, 3))
    xyz[:, 2] = GRAVITY + vertical
    if noise_std > 0:
        rng = rng or np.random.default_rng()
        xyz += rng.normal(0.0, noise_std, size=xyz.shape)

    return np.column_stack([timestamps_ms, xyz])

class MotionHardware(BaseHardware, ABC):
    """Base class for accelerometer sources."""

    def __init__(self, config: MotionConfig, name: Optional[str] = None):
        super().__init__(config, name or "MotionHardware")

    @abstractmethod
    def readings(self) -> AsyncIterator[MotionReading]:
        """Yield readings in timestamp order until the source is exhausted or shut down."""
        pass

    @classmethod
    def create(cls, config: MotionConfig) -> 'MotionHardware':
        if config.source == "simulated":
            return SimulatedMotionHardware(config, realtime=config.realtime)
        raise RuntimeError(f"Unsupported motion source: {config.source}")

class SimulatedMotionHardware(MotionHardware):
    """Plays back a synthesized walk at the configured sample rate."""

    def __init__(self, config: MotionConfig, name: Optional[str] = None, realtime: bool = True):
        super().__init__(config, name or "SimulatedMotionHardware")
        self.realtime = realtime
        self._samples: Optional[np.ndarray] = None

    async def _initialize_impl(self) -> None:
        self._samples = synthesize_walk(
            self.config.profile,
            self.config.sample_rate_hz,
            self.config.stride_amplitude,
            self.config.noise_std,
        )
        self.logger.info(f"Synthesized {len(self._samples)} samples",
                         seconds=len(self._samples) / self.config.sample_rate_hz)

    async def _shutdown_impl(self) -> None:
        self._samples = None

    async def readings(self) -> AsyncIterator[MotionReading]:
        if self._samples is None:
            raise RuntimeError("Motion hardware not initialized")
        period = 1.0 / self.config.sample_rate_hz
        for timestamp_ms, x, y, z in self._samples:
            if self._samples is None:
                return
            yield MotionReading(float(x), float(y), float(z), float(timestamp_ms))
            if self.realtime:
                await asyncio.sleep(period)
