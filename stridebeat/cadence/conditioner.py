"""
Signal conditioning for raw acceleration.

Walking shows up as a periodic bump in the magnitude of the acceleration
vector. The raw magnitude is noisy, so it is smoothed with a simple moving
average before any threshold is applied.
"""

from collections import deque
from dataclasses import dataclass
from math import sqrt
from typing import Deque, Tuple


@dataclass(frozen=True)
class Sample:
    """One accelerometer reading reduced to a magnitude (m/s^2) and a time (seconds)."""
    magnitude: float
    timestamp: float

    @classmethod
    def from_acceleration(cls, acceleration: Tuple[float, float, float], timestamp_ms: float) -> 'Sample':
        """Build a sample from an (x, y, z) vector including gravity and a millisecond timestamp."""
        x, y, z = acceleration
        return cls(magnitude=sqrt(x * x + y * y + z * z), timestamp=timestamp_ms / 1000.0)


class SignalConditioner:
    """Moving average over the last `window_size` magnitudes."""

    def __init__(self, window_size: int = 20):
        self.window_size = window_size
        self._window: Deque[float] = deque(maxlen=window_size)

    def observe(self, magnitude: float) -> float:
        """Add a magnitude, evicting the oldest beyond the window, and return the window mean."""
        self._window.append(magnitude)
        return sum(self._window) / len(self._window)

    def __len__(self) -> int:
        return len(self._window)

    def reset(self) -> None:
        self._window.clear()
