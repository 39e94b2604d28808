"""
Cadence estimation from recent step timestamps.

The mean interval over the last few steps gives a raw cadence in steps per
minute. Raw cadence jitters from step to step, so it is snapped to a coarse
set of tempo classes and the metronome only changes when the class changes.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

# (low inclusive, high exclusive, tempo class)
TEMPO_CLASSES: Tuple[Tuple[float, float, float], ...] = (
    (80.0, 100.0, 90.0),
    (100.0, 120.0, 110.0),
    (120.0, 140.0, 130.0),
    (140.0, 160.0, 150.0),
    (160.0, 180.0, 170.0),
)


def quantize_bpm(raw_bpm: float) -> Optional[float]:
    """Map a raw cadence to its tempo class, or None outside 80-180 BPM."""
    for low, high, tempo in TEMPO_CLASSES:
        if low <= raw_bpm < high:
            return tempo
    return None


@dataclass(frozen=True)
class Tempo:
    """
    A tempo to play at.

    `raw_bpm` is the unquantized estimate that produced it, or None when the
    tempo is the previously held one reused for a fast start.
    """
    quantized_bpm: float
    raw_bpm: Optional[float] = None


class CadenceEstimator:
    """Sliding window of step timestamps feeding a quantized tempo."""

    def __init__(self, history_size: int = 5, initial_bpm: float = 130.0):
        self.history_size = history_size
        self.current_bpm = initial_bpm
        self._history: Deque[float] = deque(maxlen=history_size)

    @property
    def history(self) -> List[float]:
        return list(self._history)

    def observe(self, step_timestamp: float, first_beat: bool = False) -> Optional[Tempo]:
        """
        Record a step and decide whether the tempo should change.

        Args:
            step_timestamp: Time of the accepted step in seconds
            first_beat: True for the first step after playback resumed

        Returns:
            The held tempo on a fast start, a new Tempo when the quantized class
            changed, otherwise None
        """
        if first_beat and len(self._history) <= 1:
            # One timestamp gives no interval; resume at the held tempo right away
            self._history.append(step_timestamp)
            return Tempo(quantized_bpm=self.current_bpm)

        self._history.append(step_timestamp)
        if len(self._history) < 2:
            return None

        raw_bpm = self.raw_bpm()
        if raw_bpm is None:
            return None

        quantized = quantize_bpm(raw_bpm)
        if quantized is None or quantized == self.current_bpm:
            return None

        self.current_bpm = quantized
        return Tempo(quantized_bpm=quantized, raw_bpm=raw_bpm)

    def raw_bpm(self) -> Optional[float]:
        """Cadence implied by the mean step interval in the window, if measurable."""
        stamps = list(self._history)
        if len(stamps) < 2:
            return None
        intervals = [later - earlier for earlier, later in zip(stamps, stamps[1:])]
        average_interval = sum(intervals) / len(intervals)
        if average_interval <= 0:
            return None
        return 60.0 / average_interval

    def reset(self) -> None:
        """Forget the step window; the held tempo is kept for the next start."""
        self._history.clear()
