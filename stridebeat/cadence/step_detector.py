"""
Step detection on the smoothed acceleration magnitude.

A step is a rising edge of the smoothed signal through `peak_threshold`:
the signal must have been at or below the threshold on the previous sample,
so a sustained bump counts once. Edges closer than `min_step_interval`
to the last accepted step are dropped as double triggers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StepEvent:
    timestamp: float


class StepDetector:
    """Rising-edge threshold detector with a debounce interval."""

    def __init__(self, peak_threshold: float = 10.5, min_step_interval: float = 0.25):
        self.peak_threshold = peak_threshold
        self.min_step_interval = min_step_interval
        self.above_threshold = False
        self.last_step_timestamp = 0.0

    def observe(self, smoothed: float, timestamp: float) -> Optional[StepEvent]:
        """
        Feed one smoothed magnitude.

        Args:
            smoothed: Moving-average magnitude in m/s^2
            timestamp: Sample time in seconds

        Returns:
            A StepEvent if this sample completes a qualifying up-crossing, else None
        """
        is_above = smoothed > self.peak_threshold
        step = None

        # The edge test uses the latch from the previous sample
        if (is_above
                and not self.above_threshold
                and timestamp - self.last_step_timestamp > self.min_step_interval):
            self.last_step_timestamp = timestamp
            step = StepEvent(timestamp)

        self.above_threshold = is_above
        return step

    def clear_latch(self) -> None:
        self.above_threshold = False

    def reset(self) -> None:
        self.above_threshold = False
        self.last_step_timestamp = 0.0
