"""
Beat scheduling.

The metronome is a self-rescheduling callback: each tick emits a pulse and
arms the next tick one beat later at the tempo active at that moment. A tempo
change cancels the pending tick and starts a fresh chain, which beats
immediately, so the change is heard right away instead of at the next
boundary of the old grid.
"""

import asyncio
import logging
from typing import Callable, Optional


class BeatScheduler:
    """
    Keeps at most one pending tick on the event loop.

    Every arm is tagged with a generation number. Cancelling bumps the
    generation, so a tick whose handle was already dequeued by the loop when
    the cancel arrived still recognises itself as stale and does nothing.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, on_beat: Callable[[], None]):
        self._loop = loop
        self._on_beat = on_beat
        self._handle: Optional[asyncio.TimerHandle] = None
        self._generation = 0
        self.bpm: Optional[float] = None
        self.logger = logging.getLogger(__name__)

    @property
    def active(self) -> bool:
        return self._handle is not None

    @property
    def interval(self) -> Optional[float]:
        """Seconds between beats at the current tempo."""
        if self.bpm is None:
            return None
        return 60.0 / self.bpm

    def start(self, bpm: float) -> None:
        """Beat now, then every 60/bpm seconds until stopped or restarted."""
        if bpm <= 0:
            raise ValueError(f"Tempo must be positive, got {bpm}")
        self._cancel_pending()
        self.bpm = bpm
        self.logger.debug(f"Beat scheduler started at {bpm:.0f} BPM")
        self._tick(self._generation)

    def restart(self, bpm: float) -> None:
        """Drop the pending tick and start a new chain at `bpm`."""
        self._cancel_pending()
        self.start(bpm)

    def stop(self) -> None:
        if self._handle is not None:
            self.logger.debug("Beat scheduler stopped")
        self._cancel_pending()

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        self._on_beat()
        # The beat callback may have stopped or restarted us
        if generation != self._generation:
            return
        self._handle = self._loop.call_later(self.interval, self._tick, generation)
