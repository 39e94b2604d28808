"""
Idle detection: a single-shot deadline pushed back by every step.
"""

import asyncio
import logging
from typing import Callable, Optional


class IdleMonitor:
    """
    Fires `on_idle` once when no step has been seen for `timeout` seconds.

    Only one deadline is ever pending: arming cancels the previous one first.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, timeout: float, on_idle: Callable[[], None]):
        self._loop = loop
        self.timeout = timeout
        self._on_idle = on_idle
        self._handle: Optional[asyncio.TimerHandle] = None
        self.logger = logging.getLogger(__name__)

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def arm(self) -> None:
        """(Re)start the deadline from now."""
        self.cancel()
        self._handle = self._loop.call_later(self.timeout, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        if self._handle is None:
            return
        self._handle = None
        self.logger.debug(f"No step for {self.timeout:.2f}s, signalling idle")
        self._on_idle()
