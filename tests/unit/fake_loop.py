"""
Deterministic stand-in for the event loop's timer API.

Only `time()` and `call_later()` are provided, which is all the cadence
pipeline uses. Time moves only when a test calls `advance` or `advance_to`.
"""

import heapq
import itertools


class FakeHandle:
    def __init__(self, when, callback, args):
        self.when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled

    def _run(self):
        self._callback(*self._args)


class FakeLoop:
    def __init__(self, start=0.0):
        self._now = start
        self._queue = []
        self._seq = itertools.count()

    def time(self):
        return self._now

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(self._now + delay, callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    def pending(self):
        """Number of scheduled callbacks that have not been cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled())

    def advance_to(self, target):
        """Run every callback due at or before `target`, in time order."""
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self._now = when
            handle._run()
        self._now = max(self._now, target)

    def advance(self, seconds):
        self.advance_to(self._now + seconds)
