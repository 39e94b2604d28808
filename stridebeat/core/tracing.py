"""
Event tracing for StrideBeat.

Keeps the most recent events published on the bus so a run can be summarised
at shutdown: how many samples, steps and tempo changes went by, and who sent them.
"""

import time
from collections import Counter, deque
from typing import Dict, Any, Deque
from .events import BaseEvent

class EventTracer:
    """Bounded record of published events."""

    def __init__(self, max_events: int = 1000):
        self.max_events = max_events
        self.events: Deque[Dict[str, Any]] = deque(maxlen=max_events)

    def record_event(self, event: BaseEvent) -> None:
        self.events.append({
            'recorded_at': time.time(),
            'trace_id': event.trace_id,
            'type': event.type,
            'producer': event.producer_name,
        })

    def get_event_rate(self, window_seconds: int = 60) -> float:
        """Events per second over the last `window_seconds`."""
        cutoff = time.time() - window_seconds
        recent = sum(1 for e in self.events if e['recorded_at'] >= cutoff)
        return recent / window_seconds

    def get_event_stats(self) -> Dict[str, Any]:
        """Totals per event type and per producer for the buffered events."""
        return {
            'total_events': len(self.events),
            'event_types': dict(Counter(e['type'] for e in self.events)),
            'producers': dict(Counter(e['producer'] for e in self.events)),
            'rate_per_second': self.get_event_rate(),
        }
