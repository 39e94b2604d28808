"""
Status service: the display sink.

Keeps the text a screen would show for the current walking state and logs
every change. It only observes; nothing flows back into the cadence pipeline.
"""

from stridebeat.core.events import EventType, BaseEvent
from stridebeat.core.service import BaseService
from stridebeat.events.walking import WalkingStartedEvent, TempoChangedEvent, WalkingStoppedEvent

NO_TEMPO = "--"

class StatusService(BaseService):
    """Renders walking status for display"""

    CONSUMES_EVENTS = {
        EventType.WALKING_STARTED: {'schema': WalkingStartedEvent, 'handler': 'handle_event'},
        EventType.TEMPO_CHANGED: {'schema': TempoChangedEvent, 'handler': 'handle_event'},
        EventType.WALKING_STOPPED: {'schema': WalkingStoppedEvent, 'handler': 'handle_event'},
    }

    def __init__(self, event_bus, service_registry, name=None, config=None):
        super().__init__(event_bus, service_registry, name, config)
        self.bpm_text = NO_TEMPO
        self.status_text = "Waiting for sensor access..."

    async def start(self):
        await super().start()
        self.status_text = "Start walking..."
        self.logger.info(self.status_text)

    async def handle_event(self, event: BaseEvent):
        if event.type == EventType.WALKING_STARTED:
            self.status_text = "Walking detected..."
        elif event.type == EventType.TEMPO_CHANGED:
            self.bpm_text = str(round(event.bpm))
        elif event.type == EventType.WALKING_STOPPED:
            self.bpm_text = NO_TEMPO
            self.status_text = "Stopped. Start walking again to resume."
        else:
            return
        self.logger.info(self.status_text, bpm=self.bpm_text)
