"""
System events for StrideBeat.

This module defines events related to application lifecycle, service state,
and system-level failures.
"""

from typing import Dict, Any, Optional, Literal
from stridebeat.core.events import BaseEvent, EventType

class ApplicationStartupCompletedEvent(BaseEvent):
    """
    Event published when application startup has completed.

    This event signals that all services have been started
    and motion samples are flowing.
    """
    type: Literal[EventType.APPLICATION_STARTUP_COMPLETED] = EventType.APPLICATION_STARTUP_COMPLETED

class ServiceStateChangedEvent(BaseEvent):
    """
    Event published when a service changes state.

    This event is used to communicate service lifecycle changes
    (started, stopping, stopped, error).
    """
    type: Literal[EventType.SERVICE_STATE_CHANGED] = EventType.SERVICE_STATE_CHANGED
    service_name: str
    state: str
    error: Optional[str] = None  # Present only if state is 'error'

class HardwareErrorEvent(BaseEvent):
    """
    Event published when hardware encounters an error.

    The cadence pipeline keeps running without audio or motion input;
    consumers decide whether to surface the problem.
    """
    type: Literal[EventType.HARDWARE_ERROR] = EventType.HARDWARE_ERROR
    component: str  # 'audio' or 'motion'
    error_type: str
    error_message: str
    details: Optional[Dict[str, Any]] = None
