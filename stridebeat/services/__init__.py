"""
Service implementations for StrideBeat.

Services are the runtime components of the application, each responsible
for a specific piece of functionality. They communicate through events
published on the shared event bus.
"""

from .motion_service import MotionService
from .cadence_service import CadenceService
from .status_service import StatusService

__all__ = ['MotionService', 'CadenceService', 'StatusService']
