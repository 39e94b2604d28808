"""
StrideBeat - a walking-cadence metronome.

This package estimates a walker's step cadence from a 3-axis acceleration
stream and drives an audio metronome whose tempo follows the detected cadence.

Features:
- Moving-average conditioning and hysteresis step detection
- Sliding-window cadence estimation snapped to musical tempo classes
- Self-resynchronizing beat scheduling with idle stop detection
- Event-driven services for motion input, cadence tracking and status display
"""

__version__ = "1.0.0"
