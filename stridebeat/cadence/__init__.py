"""
Cadence pipeline for StrideBeat.

Conditioning, step detection, idle detection, tempo estimation and beat
scheduling. Everything here runs synchronously inside event loop callbacks;
timers are loop handles obtained from `call_later`.
"""

from .conditioner import Sample, SignalConditioner
from .step_detector import StepEvent, StepDetector
from .idle import IdleMonitor
from .estimator import Tempo, CadenceEstimator, quantize_bpm, TEMPO_CLASSES
from .scheduler import BeatScheduler
from .pulse import PulseEmitter, ToneEnvelope
from .session import WalkingSession, PlaybackState, StatusKind, StatusNotification

__all__ = [
    'Sample',
    'SignalConditioner',
    'StepEvent',
    'StepDetector',
    'IdleMonitor',
    'Tempo',
    'CadenceEstimator',
    'quantize_bpm',
    'TEMPO_CLASSES',
    'BeatScheduler',
    'PulseEmitter',
    'ToneEnvelope',
    'WalkingSession',
    'PlaybackState',
    'StatusKind',
    'StatusNotification',
]
