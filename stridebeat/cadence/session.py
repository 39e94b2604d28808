"""
Walking session: the cadence pipeline and its state, owned by one object.

Per sample, strictly in this order:

    Sample -> SignalConditioner -> StepDetector
           -> IdleMonitor.arm()            (every accepted step)
           -> CadenceEstimator.observe()   (first step after idle takes the fast path)
           -> BeatScheduler.restart()      (only when a tempo comes back)

Playback state machine:

    IDLE --first accepted step--> PLAYING   (StartedWalking, TempoChanged at held tempo)
    PLAYING --tempo class change--> PLAYING (TempoChanged, scheduler restarted)
    PLAYING --idle deadline--> IDLE         (Stopped, scheduler torn down, windows cleared)

The held tempo survives Stop so a resumed walk starts at the last cadence.
"""

import asyncio
import structlog
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Tuple

from .conditioner import Sample, SignalConditioner
from .step_detector import StepDetector, StepEvent
from .idle import IdleMonitor
from .estimator import CadenceEstimator, Tempo
from .scheduler import BeatScheduler
from .pulse import PulseEmitter


class PlaybackState(Enum):
    IDLE = auto()
    PLAYING = auto()


class StatusKind(Enum):
    STARTED_WALKING = auto()
    TEMPO_CHANGED = auto()
    STOPPED = auto()


@dataclass(frozen=True)
class StatusNotification:
    kind: StatusKind
    bpm: Optional[float] = None
    raw_bpm: Optional[float] = None


StatusSink = Callable[[StatusNotification], None]


class WalkingSession:
    """
    All mutable cadence state for one walking session.

    Timers are armed on `loop`; anything exposing `call_later` and returning
    cancellable handles will do.
    """

    def __init__(self,
                 loop: asyncio.AbstractEventLoop,
                 emitter: PulseEmitter,
                 status_sink: Optional[StatusSink] = None,
                 moving_average_window: int = 20,
                 peak_threshold: float = 10.5,
                 min_step_interval: float = 0.25,
                 stop_threshold_ms: float = 2000.0,
                 step_history_size: int = 5,
                 initial_bpm: float = 130.0):
        self.logger = structlog.get_logger(component="walking_session")
        self.emitter = emitter
        self._status_sink = status_sink

        self.conditioner = SignalConditioner(moving_average_window)
        self.detector = StepDetector(peak_threshold, min_step_interval)
        self.estimator = CadenceEstimator(step_history_size, initial_bpm)
        self.idle_monitor = IdleMonitor(loop, stop_threshold_ms / 1000.0, self._on_idle)
        self.scheduler = BeatScheduler(loop, self._on_beat)

        self.state = PlaybackState.IDLE
        self.beat_count = 0
        self._active = False

    @classmethod
    def from_config(cls, loop, emitter: PulseEmitter, config, status_sink: Optional[StatusSink] = None) -> 'WalkingSession':
        """Build a session from a CadenceConfig."""
        return cls(
            loop,
            emitter,
            status_sink,
            moving_average_window=config.moving_average_window,
            peak_threshold=config.peak_threshold,
            min_step_interval=config.min_step_interval,
            stop_threshold_ms=config.stop_threshold_ms,
            step_history_size=config.step_history_size,
            initial_bpm=config.initial_bpm,
        )

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def current_bpm(self) -> float:
        return self.estimator.current_bpm

    def start(self) -> None:
        """Begin accepting samples. Playback itself starts on the first step."""
        if self._active:
            return
        self._active = True
        self.logger.info("Walking session started", bpm=self.current_bpm)

    def stop(self) -> None:
        """Tear down timers and windows; no callbacks remain pending afterwards."""
        if not self._active:
            return
        self.idle_monitor.cancel()
        self._halt_playback()
        self.reset()
        self._active = False
        self.logger.info("Walking session stopped", beats=self.beat_count)

    def reset(self) -> None:
        """Clear the smoothing window, threshold latch and step history. Keeps the tempo."""
        self.conditioner.reset()
        self.detector.reset()
        self.estimator.reset()

    def observe_acceleration(self, acceleration: Tuple[float, float, float], timestamp_ms: float) -> Optional[StepEvent]:
        return self.observe(Sample.from_acceleration(acceleration, timestamp_ms))

    def observe(self, sample: Sample) -> Optional[StepEvent]:
        """
        Run one sample through the pipeline.

        Args:
            sample: Magnitude and timestamp of the reading

        Returns:
            The accepted step, if this sample produced one
        """
        if not self._active:
            return None

        smoothed = self.conditioner.observe(sample.magnitude)
        step = self.detector.observe(smoothed, sample.timestamp)
        if step is None:
            return None

        self.idle_monitor.arm()

        first_beat = False
        if self.state is PlaybackState.IDLE:
            self.state = PlaybackState.PLAYING
            first_beat = True
            self.logger.info("Walking detected")
            self._notify(StatusNotification(StatusKind.STARTED_WALKING))

        tempo = self.estimator.observe(step.timestamp, first_beat=first_beat)
        if tempo is not None:
            self._apply_tempo(tempo)
        return step

    def _apply_tempo(self, tempo: Tempo) -> None:
        if tempo.raw_bpm is None:
            self.logger.info("Resuming beat", bpm=tempo.quantized_bpm)
        else:
            self.logger.info("Tempo changed", bpm=tempo.quantized_bpm, raw_bpm=round(tempo.raw_bpm, 1))
        self.scheduler.restart(tempo.quantized_bpm)
        self._notify(StatusNotification(StatusKind.TEMPO_CHANGED, tempo.quantized_bpm, tempo.raw_bpm))

    def _on_beat(self) -> None:
        self.beat_count += 1
        self.emitter.emit()

    def _on_idle(self) -> None:
        self.logger.info("Walking stopped")
        self._halt_playback()
        self.estimator.reset()
        self.conditioner.reset()
        self.detector.clear_latch()

    def _halt_playback(self) -> None:
        self.scheduler.stop()
        if self.state is PlaybackState.PLAYING:
            self.state = PlaybackState.IDLE
            self._notify(StatusNotification(StatusKind.STOPPED))

    def _notify(self, notification: StatusNotification) -> None:
        if self._status_sink is not None:
            self._status_sink(notification)
