"""
Configuration management system for StrideBeat.

This module provides Pydantic models for type-safe configuration with validation
and environment variable integration.
"""

from typing import List, Tuple
from enum import Enum
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class LogLevel(str, Enum):
    """Log levels for the application."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class BaseConfig(BaseSettings):
    """
    Base configuration class with common settings for all components.

    All other configuration classes should inherit from this class.
    """
    model_config = SettingsConfigDict(env_file=".env", env_prefix="STRIDEBEAT_", extra="ignore")

    debug: bool = False
    log_level: LogLevel = LogLevel.INFO

class EventConfig(BaseConfig):
    """Configuration for the event system."""
    model_config = SettingsConfigDict(env_prefix="STRIDEBEAT_EVENT_")

    max_trace_events: int = 1000
    tracing_enabled: bool = True

class CadenceConfig(BaseConfig):
    """
    Configuration for the cadence pipeline.

    The defaults match a phone held in hand or pocket sampling at about 60 Hz:
    a 20-sample moving average spans roughly a third of a second.
    """
    model_config = SettingsConfigDict(env_prefix="STRIDEBEAT_CADENCE_")

    moving_average_window: int = 20
    peak_threshold: float = 10.5  # m/s^2, smoothed magnitude including gravity
    min_step_interval: float = 0.25  # seconds, caps detection at 240 steps/min
    stop_threshold_ms: float = 2000.0
    step_history_size: int = 5
    initial_bpm: float = 130.0

    @field_validator("moving_average_window")
    @classmethod
    def validate_window(cls, v):
        if v < 1:
            raise ValueError("Moving average window must hold at least one sample")
        return v

    @field_validator("step_history_size")
    @classmethod
    def validate_history(cls, v):
        if v < 2:
            raise ValueError("Step history must hold at least two steps to measure an interval")
        return v

    @field_validator("min_step_interval", "stop_threshold_ms", "initial_bpm")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

class ToneConfig(BaseConfig):
    """Configuration for the metronome click."""
    model_config = SettingsConfigDict(env_prefix="STRIDEBEAT_TONE_")

    frequency_hz: float = 440.0
    duration_s: float = 0.05
    peak_gain: float = 0.5
    floor_gain: float = 0.0001

    @model_validator(mode="after")
    def validate_envelope(self):
        """An exponential ramp needs a strictly positive floor below the peak."""
        if not 0.0 < self.floor_gain < self.peak_gain <= 1.0:
            raise ValueError("Tone gains must satisfy 0 < floor_gain < peak_gain <= 1")
        return self

class AudioConfig(BaseConfig):
    """Configuration for audio output."""
    model_config = SettingsConfigDict(env_prefix="STRIDEBEAT_AUDIO_")

    backend: str = "sounddevice"
    sample_rate: int = 44100
    channels: int = 1
    default_volume: float = 1.0

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v):
        valid_backends = ["sounddevice", "silent"]
        if v not in valid_backends:
            raise ValueError(f"Audio backend must be one of {valid_backends}")
        return v

    @field_validator("default_volume")
    @classmethod
    def validate_volume(cls, v):
        if not 0.0 <= v <= 1.0:
            raise ValueError("Volume must be between 0.0 and 1.0")
        return v

class MotionConfig(BaseConfig):
    """Configuration for the motion input."""
    model_config = SettingsConfigDict(env_prefix="STRIDEBEAT_MOTION_")

    source: str = "simulated"
    sample_rate_hz: float = 60.0
    # (duration seconds, steps per minute); 0 steps per minute means standing still
    profile: List[Tuple[float, float]] = [(10.0, 110.0), (10.0, 140.0), (4.0, 0.0), (10.0, 95.0)]
    stride_amplitude: float = 4.0
    noise_std: float = 0.2
    # False replays the synthesized walk as fast as it can be consumed
    realtime: bool = True

    @field_validator("sample_rate_hz")
    @classmethod
    def validate_rate(cls, v):
        if v <= 0:
            raise ValueError("Sample rate must be positive")
        return v

class ApplicationConfig(BaseConfig):
    """
    Main application configuration that combines all component configurations.

    This is the top-level configuration class that should be used by the application.
    """
    model_config = SettingsConfigDict(env_prefix="STRIDEBEAT_", env_nested_delimiter="__")

    event: EventConfig = Field(default_factory=EventConfig)
    cadence: CadenceConfig = Field(default_factory=CadenceConfig)
    tone: ToneConfig = Field(default_factory=ToneConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    motion: MotionConfig = Field(default_factory=MotionConfig)

def get_config() -> ApplicationConfig:
    """
    Get the application configuration.

    Returns:
        The validated ApplicationConfig instance
    """
    return ApplicationConfig()
