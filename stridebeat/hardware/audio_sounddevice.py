"""
SoundDevice audio backend for StrideBeat.

Tones are queued from the event loop thread and mixed into a PortAudio
output stream by its callback thread.
"""

import queue
import numpy as np
import sounddevice as sd
from typing import Optional
from .audio import AudioHardware
from stridebeat.core.config import AudioConfig

class SoundDeviceAudioHardware(AudioHardware):
    """Output-only PortAudio stream fed from a queue of rendered tones."""

    def __init__(self, config: AudioConfig, name: Optional[str] = None):
        super().__init__(config, name or "SoundDeviceAudioHardware")
        self._stream: Optional[sd.OutputStream] = None
        self._pending: "queue.Queue[np.ndarray]" = queue.Queue(maxsize=8)
        self._current: Optional[np.ndarray] = None
        self._position = 0

    async def _initialize_impl(self) -> None:
        default_output = sd.default.device[1]
        device_info = sd.query_devices(default_output, kind='output')
        self.logger.info(f"Using output device: {device_info['name']}")

        self._stream = sd.OutputStream(
            samplerate=self.config.sample_rate,
            channels=self.config.channels,
            dtype='float32',
            callback=self._output_callback,
        )
        self._stream.start()

    async def _shutdown_impl(self) -> None:
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
        while not self._pending.empty():
            self._pending.get_nowait()
        self._current = None

    def is_ready(self) -> bool:
        return self._initialized and self._stream is not None and self._stream.active

    def _play_buffer(self, buffer: np.ndarray) -> None:
        try:
            self._pending.put_nowait(buffer)
        except queue.Full:
            self.logger.warning("Tone queue full, dropping beat")

    def _output_callback(self, outdata, frames, time_info, status) -> None:
        if status:
            self.logger.debug(f"Output stream status: {status}")
        out = np.zeros(frames, dtype=np.float32)
        filled = 0
        while filled < frames:
            if self._current is None:
                try:
                    self._current = self._pending.get_nowait()
                    self._position = 0
                except queue.Empty:
                    break
            chunk = self._current[self._position:self._position + frames - filled]
            out[filled:filled + len(chunk)] = chunk
            filled += len(chunk)
            self._position += len(chunk)
            if self._position >= len(self._current):
                self._current = None
        outdata[:] = out[:, np.newaxis]
