"""Audio output device backed by a blocking PyAudio stream."""

import logging
from typing import Optional

import pyaudio

from ..models.audio import StreamFormat
from .errors import AudioOutputError

logger = logging.getLogger(__name__)


class AudioOutput:
    """One PCM output stream, opened per track.

    Writes block until the device has buffer space, which is the only
    flow control between decoder and speaker.
    """

    def __init__(self):
        self.pyaudio_instance: Optional[pyaudio.PyAudio] = None
        self.stream = None
        self.format: Optional[StreamFormat] = None

    @property
    def is_open(self) -> bool:
        return self.stream is not None

    def open(self, fmt: StreamFormat, frames_per_buffer: int = 1024) -> None:
        """Open an output stream matching the decoder's format.

        Args:
            fmt: Sample rate, channel count and sample width to play
            frames_per_buffer: Frames per device buffer

        Raises:
            AudioOutputError: If the device refuses the stream
        """
        if self.is_open:
            self.close()

        try:
            self.pyaudio_instance = pyaudio.PyAudio()
            self.stream = self.pyaudio_instance.open(
                format=self.pyaudio_instance.get_format_from_width(fmt.sample_width),
                channels=fmt.channels,
                rate=fmt.sample_rate,
                output=True,
                frames_per_buffer=frames_per_buffer,
            )
        except (OSError, ValueError) as e:
            self.close()
            raise AudioOutputError(f"Cannot open audio output: {e}") from e

        self.format = fmt
        logger.info(f"Audio output opened: {fmt.sample_rate}Hz, {fmt.channels}ch")

    def reopen(self, fmt: StreamFormat, frames_per_buffer: int = 1024) -> bool:
        """Reopen the stream if the format changed.

        Returns:
            True if the stream was reopened
        """
        if self.is_open and fmt == self.format:
            return False
        logger.warning(f"Output format changed to {fmt.sample_rate}Hz, {fmt.channels}ch, reopening stream")
        self.open(fmt, frames_per_buffer)
        return True

    def write(self, data: bytes) -> None:
        if not self.is_open:
            raise AudioOutputError("Audio output is not open")
        try:
            self.stream.write(data)
        except OSError as e:
            raise AudioOutputError(f"Write to audio output failed: {e}") from e

    def drain(self) -> None:
        """Let buffered audio finish playing.

        Raises:
            AudioOutputError: If the device reports a failure while draining
        """
        if not self.is_open:
            return
        try:
            self.stream.stop_stream()
        except OSError as e:
            raise AudioOutputError(f"Drain failed: {e}") from e

    def close(self) -> None:
        """Release the stream and the PyAudio instance. Safe to call twice."""
        stream, self.stream = self.stream, None
        instance, self.pyaudio_instance = self.pyaudio_instance, None
        try:
            if stream is not None:
                stream.close()
        except OSError as e:
            logger.warning(f"Error closing audio stream: {e}")
        finally:
            if instance is not None:
                instance.terminate()
