"""Decoder backends behind one capability set.

Both backends produce interleaved signed 16-bit PCM so the output
stream never has to convert samples.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Iterator, Optional, Type

import miniaudio
import numpy as np
import soundfile as sf

from ..models.audio import (
    UNKNOWN_LENGTH,
    AudioSource,
    DecodedChunk,
    DecodeStatus,
    FormatFamily,
    StreamFormat,
)
from .errors import AudioOpenError

logger = logging.getLogger(__name__)

# Decoded samples (not frames) moved per loop iteration
DEFAULT_CHUNK_SAMPLES = 8192


class AbstractDecoder(ABC):
    """Abstract base class for decoder backends."""

    family: FormatFamily

    def __init__(self, path: str, chunk_samples: int = DEFAULT_CHUNK_SAMPLES):
        """Initialize decoder for one file.

        Args:
            path: Path to the audio file
            chunk_samples: Decoded samples per read, split across channels
        """
        self.path = path
        self.chunk_samples = chunk_samples

    def chunk_frames(self, channels: int) -> int:
        return max(1, self.chunk_samples // max(1, channels))

    @abstractmethod
    def open(self) -> None:
        """Open the file and read its native format.

        Raises:
            AudioOpenError: If the file cannot be opened or decoded
        """
        pass

    @abstractmethod
    def get_format(self) -> StreamFormat:
        """Current output format of the decoder."""
        pass

    @abstractmethod
    def read_chunk(self) -> DecodedChunk:
        """Decode the next chunk of PCM frames."""
        pass

    @abstractmethod
    def seek(self, frame: int) -> bool:
        """Move to an absolute PCM frame.

        Returns:
            True if the decoder is now positioned at frame
        """
        pass

    @abstractmethod
    def get_position(self) -> int:
        """Current PCM frame position."""
        pass

    @abstractmethod
    def get_length(self) -> int:
        """Total PCM frames, or UNKNOWN_LENGTH."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the native decoder handle. Safe to call twice."""
        pass


class Mp3Decoder(AbstractDecoder):
    """Frame-coded backend using miniaudio's MP3 decoder."""

    family = FormatFamily.FRAME_CODED

    def __init__(self, path: str, chunk_samples: int = DEFAULT_CHUNK_SAMPLES):
        super().__init__(path, chunk_samples)
        self._format: Optional[StreamFormat] = None
        self._length = UNKNOWN_LENGTH
        self._position = 0
        self._stream: Optional[Iterator] = None

    def open(self) -> None:
        try:
            info = miniaudio.mp3_get_file_info(self.path)
        except miniaudio.MiniaudioError as e:
            raise AudioOpenError(f"mpeg decoder cannot open '{self.path}': {e}") from e

        if info.sample_rate <= 0 or info.nchannels <= 0:
            raise AudioOpenError(f"Cannot get initial audio format for '{self.path}'")

        self._format = StreamFormat(sample_rate=info.sample_rate, channels=info.nchannels)
        if info.num_frames > 0:
            self._length = info.num_frames
        else:
            logger.warning(f"Could not fully scan '{self.path}' for accurate length")
            self._length = UNKNOWN_LENGTH

        self._stream = self._start_stream(0)
        self._position = 0
        logger.info(f"MP3 decoder opened: {self.path} "
                    f"({info.sample_rate}Hz, {info.nchannels}ch, {self._length} frames)")

    def _start_stream(self, seek_frame: int) -> Iterator:
        return miniaudio.stream_file(
            self.path,
            output_format=miniaudio.SampleFormat.SIGNED16,
            nchannels=self._format.channels,
            sample_rate=self._format.sample_rate,
            frames_to_read=self.chunk_frames(self._format.channels),
            seek_frame=seek_frame,
        )

    def _close_stream(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def get_format(self) -> StreamFormat:
        return self._format

    def read_chunk(self) -> DecodedChunk:
        if self._stream is None:
            return DecodedChunk(DecodeStatus.ERROR, message="Decoder is not open")
        try:
            samples = next(self._stream)
        except StopIteration:
            return DecodedChunk(DecodeStatus.DONE)
        except miniaudio.MiniaudioError as e:
            return DecodedChunk(DecodeStatus.ERROR, message=str(e))

        frames = len(samples) // self._format.channels
        self._position += frames
        return DecodedChunk(DecodeStatus.OK, samples.tobytes(), frames)

    def seek(self, frame: int) -> bool:
        if self._format is None:
            return False
        try:
            stream = self._start_stream(frame)
        except miniaudio.MiniaudioError as e:
            # The current stream stays in place and keeps decoding
            logger.warning(f"MP3 seek to frame {frame} failed: {e}")
            return False
        self._close_stream()
        self._stream = stream
        self._position = frame
        return True

    def get_position(self) -> int:
        return self._position

    def get_length(self) -> int:
        return self._length

    def close(self) -> None:
        self._close_stream()


class SoundFileDecoder(AbstractDecoder):
    """Sample-coded backend reading WAV/FLAC/OGG through libsndfile."""

    family = FormatFamily.SAMPLE_CODED

    def __init__(self, path: str, chunk_samples: int = DEFAULT_CHUNK_SAMPLES):
        super().__init__(path, chunk_samples)
        self._file: Optional[sf.SoundFile] = None
        self._frames_played = 0

    def open(self) -> None:
        try:
            self._file = sf.SoundFile(self.path, mode="r")
        except (RuntimeError, OSError) as e:
            raise AudioOpenError(f"Cannot open audio file with libsndfile: {e}") from e
        self._frames_played = 0
        logger.info(f"Sound file opened: {self.path} "
                    f"({self._file.samplerate}Hz, {self._file.channels}ch, {self._file.frames} frames)")

    def get_format(self) -> StreamFormat:
        return StreamFormat(sample_rate=self._file.samplerate, channels=self._file.channels)

    def read_chunk(self) -> DecodedChunk:
        if self._file is None:
            return DecodedChunk(DecodeStatus.ERROR, message="Decoder is not open")
        try:
            data: np.ndarray = self._file.read(
                self.chunk_frames(self._file.channels), dtype="int16")
        except (RuntimeError, ValueError) as e:
            return DecodedChunk(DecodeStatus.ERROR, message=str(e))

        frames = len(data)
        if frames <= 0:
            return DecodedChunk(DecodeStatus.DONE)

        self._frames_played += frames
        return DecodedChunk(DecodeStatus.OK, np.ascontiguousarray(data).tobytes(), frames)

    def seek(self, frame: int) -> bool:
        if self._file is None:
            return False
        try:
            position = self._file.seek(frame)
        except (RuntimeError, ValueError) as e:
            logger.warning(f"Seek to frame {frame} failed: {e}")
            return False
        if position < 0:
            return False
        self._frames_played = position
        return True

    def get_position(self) -> int:
        if self._file is None:
            return self._frames_played
        try:
            position = self._file.tell()
        except RuntimeError:
            return self._frames_played
        if position != self._frames_played:
            logger.debug(f"Position drift: tell()={position}, played={self._frames_played}")
            self._frames_played = position
        return position

    def get_length(self) -> int:
        if self._file is None or self._file.frames <= 0:
            return UNKNOWN_LENGTH
        return self._file.frames

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


DECODERS: Dict[FormatFamily, Type[AbstractDecoder]] = {
    FormatFamily.FRAME_CODED: Mp3Decoder,
    FormatFamily.SAMPLE_CODED: SoundFileDecoder,
}


def open_decoder(source: AudioSource, chunk_samples: int = DEFAULT_CHUNK_SAMPLES) -> AbstractDecoder:
    """Create and open the decoder for an audio source.

    Raises:
        AudioOpenError: If the file is missing or cannot be decoded
    """
    if not os.path.isfile(source.path) or not os.access(source.path, os.R_OK):
        raise AudioOpenError(f"File not found or cannot be opened - {source.path}")

    decoder = DECODERS[source.family](source.path, chunk_samples)
    try:
        decoder.open()
    except Exception:
        decoder.close()
        raise
    return decoder
