"""Audio-related data models."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


# Sentinel for a total length the decoder could not determine
UNKNOWN_LENGTH = -1


class FormatFamily(Enum):
    """Decode backend family for an audio file."""
    FRAME_CODED = "frame_coded"    # compressed frames (MP3)
    SAMPLE_CODED = "sample_coded"  # PCM sample frames (WAV/FLAC/OGG)


class SessionResult(IntEnum):
    """Outcome of one playback session.

    The integer values double as process exit codes.
    """
    SUCCESS = 0
    ERROR = 1
    STOPPED_BY_USER = 2


class DecodeStatus(Enum):
    """Status of a single decoder read."""
    OK = "ok"
    DONE = "done"
    NEW_FORMAT = "new_format"
    ERROR = "error"


@dataclass(frozen=True)
class AudioSource:
    """One playable file."""
    path: str
    family: FormatFamily


@dataclass(frozen=True)
class StreamFormat:
    """PCM layout negotiated between decoder and output device."""
    sample_rate: int
    channels: int
    sample_width: int = 2  # 16-bit signed

    @property
    def bytes_per_frame(self) -> int:
        return self.channels * self.sample_width


@dataclass
class DecodedChunk:
    """Result of one decoder read."""
    status: DecodeStatus
    data: bytes = b""
    frames: int = 0
    message: Optional[str] = None
