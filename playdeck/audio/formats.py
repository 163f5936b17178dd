"""Format classification for audio files."""

import os

from ..models.audio import AudioSource, FormatFamily

FRAME_CODED_EXTENSIONS = {".mp3"}
SUPPORTED_EXTENSIONS = {".mp3", ".wav", ".flac", ".ogg"}


def classify(filename: str) -> FormatFamily:
    """Pick the decode backend family from a file name.

    Unrecognized extensions fall back to SAMPLE_CODED and fail later
    at open time if the reader cannot handle them.
    """
    lowered = filename.lower()
    if any(lowered.endswith(ext) for ext in FRAME_CODED_EXTENSIONS):
        return FormatFamily.FRAME_CODED
    return FormatFamily.SAMPLE_CODED


def is_supported(filename: str) -> bool:
    return os.path.splitext(filename)[1].lower() in SUPPORTED_EXTENSIONS


def resolve_source(path: str) -> AudioSource:
    return AudioSource(path=path, family=classify(path))
