"""Data models for the PlayDeck application."""

from .audio import (
    UNKNOWN_LENGTH,
    AudioSource,
    DecodedChunk,
    DecodeStatus,
    FormatFamily,
    SessionResult,
    StreamFormat,
)
from .events import PlaybackEvent, PlaybackEventType
from .playlist import Playlist, PlaylistEntry, clean_song_name, is_valid_name

__all__ = [
    "UNKNOWN_LENGTH",
    "AudioSource",
    "DecodedChunk",
    "DecodeStatus",
    "FormatFamily",
    "SessionResult",
    "StreamFormat",
    "PlaybackEvent",
    "PlaybackEventType",
    "Playlist",
    "PlaylistEntry",
    "clean_song_name",
    "is_valid_name",
]
