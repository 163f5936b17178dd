"""Audio decoding and output."""

from .audio_pub import PLAYBACK_TOPIC, PlaybackPublisher
from .decoders import AbstractDecoder, Mp3Decoder, SoundFileDecoder, open_decoder
from .errors import AudioOpenError, AudioOutputError, PlaybackError
from .formats import classify, is_supported, resolve_source
from .output import AudioOutput

__all__ = [
    "PLAYBACK_TOPIC",
    "PlaybackPublisher",
    "AbstractDecoder",
    "Mp3Decoder",
    "SoundFileDecoder",
    "open_decoder",
    "AudioOpenError",
    "AudioOutputError",
    "PlaybackError",
    "classify",
    "is_supported",
    "resolve_source",
    "AudioOutput",
]
