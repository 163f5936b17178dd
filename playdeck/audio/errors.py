"""Exceptions raised by the audio layer."""


class PlaybackError(Exception):
    """Base class for failures that end a playback session."""


class AudioOpenError(PlaybackError):
    """File missing, unreadable, corrupt or in an unsupported format."""


class AudioOutputError(PlaybackError):
    """Output stream could not be created or written."""
