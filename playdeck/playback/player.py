"""Builds one playback session per track with shared collaborators."""

import logging
from typing import Callable, Optional

from ..audio.decoders import DEFAULT_CHUNK_SAMPLES, open_decoder
from ..audio.formats import resolve_source
from ..audio.output import AudioOutput
from ..models.audio import SessionResult
from ..models.events import PlaybackEvent
from ..models.playlist import PlaylistEntry
from .progress import ProgressReporter
from .session import DEFAULT_PAUSE_INTERVAL, PlaybackSession
from .transport import DEFAULT_SEEK_SECONDS, TransportController

logger = logging.getLogger(__name__)


class Player:
    """Plays files one session at a time.

    The keyboard, progress reporter and event sink are shared across
    tracks. Decoder and output device are opened fresh for every track.
    """

    def __init__(
        self,
        keyboard=None,
        on_event: Optional[Callable[[PlaybackEvent], None]] = None,
        chunk_samples: int = DEFAULT_CHUNK_SAMPLES,
        seek_seconds: float = DEFAULT_SEEK_SECONDS,
        pause_interval: float = DEFAULT_PAUSE_INTERVAL,
        progress: Optional[ProgressReporter] = None,
        output_factory=AudioOutput,
        decoder_factory=open_decoder,
    ):
        self.keyboard = keyboard
        self.on_event = on_event
        self.chunk_samples = chunk_samples
        self.pause_interval = pause_interval
        self.progress = progress or ProgressReporter()
        self.transport = TransportController(seek_seconds)
        self.output_factory = output_factory
        self.decoder_factory = decoder_factory
        self.last_session: Optional[PlaybackSession] = None

    def create_session(self, path: str, display_name: Optional[str] = None) -> PlaybackSession:
        return PlaybackSession(
            resolve_source(path),
            keyboard=self.keyboard,
            output_factory=self.output_factory,
            decoder_factory=self.decoder_factory,
            progress=self.progress,
            transport=self.transport,
            on_event=self.on_event,
            chunk_samples=self.chunk_samples,
            pause_interval=self.pause_interval,
            display_name=display_name,
        )

    def play_file(self, path: str, display_name: Optional[str] = None) -> SessionResult:
        session = self.create_session(path, display_name)
        self.last_session = session
        result = session.play()
        logger.info(f"Finished '{path}' with result {result.name}")
        return result

    def play_entry(self, entry: PlaylistEntry) -> SessionResult:
        return self.play_file(entry.song, entry.display_name)

    def __call__(self, entry: PlaylistEntry) -> SessionResult:
        return self.play_entry(entry)
