"""Decode/output session: plays one audio source from open to close."""

import logging
import time
from contextlib import nullcontext
from enum import Enum
from typing import Callable, List, Optional

from ..audio.decoders import DEFAULT_CHUNK_SAMPLES, AbstractDecoder, open_decoder
from ..audio.errors import AudioOutputError, PlaybackError
from ..audio.output import AudioOutput
from ..models.audio import (
    UNKNOWN_LENGTH,
    AudioSource,
    DecodeStatus,
    SessionResult,
    StreamFormat,
)
from ..models.events import PlaybackEvent, PlaybackEventType
from ..models.playlist import clean_song_name
from .progress import ProgressReporter
from .transport import TransportController, seek_back_target, seek_forward_target

logger = logging.getLogger(__name__)

DEFAULT_PAUSE_INTERVAL = 0.1


class SessionState(Enum):
    OPENING = "opening"
    PLAYING = "playing"
    PAUSED = "paused"
    DRAINING = "draining"
    STOPPED = "stopped"
    ERRORED = "errored"
    CLOSED = "closed"


# States the loop keeps running in
ACTIVE_STATES = (SessionState.PLAYING, SessionState.PAUSED)


class PlaybackSession:
    """Single-threaded pull loop for one track.

    Each iteration polls the keyboard, decodes one chunk, writes it to the
    blocking output stream and redraws progress. A session is played once.
    """

    def __init__(
        self,
        source: AudioSource,
        keyboard=None,
        output_factory: Callable[[], AudioOutput] = AudioOutput,
        decoder_factory: Callable[[AudioSource, int], AbstractDecoder] = open_decoder,
        progress: Optional[ProgressReporter] = None,
        transport: Optional[TransportController] = None,
        on_event: Optional[Callable[[PlaybackEvent], None]] = None,
        chunk_samples: int = DEFAULT_CHUNK_SAMPLES,
        pause_interval: float = DEFAULT_PAUSE_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        display_name: Optional[str] = None,
    ):
        """Initialize a playback session.

        Args:
            source: File to play
            keyboard: Terminal input adapter, None for non-interactive playback
            output_factory: Creates the output device
            decoder_factory: Creates and opens the decoder for the source
            progress: Progress reporter
            transport: Key dispatcher
            on_event: Receives every status change
            chunk_samples: Decoded samples per loop iteration
            pause_interval: Seconds to sleep per iteration while paused
            sleep: Sleep function
            display_name: Name used in status events
        """
        self.source = source
        self.keyboard = keyboard
        self.output_factory = output_factory
        self.decoder_factory = decoder_factory
        self.progress = progress or ProgressReporter()
        self.transport = transport or TransportController()
        self.on_event = on_event
        self.chunk_samples = chunk_samples
        self.pause_interval = pause_interval
        self.sleep = sleep
        self.display_name = display_name or clean_song_name(source.path)

        self.decoder: Optional[AbstractDecoder] = None
        self.output: Optional[AudioOutput] = None
        self.format: Optional[StreamFormat] = None
        self.total_frames = UNKNOWN_LENGTH
        self.position = 0
        self.interactive = False

        self.state = SessionState.OPENING
        self.history: List[SessionState] = [SessionState.OPENING]
        self.result: Optional[SessionResult] = None

    @property
    def position_seconds(self) -> float:
        if not self.format:
            return 0.0
        return self.position / self.format.sample_rate

    @property
    def duration_seconds(self) -> Optional[float]:
        if not self.format or self.total_frames <= 0:
            return None
        return self.total_frames / self.format.sample_rate

    def play(self) -> SessionResult:
        """Run the session to completion.

        Returns:
            SUCCESS when the track played to the end, STOPPED_BY_USER after
            a stop key, ERROR on any open, decode or output failure
        """
        if self.state is not SessionState.OPENING:
            raise RuntimeError("A playback session can only be played once")

        try:
            self._open()
            with self._input_scope() as interactive:
                self.interactive = interactive
                self._emit(PlaybackEventType.NOW_PLAYING)
                self._run_loop()
        except PlaybackError as e:
            self.progress.interrupt()
            logger.error(f"Playback of '{self.source.path}' failed: {e}")
            self._fail(str(e))
        except Exception as e:
            self.progress.interrupt()
            logger.exception(f"Unexpected error while playing '{self.source.path}'")
            self._fail(f"Unexpected error: {e}")
        finally:
            self._close()

        return self.result

    def toggle_pause(self) -> None:
        if self.state is SessionState.PLAYING:
            self._transition(SessionState.PAUSED)
            self._emit(PlaybackEventType.PAUSED)
        elif self.state is SessionState.PAUSED:
            self._transition(SessionState.PLAYING)
            self._emit(PlaybackEventType.RESUMED)

    def request_stop(self) -> None:
        if self.state not in ACTIVE_STATES:
            return
        self._transition(SessionState.STOPPED)
        self.result = SessionResult.STOPPED_BY_USER
        self._emit(PlaybackEventType.STOPPED)

    def seek_backward(self, seconds: float) -> None:
        if self.state not in ACTIVE_STATES:
            return
        current = self.decoder.get_position()
        target = seek_back_target(current, self.format.sample_rate, seconds)
        self._seek_to(target)
        self._emit(PlaybackEventType.SEEKED_BACK)

    def seek_forward(self, seconds: float) -> None:
        if self.state not in ACTIVE_STATES:
            return
        current = self.decoder.get_position()
        target = seek_forward_target(current, self.total_frames, self.format.sample_rate, seconds)
        if target is None:
            logger.info(f"Forward seek refused for '{self.source.path}': length unknown")
            self._emit(PlaybackEventType.SEEK_REFUSED, "Cannot seek forward: duration unknown")
            return
        self._seek_to(target)
        self._emit(PlaybackEventType.SEEKED_FORWARD)

    def _seek_to(self, target: int) -> None:
        # Backends log seek failures themselves, end the bar line first
        self.progress.interrupt()
        if not self.decoder.seek(target):
            logger.warning(f"Seek to frame {target} failed, seeking to start")
            if not self.decoder.seek(0):
                logger.error("Seek to start failed")
        self.position = self.decoder.get_position()

    def _open(self) -> None:
        self.decoder = self.decoder_factory(self.source, self.chunk_samples)
        self.format = self.decoder.get_format()
        self.total_frames = self.decoder.get_length()
        self.position = self.decoder.get_position()

        self.output = self.output_factory()
        self.output.open(self.format, self._frames_per_buffer())
        self._transition(SessionState.PLAYING)

    def _frames_per_buffer(self) -> int:
        return max(1, self.chunk_samples // self.format.channels)

    def _input_scope(self):
        if self.keyboard is None:
            return nullcontext(False)
        return self.keyboard.raw_mode()

    def _poll_keyboard(self) -> None:
        # One key per iteration; anything else stays buffered for later polls
        if self.keyboard.key_available():
            self.transport.dispatch(self.keyboard.read_key(), self)

    def _run_loop(self) -> None:
        self.progress.reset()
        while self.state in ACTIVE_STATES:
            if self.interactive:
                self._poll_keyboard()

            if self.state is SessionState.PAUSED:
                self.sleep(self.pause_interval)
                continue
            if self.state is not SessionState.PLAYING:
                break

            chunk = self.decoder.read_chunk()
            if chunk.status is DecodeStatus.DONE:
                self._drain()
                break
            if chunk.status is DecodeStatus.NEW_FORMAT:
                self._handle_format_change()
                continue
            if chunk.status is DecodeStatus.ERROR:
                raise PlaybackError(f"Decode error: {chunk.message or 'unknown'}")
            if chunk.frames <= 0 or not chunk.data:
                continue

            self.output.write(chunk.data)
            self.position = self.decoder.get_position()
            self.progress.update(self.position, self.total_frames)

    def _handle_format_change(self) -> None:
        new_format = self.decoder.get_format()
        self.progress.interrupt()
        logger.warning(f"Format changed mid-stream in '{self.source.path}': "
                       f"{new_format.sample_rate}Hz, {new_format.channels}ch")
        if new_format != self.format:
            self.output.reopen(new_format, max(1, self.chunk_samples // new_format.channels))
            self.format = new_format
        self._emit(PlaybackEventType.FORMAT_CHANGED,
                   f"{new_format.sample_rate}Hz, {new_format.channels}ch")

    def _drain(self) -> None:
        self._transition(SessionState.DRAINING)
        try:
            self.output.drain()
        except AudioOutputError as e:
            self.progress.interrupt()
            logger.warning(f"Could not drain audio output: {e}")
            self._emit(PlaybackEventType.DRAIN_FAILED, str(e))
        self.result = SessionResult.SUCCESS
        self._emit(PlaybackEventType.FINISHED)

    def _fail(self, message: str) -> None:
        self._transition(SessionState.ERRORED)
        self.result = SessionResult.ERROR
        self._emit(PlaybackEventType.FAILED, message)

    def _close(self) -> None:
        self.progress.finish()
        decoder, self.decoder = self.decoder, None
        output, self.output = self.output, None
        if decoder is not None:
            try:
                decoder.close()
            except Exception as e:
                logger.warning(f"Error closing decoder: {e}")
        if output is not None:
            try:
                output.close()
            except Exception as e:
                logger.warning(f"Error closing audio output: {e}")
        if self.result is None:
            self.result = SessionResult.ERROR
        self._transition(SessionState.CLOSED)

    def _transition(self, state: SessionState) -> None:
        logger.debug(f"Session '{self.display_name}': {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _emit(self, event_type: PlaybackEventType, message: str = "") -> None:
        self.progress.interrupt()
        if self.on_event is None:
            return
        self.on_event(PlaybackEvent(
            event_type=event_type,
            source_path=self.source.path,
            display_name=self.display_name,
            position_seconds=self.position_seconds,
            duration_seconds=self.duration_seconds,
            message=message,
        ))
