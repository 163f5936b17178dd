"""Renders playback status events as console lines."""

import logging
from typing import Optional

from pubsub import pub
from rich.console import Console

from ..audio.audio_pub import PLAYBACK_TOPIC
from ..models.events import PlaybackEvent
from ..playback.transport import CONTROLS_LEGEND

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 40


def format_duration(seconds: Optional[float]) -> str:
    """Format seconds as m:ss.s, or "unknown"."""
    if seconds is None:
        return "unknown"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}:{rest:04.1f}"


class StatusView:
    """Subscribes to playback events and prints one line per event."""

    def __init__(self, console: Optional[Console] = None, topic: str = PLAYBACK_TOPIC):
        """Initialize status view.

        Args:
            console: Rich console to print to
            topic: Pub/sub topic carrying PlaybackEvent messages
        """
        self.console = console or Console()
        self.topic = topic
        self.subscribed = False

    def subscribe(self) -> None:
        if not self.subscribed:
            pub.subscribe(self.on_event, self.topic)
            self.subscribed = True
            logger.info(f"StatusView subscribed to topic: {self.topic}")

    def unsubscribe(self) -> None:
        if self.subscribed:
            pub.unsubscribe(self.on_event, self.topic)
            self.subscribed = False

    def on_event(self, event: PlaybackEvent) -> None:
        """Pub/sub listener."""
        handler = getattr(self, f"_render_{event.event_type.value}", None)
        if handler is None:
            logger.debug(f"No renderer for event type {event.event_type}")
            return
        handler(event)

    def _line(self, text: str, style: Optional[str] = None) -> None:
        self.console.print(f"\t\t{text}", style=style, highlight=False, markup=False)

    def _render_now_playing(self, event: PlaybackEvent) -> None:
        self._line(f"🎵 Now playing: {event.display_name}", "bold green")
        if event.duration_seconds is not None:
            self._line(f"Duration: {format_duration(event.duration_seconds)}")
        self._line(CONTROLS_LEGEND, "dim")
        self._line(SEPARATOR, "dim")

    def _render_paused(self, event: PlaybackEvent) -> None:
        self._line("⏸️ Paused", "yellow")

    def _render_resumed(self, event: PlaybackEvent) -> None:
        self._line("▶️ Resumed", "green")

    def _render_stopped(self, event: PlaybackEvent) -> None:
        self._line("⏹️ Playback stopped by user.", "yellow")

    def _render_seeked_back(self, event: PlaybackEvent) -> None:
        self._line(f"⏪ Rewound to {format_duration(event.position_seconds)}")

    def _render_seeked_forward(self, event: PlaybackEvent) -> None:
        self._line(f"⏩ Skipped to {format_duration(event.position_seconds)}")

    def _render_seek_refused(self, event: PlaybackEvent) -> None:
        self._line(f"⚠️ {event.message or 'Cannot seek forward'}", "yellow")

    def _render_format_changed(self, event: PlaybackEvent) -> None:
        self._line(f"ℹ️ Audio format changed: {event.message}", "blue")

    def _render_finished(self, event: PlaybackEvent) -> None:
        self._line("✅ Playback finished.", "green")

    def _render_drain_failed(self, event: PlaybackEvent) -> None:
        self._line(f"⚠️ Audio output did not drain cleanly: {event.message}", "yellow")

    def _render_failed(self, event: PlaybackEvent) -> None:
        self._line(f"❌ Error playing '{event.display_name}': {event.message}", "red")
