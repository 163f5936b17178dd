"""Event models for playback status publishing."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PlaybackEventType(Enum):
    """Kinds of status changes a playback session reports."""
    NOW_PLAYING = "now_playing"
    PAUSED = "paused"
    RESUMED = "resumed"
    STOPPED = "stopped"
    SEEKED_BACK = "seeked_back"
    SEEKED_FORWARD = "seeked_forward"
    SEEK_REFUSED = "seek_refused"
    FORMAT_CHANGED = "format_changed"
    FINISHED = "finished"
    DRAIN_FAILED = "drain_failed"
    FAILED = "failed"


@dataclass
class PlaybackEvent:
    """Status change of one playback session."""
    event_type: PlaybackEventType
    source_path: str
    display_name: str = ""
    position_seconds: float = 0.0
    duration_seconds: Optional[float] = None  # None when the length is unknown
    message: str = ""
    timestamp: float = field(default_factory=time.time)
