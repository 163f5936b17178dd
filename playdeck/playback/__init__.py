"""Playback engine: session state machine, transport, progress and traversal."""

from .player import Player
from .progress import ProgressReporter
from .session import PlaybackSession, SessionState
from .transport import (
    KEY_BINDINGS,
    TransportCommand,
    TransportController,
    seek_back_target,
    seek_forward_target,
)
from .traversal import (
    TraversalDriver,
    TraversalMode,
    TraversalReport,
    build_reverse_stack,
    repeat_order,
    reverse_order,
    sequential_order,
)

__all__ = [
    "Player",
    "ProgressReporter",
    "PlaybackSession",
    "SessionState",
    "KEY_BINDINGS",
    "TransportCommand",
    "TransportController",
    "seek_back_target",
    "seek_forward_target",
    "TraversalDriver",
    "TraversalMode",
    "TraversalReport",
    "build_reverse_stack",
    "repeat_order",
    "reverse_order",
    "sequential_order",
]
