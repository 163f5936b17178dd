"""Key bindings for the playback transport."""

import logging
from enum import Enum
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_SEEK_SECONDS = 10


class TransportCommand(Enum):
    TOGGLE_PAUSE = "toggle_pause"
    STOP = "stop"
    SEEK_BACK = "seek_back"
    SEEK_FORWARD = "seek_forward"


KEY_BINDINGS: Dict[str, TransportCommand] = {
    " ": TransportCommand.TOGGLE_PAUSE,
    "s": TransportCommand.STOP,
    "S": TransportCommand.STOP,
    "j": TransportCommand.SEEK_BACK,
    "k": TransportCommand.SEEK_FORWARD,
}

CONTROLS_LEGEND = "Controls: [Space] Play/Pause, [s] Stop, [j] -10s, [k] +10s"


def seek_back_target(current: int, sample_rate: int, seconds: float = DEFAULT_SEEK_SECONDS) -> int:
    """Frame to seek to when jumping back, never before 0."""
    return max(0, current - int(seconds * sample_rate))


def seek_forward_target(current: int, total: int, sample_rate: int,
                        seconds: float = DEFAULT_SEEK_SECONDS) -> Optional[int]:
    """Frame to seek to when jumping forward.

    Returns:
        Target frame, or None when the total length is unknown
    """
    if total <= 0:
        return None
    return min(total - 1, current + int(seconds * sample_rate))


class TransportController:
    """Maps one polled key to a session command."""

    def __init__(self, seek_seconds: float = DEFAULT_SEEK_SECONDS,
                 bindings: Optional[Dict[str, TransportCommand]] = None):
        self.seek_seconds = seek_seconds
        self.bindings = bindings if bindings is not None else KEY_BINDINGS

    def command_for(self, key: str) -> Optional[TransportCommand]:
        return self.bindings.get(key)

    def dispatch(self, key: str, session) -> Optional[TransportCommand]:
        """Apply the command bound to key to the session.

        Unbound keys are ignored.

        Returns:
            The command that was applied, if any
        """
        command = self.command_for(key)
        if command is None:
            logger.debug(f"Ignoring unbound key {key!r}")
            return None

        logger.debug(f"Key {key!r} -> {command.value}")
        if command is TransportCommand.TOGGLE_PAUSE:
            session.toggle_pause()
        elif command is TransportCommand.STOP:
            session.request_stop()
        elif command is TransportCommand.SEEK_BACK:
            session.seek_backward(self.seek_seconds)
        elif command is TransportCommand.SEEK_FORWARD:
            session.seek_forward(self.seek_seconds)
        return command
