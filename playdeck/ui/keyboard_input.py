"""Non-blocking single-key terminal input for playback controls."""

import logging
import os
import select
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional, TextIO

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"

if IS_WINDOWS:
    import msvcrt
else:
    import termios


class TerminalInput:
    """Raw-mode keyboard access for the duration of one playback session.

    Raw mode here means no line buffering and no echo. Output processing is
    left alone so status lines still print normally.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """Initialize terminal input.

        Args:
            stream: Input stream, defaults to sys.stdin
        """
        self.stream = stream if stream is not None else sys.stdin

    def _fileno(self) -> int:
        return self.stream.fileno()

    def is_tty(self) -> bool:
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def enter_raw_mode(self) -> Optional[Any]:
        """Disable line buffering and echo.

        Returns:
            The previous terminal settings, or None if the terminal could not
            be switched and playback has to run without controls
        """
        if not self.is_tty():
            logger.warning("Input is not a terminal, playback controls disabled")
            return None

        if IS_WINDOWS:
            # Console input on Windows is already unbuffered through msvcrt
            return True

        fd = self._fileno()
        try:
            saved = termios.tcgetattr(fd)
            raw = termios.tcgetattr(fd)
            raw[3] &= ~(termios.ICANON | termios.ECHO)
            raw[6][termios.VMIN] = 1
            raw[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSANOW, raw)
        except (termios.error, OSError) as e:
            logger.error(f"Could not set terminal raw mode: {e}, playback controls disabled")
            return None

        logger.debug("Terminal switched to raw mode")
        return saved

    def restore_mode(self, saved: Optional[Any]) -> None:
        """Put back the settings captured by enter_raw_mode."""
        if saved is None or IS_WINDOWS:
            return
        try:
            termios.tcsetattr(self._fileno(), termios.TCSANOW, saved)
        except (termios.error, OSError) as e:
            logger.error(f"Failed to restore terminal settings: {e}")
            return
        logger.debug("Terminal settings restored")

    @contextmanager
    def raw_mode(self) -> Iterator[bool]:
        """Hold raw mode for the body of a with block.

        Yields:
            True if interactive controls are available
        """
        saved = self.enter_raw_mode()
        try:
            yield saved is not None
        finally:
            self.restore_mode(saved)

    def key_available(self) -> bool:
        """Zero-timeout poll for a pending key."""
        if IS_WINDOWS:
            return msvcrt.kbhit()
        try:
            readable, _, _ = select.select([self._fileno()], [], [], 0)
        except (OSError, ValueError) as e:
            logger.debug(f"Key poll failed: {e}")
            return False
        return bool(readable)

    def read_key(self) -> str:
        """Read one buffered key. Call only after key_available()."""
        if IS_WINDOWS:
            return msvcrt.getwch()
        data = os.read(self._fileno(), 1)
        return data.decode("utf-8", errors="ignore")
