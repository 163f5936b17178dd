"""In-place progress bar for the playing track."""

import sys
from typing import Optional, TextIO

BAR_FILL = "■"
UNKNOWN_DURATION_LINE = "\r\t\tPlaying... (duration unknown) "


class ProgressReporter:
    """Redraws a fixed-width bar whenever the integer percent changes.

    Writes straight to the text stream because the bar relies on a bare
    carriage return to redraw in place.
    """

    def __init__(self, stream: Optional[TextIO] = None, width: int = 25):
        self.stream = stream if stream is not None else sys.stdout
        self.width = width
        self._last_percent = -1
        self._unknown_drawn = False
        self._line_open = False

    @property
    def last_percent(self) -> int:
        return self._last_percent

    @staticmethod
    def percent_of(current: int, total: int) -> int:
        fraction = min(max(current / total, 0.0), 1.0)
        return min(max(int(fraction * 100), 0), 100)

    def render_bar(self, percent: int) -> str:
        filled = int(percent / 100 * self.width)
        return f"\r\t\tProgress: [{BAR_FILL * filled}{' ' * (self.width - filled)}] {percent}% "

    def update(self, current: int, total: int) -> bool:
        """Redraw the progress line if needed.

        Args:
            current: Current PCM frame
            total: Total PCM frames, zero or negative when unknown

        Returns:
            True if something was drawn
        """
        if total <= 0:
            if self._unknown_drawn:
                return False
            self._write(UNKNOWN_DURATION_LINE)
            self._unknown_drawn = True
            return True

        percent = self.percent_of(current, total)
        if percent == self._last_percent:
            return False

        self._write(self.render_bar(percent))
        self._last_percent = percent
        return True

    def interrupt(self) -> None:
        """End the progress line so a status line can be printed.

        The bar is drawn again on the next update.
        """
        if self._line_open:
            self.stream.write("\n")
            self.stream.flush()
            self._line_open = False
        self._last_percent = -1
        self._unknown_drawn = False

    def finish(self) -> None:
        self.interrupt()

    def reset(self) -> None:
        self._last_percent = -1
        self._unknown_drawn = False
        self._line_open = False

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()
        self._line_open = True
