"""Playlist traversal: decides which track plays next and whether to go on."""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from typing import Callable, Iterator, List, Optional

from rich.console import Console

from ..models.audio import SessionResult
from ..models.playlist import Playlist, PlaylistEntry

logger = logging.getLogger(__name__)

DEFAULT_TRACK_DELAY = 2.0
HEAVY_RULE = "━" * 40
LIGHT_RULE = "─" * 40


class TraversalMode(Enum):
    SEQUENTIAL = "sequential"
    SINGLE = "single"
    REVERSE = "reverse"
    REPEAT = "repeat"


def sequential_order(playlist: Playlist) -> Iterator[PlaylistEntry]:
    """Head to tail, once."""
    return islice(playlist.cycle(), len(playlist))


def build_reverse_stack(playlist: Playlist) -> List[PlaylistEntry]:
    """Push every entry head to tail. The last element is the top."""
    stack: List[PlaylistEntry] = []
    for entry in sequential_order(playlist):
        stack.append(entry)
    return stack


def reverse_order(playlist: Playlist) -> Iterator[PlaylistEntry]:
    """Tail to head by popping the stack. The playlist is not modified."""
    stack = build_reverse_stack(playlist)
    while stack:
        yield stack.pop()


def repeat_order(playlist: Playlist, rounds: int) -> Iterator[PlaylistEntry]:
    """The sequential order played rounds times back to back."""
    if rounds <= 0:
        return iter(())
    return islice(playlist.cycle(), len(playlist) * rounds)


@dataclass
class TraversalReport:
    """What a traversal played and why it ended."""
    played: List[PlaylistEntry] = field(default_factory=list)
    results: List[SessionResult] = field(default_factory=list)
    stopped_by_user: bool = False
    aborted: bool = False

    @property
    def completed(self) -> bool:
        return not (self.stopped_by_user or self.aborted)

    @property
    def failures(self) -> int:
        return sum(1 for result in self.results if result is SessionResult.ERROR)


class TraversalDriver:
    """Runs one playback session per entry in traversal order.

    Continue-after-error questions are asked between sessions through
    confirm_continue, never from inside a session.
    """

    def __init__(
        self,
        play_track: Callable[[PlaylistEntry], SessionResult],
        confirm_continue: Callable[[], bool],
        console: Optional[Console] = None,
        track_delay: float = DEFAULT_TRACK_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize traversal driver.

        Args:
            play_track: Plays one entry and returns its session result
            confirm_continue: Asked after a failed track, True to go on
            console: Rich console for banners
            track_delay: Seconds to wait between tracks
            sleep: Sleep function
        """
        self.play_track = play_track
        self.confirm_continue = confirm_continue
        self.console = console or Console()
        self.track_delay = track_delay
        self.sleep = sleep

    def run(self, playlist: Playlist, mode: TraversalMode, rounds: int = 1,
            position: int = 1) -> TraversalReport:
        if mode is TraversalMode.SEQUENTIAL:
            return self.play_sequential(playlist)
        if mode is TraversalMode.REVERSE:
            return self.play_reverse(playlist)
        if mode is TraversalMode.REPEAT:
            return self.play_repeat(playlist, rounds)
        if mode is TraversalMode.SINGLE:
            return self.play_single(playlist, position)
        raise ValueError(f"Unknown traversal mode: {mode}")

    def play_sequential(self, playlist: Playlist) -> TraversalReport:
        if not self._check_not_empty(playlist):
            return TraversalReport()
        self._print_header(playlist, "")
        n = len(playlist)
        labels = (f"Playing Track {i}/{n}" for i in range(1, n + 1))
        report = self._drive(list(sequential_order(playlist)), labels)
        if report.completed:
            self._line("\t\t✅ Playlist playback complete!", "green")
        return report

    def play_reverse(self, playlist: Playlist) -> TraversalReport:
        if not self._check_not_empty(playlist):
            return TraversalReport()
        self._print_header(playlist, " (Reverse)")
        n = len(playlist)
        labels = (f"Playing Track {i}/{n} (Reverse)" for i in range(1, n + 1))
        report = self._drive(list(reverse_order(playlist)), labels)
        if report.completed:
            self._line("\t\t✅ Reverse playback complete!", "green")
        return report

    def play_repeat(self, playlist: Playlist, rounds: int) -> TraversalReport:
        if not self._check_not_empty(playlist):
            return TraversalReport()
        if rounds <= 0:
            self._line("\t\tℹ️ Number of rounds must be positive, nothing to play.", "blue")
            return TraversalReport()
        self._print_header(playlist, f" (Repeating {rounds} times)")
        n = len(playlist)
        labels = (f"Track {i % n + 1}/{n} (Round {i // n + 1}/{rounds})" for i in range(n * rounds))
        report = self._drive(list(repeat_order(playlist, rounds)), labels)
        if report.completed:
            self._line("\t\t✅ Playlist repeat completed!", "green")
        return report

    def play_single(self, playlist: Playlist, position: int) -> TraversalReport:
        """Play the entry at a 1-based position once.

        Raises:
            IndexError: If position is out of range
        """
        if not self._check_not_empty(playlist):
            return TraversalReport()
        entry = playlist.entry_at(position)
        return self._drive([entry], iter([f"Playing Track {position}/{len(playlist)}"]))

    def _drive(self, entries: List[PlaylistEntry], labels: Iterator[str]) -> TraversalReport:
        report = TraversalReport()
        total = len(entries)
        for index, (entry, label) in enumerate(zip(entries, labels)):
            self._line(f"\t\t🎧 {label}", "bold")
            self._line(f"\t\t   Song: {entry.display_name}")
            self._line(f"\t\t   Artist: {entry.artist}")

            result = self.play_track(entry)
            report.played.append(entry)
            report.results.append(result)

            if result is SessionResult.STOPPED_BY_USER:
                self._line("\t\t⏹️ Playlist playback stopped by user.", "yellow")
                report.stopped_by_user = True
                break
            if result is SessionResult.ERROR:
                logger.warning(f"Track '{entry.song}' failed")
                if not self.confirm_continue():
                    self._line("\t\t⏹️ Playback stopped by user.", "yellow")
                    report.aborted = True
                    break
                self._line("\t\tSkipping to next track...")

            if index < total - 1:
                self._line(f"\t\tNext track in {self.track_delay:g} seconds...")
                self._line(f"\t\t{LIGHT_RULE}", "dim")
                self.sleep(self.track_delay)

        logger.info(f"Traversal played {len(report.played)}/{total} tracks "
                    f"(stopped={report.stopped_by_user}, aborted={report.aborted})")
        return report

    def _line(self, text: str, style: Optional[str] = None) -> None:
        self.console.print(text, style=style, highlight=False, markup=False)

    def _check_not_empty(self, playlist: Playlist) -> bool:
        if playlist.is_empty():
            self._line("\t\t⚠️ Playlist is empty. Nothing to play.", "yellow")
            return False
        return True

    def _print_header(self, playlist: Playlist, suffix: str) -> None:
        self._line(f"\t\t🎵 Playlist: {playlist.display_name}{suffix}", "bold cyan")
        self._line(f"\t\t📂 Total tracks: {len(playlist)}")
        self._line(f"\t\t{HEAVY_RULE}", "dim")
