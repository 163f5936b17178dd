"""Interactive music directory browser for picking songs."""

import logging
from typing import List, Optional, Tuple

from ..storage.music_library import MusicDirectory
from .prompts import Prompter

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "[Unknown]"
UNKNOWN_ARTIST_ALL = "[Unknown Artist]"

# (song path, artist) pairs chosen by the user
Selection = List[Tuple[str, str]]


def parse_numbered(choice: str, prefix: str, count: int) -> Optional[int]:
    """Parse answers like "D2" or "f10" into a 1-based index within count."""
    if len(choice) < 2 or choice[0].upper() != prefix or not choice[1:].isdigit():
        return None
    index = int(choice[1:])
    return index if 1 <= index <= count else None


def parse_selection(text: str, count: int) -> Tuple[List[int], List[str]]:
    """Parse a comma separated list of 1-based file numbers.

    Returns:
        (valid indices in entry order, rejected items)
    """
    indices, rejected = [], []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        if item.isdigit() and 1 <= int(item) <= count:
            indices.append(int(item))
        else:
            rejected.append(item)
    return indices, rejected


class FileBrowser:
    """Walks the music directory and returns the songs the user picks."""

    def __init__(self, music: MusicDirectory, prompter: Prompter):
        self.music = music
        self.prompter = prompter

    def browse(self, allow_multiple: bool = True) -> Selection:
        """Run the browser until a pick is made or the user cancels.

        Args:
            allow_multiple: Offer "add all" and "select several"

        Returns:
            Selected (path, artist) pairs, empty when canceled
        """
        p = self.prompter
        if not self.music.ensure_exists():
            p.error(f"Music directory '{self.music.root}' is not usable.")
            return []

        trail = [(self.music.root, self.music.root)]
        while True:
            current, _ = trail[-1]
            dirs = self.music.list_subdirectories(current)
            files = self.music.list_audio_files(current)
            self._show(trail, dirs, files)

            choice = p.ask(self._choice_prompt(len(trail) > 1, allow_multiple, dirs, files))
            upper = choice.upper()

            if choice == "0":
                p.info("Song addition canceled.")
                return []
            if upper == "B":
                if len(trail) > 1:
                    trail.pop()
                continue
            if upper == "A" and allow_multiple and files:
                artist = p.ask(f"Enter artist name for all songs (leave empty for '{UNKNOWN_ARTIST_ALL}'): ")
                return [(path, artist or UNKNOWN_ARTIST_ALL) for path, _ in files]
            if upper == "S" and allow_multiple and files:
                picked = self._select_several(files)
                if picked:
                    return picked
                continue

            dir_index = parse_numbered(choice, "D", len(dirs))
            if dir_index is not None:
                trail.append(dirs[dir_index - 1])
                continue

            file_index = parse_numbered(choice, "F", len(files))
            if file_index is not None:
                path, name = files[file_index - 1]
                p.line(f"Selected: {name}")
                artist = p.ask("Enter artist name: ")
                if not artist:
                    p.info("Artist name left empty, using '[Unknown]'.")
                return [(path, artist or UNKNOWN_ARTIST)]

            p.error("Invalid choice. Please try again.")

    def _select_several(self, files: List[Tuple[str, str]]) -> Selection:
        p = self.prompter
        indices, rejected = parse_selection(
            p.ask("Enter file numbers separated by commas (e.g., 1,3,5): "), len(files))
        for item in rejected:
            p.error(f"Invalid file number: {item} (ignored)")
        if not indices:
            p.error("No valid file numbers entered.")
            return []
        artist = p.ask("Enter artist name for selected songs (leave empty for '[Unknown]'): ")
        return [(files[i - 1][0], artist or UNKNOWN_ARTIST) for i in indices]

    def _show(self, trail, dirs, files) -> None:
        p = self.prompter
        p.header("Browse Music: " + " > ".join(name for _, name in trail))
        if dirs:
            p.line("📁 Directories:", "bold")
            for i, (_, name) in enumerate(dirs, start=1):
                p.line(f"  D{i:<2} {name}")
        if files:
            p.line("🎵 Music files:", "bold")
            for i, (_, name) in enumerate(files, start=1):
                p.line(f"  F{i:<2} {name}")
        if not dirs and not files:
            p.line("📂 This directory is empty.")

    @staticmethod
    def _choice_prompt(can_go_back: bool, allow_multiple: bool, dirs, files) -> str:
        parts = ["0 to cancel"]
        if can_go_back:
            parts.append("B to go back")
        if allow_multiple and files:
            parts.append("A to add all, S to select multiple")
        if dirs:
            parts.append("D# for directory")
        if files:
            parts.append("F# for file")
        return f"Enter your choice ({', '.join(parts)}): "
