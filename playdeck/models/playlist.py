"""Playlist data models."""

import logging
import re
from dataclasses import dataclass, field
from itertools import cycle, islice
from typing import Any, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
INVALID_NAME_CHARS = set('\\/:*?"<>|')
UNNAMED = "[Unnamed]"

_NUMERIC_PREFIX = re.compile(r"^\s*\d+\.?\s*")


def clean_song_name(path: str) -> str:
    """Get a display name from a song path.

    Strips the directory, the extension and track-number prefixes
    such as "01. ".
    """
    if not path:
        return "[Empty Path]"

    name = re.split(r"[/\\]", path)[-1]

    # A leading dot marks a hidden file, not an extension
    dot = name.rfind(".")
    if dot > 0:
        name = name[:dot]

    if name in (".", ".."):
        return path

    name = _NUMERIC_PREFIX.sub("", name)
    return name or UNNAMED


def is_valid_name(name: str) -> bool:
    """Check a playlist name for characters that are unsafe in file names."""
    if not name or name in (".", ".."):
        return False
    return not any(ch in INVALID_NAME_CHARS for ch in name)


@dataclass(frozen=True)
class PlaylistEntry:
    """A song path with its artist."""
    song: str
    artist: str

    @property
    def display_name(self) -> str:
        return clean_song_name(self.song)


@dataclass
class Playlist:
    """Ordered collection of songs, traversed circularly during playback."""
    name: str = ""
    entries: List[PlaylistEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PlaylistEntry]:
        return iter(list(self.entries))

    @property
    def display_name(self) -> str:
        return self.name or UNNAMED

    def is_empty(self) -> bool:
        return not self.entries

    def add_first(self, song: str, artist: str) -> PlaylistEntry:
        entry = PlaylistEntry(song, artist)
        self.entries.insert(0, entry)
        return entry

    def add_last(self, song: str, artist: str) -> PlaylistEntry:
        entry = PlaylistEntry(song, artist)
        self.entries.append(entry)
        return entry

    def insert_at(self, song: str, artist: str, position: int) -> PlaylistEntry:
        """Insert a song at a 1-based position (1..len+1)."""
        if position < 1 or position > len(self.entries) + 1:
            raise IndexError(
                f"Add position {position} out of range (1-{len(self.entries) + 1})")
        entry = PlaylistEntry(song, artist)
        self.entries.insert(position - 1, entry)
        return entry

    def remove_first(self) -> PlaylistEntry:
        if not self.entries:
            raise IndexError("Cannot delete from empty list")
        return self.entries.pop(0)

    def remove_last(self) -> PlaylistEntry:
        if not self.entries:
            raise IndexError("Cannot delete from empty list")
        return self.entries.pop()

    def remove_at(self, position: int) -> PlaylistEntry:
        """Remove the song at a 1-based position."""
        if not self.entries:
            raise IndexError("Cannot delete from empty list")
        if position < 1 or position > len(self.entries):
            raise IndexError(
                f"Delete position {position} out of range (1-{len(self.entries)})")
        return self.entries.pop(position - 1)

    def clear(self) -> None:
        self.entries.clear()

    def entry_at(self, position: int) -> PlaylistEntry:
        """Get the song at a 1-based position."""
        if position < 1 or position > len(self.entries):
            raise IndexError(
                f"Track position {position} out of range (1-{len(self.entries)})")
        return self.entries[position - 1]

    def search(self, term: str) -> List[Tuple[int, PlaylistEntry]]:
        """Find songs whose clean name contains term, ignoring case.

        Returns:
            List of (1-based position, entry) pairs
        """
        needle = term.lower()
        return [
            (position, entry)
            for position, entry in enumerate(self.entries, start=1)
            if needle in entry.display_name.lower()
        ]

    def sort_by_song(self) -> None:
        self.entries.sort(key=lambda entry: entry.display_name.lower())

    def sort_by_artist(self) -> None:
        self.entries.sort(key=lambda entry: entry.artist.lower())

    def cycle(self, start: int = 0) -> Iterator[PlaylistEntry]:
        """Endless circular traversal starting at a 0-based index.

        Iterates over a snapshot, so edits made during playback do not
        break the traversal.
        """
        snapshot = list(self.entries)
        if not snapshot:
            return iter(())
        start %= len(snapshot)
        return islice(cycle(snapshot), start, None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "listName": self.name,
            "length": len(self.entries),
            "songs": [{"song": e.song, "artist": e.artist} for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "<data>") -> "Playlist":
        """Build a playlist from its JSON form, skipping malformed songs."""
        if not isinstance(data, dict):
            raise ValueError(f"Playlist data in '{source}' is not an object")

        name = data.get("listName")
        if not isinstance(name, str):
            name = ""
        elif "\0" in name:
            logger.warning(f"Playlist name in '{source}' contains null bytes, using default name")
            name = ""
        elif len(name) > MAX_NAME_LENGTH:
            logger.warning(f"Playlist name in '{source}' too long, truncating")
            name = name[:MAX_NAME_LENGTH]

        playlist = cls(name=name)
        songs = data.get("songs")
        if isinstance(songs, list):
            for song in songs:
                if (isinstance(song, dict)
                        and isinstance(song.get("song"), str)
                        and isinstance(song.get("artist"), str)):
                    playlist.add_last(song["song"], song["artist"])
                else:
                    logger.warning(f"Skipping improperly formatted song entry in '{source}'")

        expected: Optional[int] = data.get("length")
        if isinstance(expected, int) and not isinstance(expected, bool) and expected != len(playlist):
            logger.warning(f"Expected {expected} songs, loaded {len(playlist)} from '{source}'")

        return playlist
