"""Fixed-capacity set of playlist slots."""

import logging
from typing import Dict, List, Optional, Tuple

from ..models.playlist import MAX_NAME_LENGTH, Playlist, UNNAMED, is_valid_name

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 3


class LibraryFullError(Exception):
    """Raised when every playlist slot is taken."""


class PlaylistLibrary:
    """Playlists keyed by 1-based slot id.

    A slot is taken when it holds a playlist.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("Library capacity must be at least 1")
        self.capacity = capacity
        self._slots: Dict[int, Playlist] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def slots(self) -> range:
        return range(1, self.capacity + 1)

    def _check_slot(self, slot: int) -> None:
        if slot not in self.slots():
            raise IndexError(f"Slot {slot} out of range (1-{self.capacity})")

    def is_taken(self, slot: int) -> bool:
        return slot in self._slots

    def is_full(self) -> bool:
        return len(self._slots) >= self.capacity

    def free_slot(self) -> Optional[int]:
        """Lowest free slot id, or None when full."""
        for slot in self.slots():
            if slot not in self._slots:
                return slot
        return None

    def create(self, name: str) -> Tuple[int, Playlist]:
        """Create an empty playlist in the first free slot.

        Invalid names fall back to "[Unnamed]".

        Raises:
            LibraryFullError: If no slot is free
        """
        slot = self.free_slot()
        if slot is None:
            raise LibraryFullError(f"Maximum number of playlists ({self.capacity}) reached")

        if not is_valid_name(name):
            logger.warning(f"Invalid playlist name {name!r}, using {UNNAMED}")
            name = UNNAMED
        playlist = Playlist(name=name[:MAX_NAME_LENGTH])
        self._slots[slot] = playlist
        logger.info(f"Created playlist '{playlist.name}' in slot {slot}")
        return slot, playlist

    def place(self, slot: int, playlist: Playlist) -> None:
        self._check_slot(slot)
        self._slots[slot] = playlist

    def get(self, slot: int) -> Optional[Playlist]:
        return self._slots.get(slot)

    def remove(self, slot: int) -> Playlist:
        """Free a slot.

        Raises:
            KeyError: If the slot is empty
        """
        playlist = self._slots.pop(slot)
        logger.info(f"Removed playlist '{playlist.name}' from slot {slot}")
        return playlist

    def rename(self, slot: int, name: str) -> None:
        """Rename the playlist in a slot.

        Raises:
            ValueError: If the name is invalid or too long
            KeyError: If the slot is empty
        """
        if not is_valid_name(name):
            raise ValueError(f"Invalid playlist name: {name!r}")
        if len(name) > MAX_NAME_LENGTH:
            raise ValueError(f"Playlist name longer than {MAX_NAME_LENGTH} characters")
        self._slots[slot].name = name

    def active(self) -> List[Tuple[int, Playlist]]:
        return sorted(self._slots.items())

    def display_name(self, slot: int) -> str:
        """Name of a slot's playlist safe to show in menus."""
        playlist = self._slots.get(slot)
        name = playlist.name if playlist is not None else ""
        if not name:
            return f"[Unnamed List {slot}]"
        if "\0" in name:
            return f"[Corrupted List {slot}]"
        if len(name) > MAX_NAME_LENGTH:
            return name[:97] + "..."
        return name
