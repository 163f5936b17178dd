"""File management module for playlist persistence."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..models.playlist import Playlist
from ..services.library import PlaylistLibrary

logger = logging.getLogger(__name__)


class PlaylistFileManager:
    """Stores each playlist slot as playlistN.json in a data directory."""

    def __init__(self, data_dir: str = "."):
        """Initialize file manager with data directory.

        Args:
            data_dir: Directory holding the playlist files
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"PlaylistFileManager initialized with data_dir: {self.data_dir}")

    def playlist_path(self, slot: int) -> Path:
        return self.data_dir / f"playlist{slot}.json"

    def save_playlist(self, slot: int, playlist: Playlist) -> bool:
        """Save one playlist.

        Returns:
            True if the file was written
        """
        path = self.playlist_path(slot)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(playlist.to_dict(), f, indent=4, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save playlist to {path}: {e}")
            return False
        logger.info(f"Saved playlist '{playlist.name}' ({len(playlist)} songs) to {path}")
        return True

    def load_playlist(self, slot: int) -> Optional[Playlist]:
        """Load one playlist.

        Returns:
            The playlist, or None if the file is missing or not valid JSON
        """
        path = self.playlist_path(slot)
        if not path.exists():
            logger.debug(f"No playlist file at {path}")
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            playlist = Playlist.from_dict(data, source=str(path))
        except (OSError, json.JSONDecodeError, ValueError) as e:
            logger.error(f"Failed to load playlist from {path}: {e}")
            return None
        logger.info(f"Loaded playlist '{playlist.name}' ({len(playlist)} songs) from {path}")
        return playlist

    def save_library(self, library: PlaylistLibrary) -> Tuple[int, int]:
        """Save every active slot.

        Returns:
            (number saved, number of active playlists)
        """
        active = library.active()
        saved = sum(1 for slot, playlist in active if self.save_playlist(slot, playlist))
        return saved, len(active)

    def load_library(self, library: PlaylistLibrary) -> List[int]:
        """Load saved playlists into free slots only.

        Returns:
            Slot ids that were filled
        """
        loaded = []
        for slot in library.slots():
            if library.is_taken(slot):
                continue
            playlist = self.load_playlist(slot)
            if playlist is not None:
                library.place(slot, playlist)
                loaded.append(slot)
        return loaded
