"""Music directory scanning for the file browser."""

import logging
import os
from typing import List, Tuple

from ..audio.formats import is_supported
from ..models.playlist import clean_song_name

logger = logging.getLogger(__name__)


class MusicDirectory:
    """Lists audio files and sub-directories below a music root."""

    def __init__(self, root: str = "music"):
        self.root = root

    def ensure_exists(self) -> bool:
        """Create the music root if missing.

        Returns:
            False if the path exists but is not a directory
        """
        if os.path.isdir(self.root):
            return True
        if os.path.exists(self.root):
            logger.error(f"'{self.root}' exists but is not a directory")
            return False
        try:
            os.makedirs(self.root, exist_ok=True)
        except OSError as e:
            logger.error(f"Error creating directory '{self.root}': {e}")
            return False
        logger.info(f"Created music directory: {self.root}")
        return True

    def _entries(self, path: str) -> List[os.DirEntry]:
        try:
            with os.scandir(path) as it:
                return list(it)
        except OSError as e:
            logger.error(f"Error reading directory '{path}': {e}")
            return []

    def list_audio_files(self, path: str = None) -> List[Tuple[str, str]]:
        """Audio files directly inside path.

        Returns:
            (file path, clean name) pairs sorted by clean name
        """
        files = []
        for entry in self._entries(path or self.root):
            try:
                if entry.is_file() and is_supported(entry.name):
                    files.append((entry.path, clean_song_name(entry.path)))
            except OSError as e:
                logger.warning(f"Skipping '{entry.path}': {e}")
        return sorted(files, key=lambda item: item[1].lower())

    def list_subdirectories(self, path: str = None) -> List[Tuple[str, str]]:
        """Directories directly inside path as (path, name) pairs."""
        dirs = []
        for entry in self._entries(path or self.root):
            try:
                if entry.is_dir():
                    dirs.append((entry.path, entry.name))
            except OSError as e:
                logger.warning(f"Skipping '{entry.path}': {e}")
        return sorted(dirs, key=lambda item: item[1].lower())
