"""Playlist files and music directory access."""

from .file_manager import PlaylistFileManager
from .music_library import MusicDirectory

__all__ = ["PlaylistFileManager", "MusicDirectory"]
