"""Application services."""

from .library import LibraryFullError, PlaylistLibrary

__all__ = ["LibraryFullError", "PlaylistLibrary"]
