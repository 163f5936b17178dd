"""Unit tests for MusicDirectory."""

import os
import pytest
from pathlib import Path

from playdeck.storage.music_library import MusicDirectory


@pytest.fixture
def music_root(temp_data_dir):
    root = Path(temp_data_dir) / "music"
    (root / "Rock").mkdir(parents=True)
    (root / "ambient").mkdir()
    for name in ["02. beta.MP3", "01. Alpha.wav", "gamma.ogg", "notes.txt", "cover.jpg"]:
        (root / name).write_bytes(b"")
    (root / "Rock" / "deep.flac").write_bytes(b"")
    return root


@pytest.mark.unit
class TestMusicDirectory:
    """Test cases for MusicDirectory."""

    def test_ensure_exists_creates_root(self, temp_data_dir):
        root = Path(temp_data_dir) / "new_music"
        assert MusicDirectory(str(root)).ensure_exists()
        assert root.is_dir()

    def test_ensure_exists_rejects_file(self, temp_data_dir):
        path = Path(temp_data_dir) / "file"
        path.write_text("x")
        assert not MusicDirectory(str(path)).ensure_exists()

    def test_lists_audio_files_sorted_by_clean_name(self, music_root):
        files = MusicDirectory(str(music_root)).list_audio_files()

        assert [name for _, name in files] == ["Alpha", "beta", "gamma"]
        assert all(os.path.dirname(path) == str(music_root) for path, _ in files)

    def test_listing_is_not_recursive(self, music_root):
        files = MusicDirectory(str(music_root)).list_audio_files()
        assert "deep" not in [name for _, name in files]

    def test_lists_subdirectories(self, music_root):
        dirs = MusicDirectory(str(music_root)).list_subdirectories()

        assert [name for _, name in dirs] == ["ambient", "Rock"]

    def test_missing_directory_yields_empty_lists(self, temp_data_dir):
        music = MusicDirectory(str(Path(temp_data_dir) / "nope"))

        assert music.list_audio_files() == []
        assert music.list_subdirectories() == []
