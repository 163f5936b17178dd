"""Unit tests for the music file browser."""

import io
import pytest
from pathlib import Path
from rich.console import Console

from playdeck.storage.music_library import MusicDirectory
from playdeck.ui.browser import (
    UNKNOWN_ARTIST,
    UNKNOWN_ARTIST_ALL,
    FileBrowser,
    parse_numbered,
    parse_selection,
)
from playdeck.ui.prompts import Prompter


def scripted_prompter(*answers):
    replies = iter(answers)
    console = Console(file=io.StringIO(), width=200, color_system=None)
    return Prompter(console, ask=lambda prompt: next(replies))


@pytest.fixture
def music_root(temp_data_dir):
    root = Path(temp_data_dir) / "music"
    (root / "Jazz").mkdir(parents=True)
    for name in ["a.mp3", "b.wav", "c.flac"]:
        (root / name).write_bytes(b"")
    (root / "Jazz" / "blue.ogg").write_bytes(b"")
    return root


@pytest.mark.unit
class TestParsing:
    """Test cases for choice parsing helpers."""

    def test_parse_numbered(self):
        assert parse_numbered("D2", "D", 3) == 2
        assert parse_numbered("f1", "F", 1) == 1
        assert parse_numbered("F4", "F", 3) is None
        assert parse_numbered("F0", "F", 3) is None
        assert parse_numbered("D", "D", 3) is None
        assert parse_numbered("Dx", "D", 3) is None
        assert parse_numbered("F1", "D", 3) is None

    def test_parse_selection(self):
        indices, rejected = parse_selection("3, 1,x,9,,2", 3)

        assert indices == [3, 1, 2]
        assert rejected == ["x", "9"]


@pytest.mark.unit
class TestFileBrowser:
    """Test cases for FileBrowser.browse()."""

    def test_cancel(self, music_root):
        browser = FileBrowser(MusicDirectory(str(music_root)), scripted_prompter("0"))
        assert browser.browse() == []

    def test_pick_single_file_with_artist(self, music_root):
        browser = FileBrowser(MusicDirectory(str(music_root)), scripted_prompter("F2", "Miles"))

        assert browser.browse() == [(str(music_root / "b.wav"), "Miles")]

    def test_empty_artist_becomes_unknown(self, music_root):
        browser = FileBrowser(MusicDirectory(str(music_root)), scripted_prompter("f1", ""))

        assert browser.browse() == [(str(music_root / "a.mp3"), UNKNOWN_ARTIST)]

    def test_add_all(self, music_root):
        browser = FileBrowser(MusicDirectory(str(music_root)), scripted_prompter("A", ""))

        picked = browser.browse()

        assert [Path(p).name for p, _ in picked] == ["a.mp3", "b.wav", "c.flac"]
        assert {artist for _, artist in picked} == {UNKNOWN_ARTIST_ALL}

    def test_add_all_not_offered_for_single_pick(self, music_root):
        browser = FileBrowser(MusicDirectory(str(music_root)), scripted_prompter("A", "0"))

        assert browser.browse(allow_multiple=False) == []

    def test_select_several_ignores_bad_numbers(self, music_root):
        browser = FileBrowser(MusicDirectory(str(music_root)),
                              scripted_prompter("S", "3,7,1", "Band"))

        picked = browser.browse()

        assert picked == [(str(music_root / "c.flac"), "Band"),
                          (str(music_root / "a.mp3"), "Band")]

    def test_enter_directory_and_go_back(self, music_root):
        browser = FileBrowser(MusicDirectory(str(music_root)),
                              scripted_prompter("D1", "B", "D1", "F1", "Trane"))

        assert browser.browse() == [(str(music_root / "Jazz" / "blue.ogg"), "Trane")]

    def test_invalid_choice_reprompts(self, music_root):
        browser = FileBrowser(MusicDirectory(str(music_root)), scripted_prompter("zz", "F9", "0"))
        assert browser.browse() == []

    def test_add_all_prompt_names_stored_default(self, music_root):
        prompts = []
        replies = iter(["A", ""])

        def ask(prompt):
            prompts.append(prompt)
            return next(replies)

        console = Console(file=io.StringIO(), width=200, color_system=None)
        browser = FileBrowser(MusicDirectory(str(music_root)), Prompter(console, ask=ask))

        picked = browser.browse()

        assert f"leave empty for '{UNKNOWN_ARTIST_ALL}'" in prompts[-1]
        assert picked[0][1] == UNKNOWN_ARTIST_ALL
