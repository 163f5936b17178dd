"""Unit tests for format classification."""

import pytest

from playdeck.audio.formats import classify, is_supported, resolve_source
from playdeck.models.audio import AudioSource, FormatFamily


@pytest.mark.unit
class TestClassify:
    """Test cases for classify()."""

    @pytest.mark.parametrize("name", ["Song.MP3", "song.mp3", "dir/Track.Mp3"])
    def test_mp3_is_frame_coded(self, name):
        assert classify(name) == FormatFamily.FRAME_CODED

    @pytest.mark.parametrize("name", ["track.wav", "track.flac", "track.ogg", "noext", "mp3"])
    def test_everything_else_is_sample_coded(self, name):
        assert classify(name) == FormatFamily.SAMPLE_CODED

    def test_is_supported(self):
        assert is_supported("a.WAV")
        assert is_supported("b.flac")
        assert not is_supported("notes.txt")
        assert not is_supported("noext")

    def test_resolve_source(self):
        source = resolve_source("music/01. Intro.mp3")

        assert source == AudioSource("music/01. Intro.mp3", FormatFamily.FRAME_CODED)
