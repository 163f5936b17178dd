"""Unit tests for playlist traversal orders and the traversal driver."""

import io
import pytest
from unittest.mock import Mock

from rich.console import Console

from playdeck.models.audio import SessionResult
from playdeck.models.playlist import Playlist
from playdeck.playback.traversal import (
    TraversalDriver,
    TraversalMode,
    build_reverse_stack,
    repeat_order,
    reverse_order,
    sequential_order,
)


def make_playlist(*songs):
    playlist = Playlist(name="Test")
    for song in songs:
        playlist.add_last(f"music/{song}.mp3", f"Artist {song}")
    return playlist


def songs_of(entries):
    return [entry.display_name for entry in entries]


class Recorder:
    """play_track stand-in returning scripted results."""

    def __init__(self, results=None):
        self.results = list(results or [])
        self.played = []

    def __call__(self, entry):
        self.played.append(entry.display_name)
        return self.results.pop(0) if self.results else SessionResult.SUCCESS


def make_driver(recorder, confirm=None, sleeps=None):
    return TraversalDriver(
        recorder,
        confirm_continue=confirm or Mock(return_value=True),
        console=Console(file=io.StringIO(), width=120),
        track_delay=2.0,
        sleep=sleeps.append if sleeps is not None else (lambda seconds: None),
    )


@pytest.mark.unit
class TestOrders:
    """Pure traversal generators."""

    def test_sequential(self):
        assert songs_of(sequential_order(make_playlist("A", "B", "C"))) == ["A", "B", "C"]

    def test_reverse_stack_push_order(self):
        stack = build_reverse_stack(make_playlist("A", "B", "C"))
        assert songs_of(stack) == ["A", "B", "C"]

    def test_reverse_pop_order(self):
        assert songs_of(reverse_order(make_playlist("A", "B", "C"))) == ["C", "B", "A"]

    def test_reverse_leaves_playlist_untouched(self):
        playlist = make_playlist("A", "B", "C")
        list(reverse_order(playlist))
        assert songs_of(playlist) == ["A", "B", "C"]

    def test_repeat_continues_across_rounds(self):
        assert songs_of(repeat_order(make_playlist("T1", "T2"), 3)) == ["T1", "T2", "T1", "T2", "T1", "T2"]

    @pytest.mark.parametrize("rounds", [0, -2])
    def test_repeat_non_positive_rounds(self, rounds):
        assert list(repeat_order(make_playlist("T1", "T2"), rounds)) == []

    def test_empty_playlist(self):
        empty = Playlist()
        assert list(sequential_order(empty)) == []
        assert list(reverse_order(empty)) == []
        assert list(repeat_order(empty, 3)) == []


@pytest.mark.unit
class TestTraversalDriver:
    """Per-track protocol of the driver."""

    def test_sequential_plays_all_with_delays_between(self):
        recorder = Recorder()
        sleeps = []

        report = make_driver(recorder, sleeps=sleeps).play_sequential(make_playlist("A", "B", "C"))

        assert recorder.played == ["A", "B", "C"]
        assert sleeps == [2.0, 2.0]
        assert report.completed
        assert report.results == [SessionResult.SUCCESS] * 3

    def test_reverse_plays_tail_first(self):
        recorder = Recorder()
        make_driver(recorder).play_reverse(make_playlist("A", "B", "C"))
        assert recorder.played == ["C", "B", "A"]

    def test_repeat_three_rounds_of_two(self):
        recorder = Recorder()
        report = make_driver(recorder).play_repeat(make_playlist("T1", "T2"), 3)

        assert recorder.played == ["T1", "T2", "T1", "T2", "T1", "T2"]
        assert len(report.played) == 6

    def test_repeat_zero_rounds_plays_nothing(self):
        recorder = Recorder()
        report = make_driver(recorder).play_repeat(make_playlist("T1", "T2"), 0)

        assert recorder.played == []
        assert report.played == []

    def test_single_plays_one_entry(self):
        recorder = Recorder()
        sleeps = []
        make_driver(recorder, sleeps=sleeps).play_single(make_playlist("A", "B", "C"), 2)

        assert recorder.played == ["B"]
        assert sleeps == []

    def test_single_out_of_range(self):
        with pytest.raises(IndexError):
            make_driver(Recorder()).play_single(make_playlist("A"), 2)

    def test_stop_halts_traversal(self):
        recorder = Recorder([SessionResult.SUCCESS, SessionResult.STOPPED_BY_USER])
        confirm = Mock()
        sleeps = []

        report = make_driver(recorder, confirm, sleeps).play_sequential(
            make_playlist("A", "B", "C", "D"))

        assert recorder.played == ["A", "B"]
        assert report.stopped_by_user
        assert not report.completed
        assert sleeps == [2.0]
        confirm.assert_not_called()

    def test_error_prompts_and_continues(self):
        recorder = Recorder([SessionResult.ERROR])
        confirm = Mock(return_value=True)
        sleeps = []

        report = make_driver(recorder, confirm, sleeps).play_sequential(make_playlist("A", "B"))

        confirm.assert_called_once_with()
        assert recorder.played == ["A", "B"]
        assert report.failures == 1
        assert report.completed
        assert sleeps == [2.0]

    def test_error_prompt_abort(self):
        recorder = Recorder([SessionResult.ERROR])
        report = make_driver(recorder, Mock(return_value=False)).play_sequential(
            make_playlist("A", "B"))

        assert recorder.played == ["A"]
        assert report.aborted

    def test_empty_playlist_plays_nothing(self):
        recorder = Recorder()
        report = make_driver(recorder).play_sequential(Playlist())

        assert recorder.played == []
        assert report.played == []

    def test_run_dispatches_on_mode(self):
        recorder = Recorder()
        driver = make_driver(recorder)
        playlist = make_playlist("A", "B")

        driver.run(playlist, TraversalMode.REVERSE)
        driver.run(playlist, TraversalMode.SINGLE, position=1)
        driver.run(playlist, TraversalMode.REPEAT, rounds=2)

        assert recorder.played == ["B", "A", "A", "A", "B", "A", "B"]

    def test_banners(self):
        console = Console(file=io.StringIO(), width=120)
        driver = TraversalDriver(Recorder(), Mock(), console=console, sleep=lambda s: None)

        driver.play_repeat(make_playlist("A", "B"), 2)

        output = console.file.getvalue()
        assert "Track 2/2 (Round 2/2)" in output
        assert "Song: A" in output
        assert "Artist: Artist B" in output
        assert "Next track in 2 seconds..." in output
        assert "Playlist repeat completed!" in output
