"""Unit tests for transport key dispatch and seek targets."""

import pytest
from unittest.mock import Mock

from playdeck.playback.transport import (
    TransportCommand,
    TransportController,
    seek_back_target,
    seek_forward_target,
)


@pytest.mark.unit
class TestSeekTargets:
    """Seek arithmetic in frames."""

    def test_back_subtracts_ten_seconds(self):
        assert seek_back_target(1_000_000, 44100) == 1_000_000 - 441_000

    def test_back_never_before_start(self):
        assert seek_back_target(100, 44100) == 0

    def test_forward_adds_ten_seconds(self):
        assert seek_forward_target(0, 1_000_000, 44100) == 441_000

    def test_forward_clamps_to_last_frame(self):
        assert seek_forward_target(900_000, 1_000_000, 44100) == 999_999

    @pytest.mark.parametrize("total", [-1, 0])
    def test_forward_refused_for_unknown_length(self, total):
        assert seek_forward_target(0, total, 44100) is None

    def test_custom_offset(self):
        assert seek_back_target(48000, 48000, seconds=0.5) == 24000


@pytest.mark.unit
class TestTransportController:
    """Key to session command mapping."""

    def test_space_toggles_pause(self):
        session = Mock()
        assert TransportController().dispatch(" ", session) == TransportCommand.TOGGLE_PAUSE
        session.toggle_pause.assert_called_once_with()

    @pytest.mark.parametrize("key", ["s", "S"])
    def test_stop(self, key):
        session = Mock()
        TransportController().dispatch(key, session)
        session.request_stop.assert_called_once_with()

    def test_seek_keys_pass_offset(self):
        session = Mock()
        controller = TransportController(seek_seconds=10)

        controller.dispatch("j", session)
        controller.dispatch("k", session)

        session.seek_backward.assert_called_once_with(10)
        session.seek_forward.assert_called_once_with(10)

    @pytest.mark.parametrize("key", ["x", "J", "K", "\n", ""])
    def test_other_keys_ignored(self, key):
        session = Mock()
        assert TransportController().dispatch(key, session) is None
        assert session.method_calls == []
