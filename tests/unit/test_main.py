"""Unit tests for the command line entry point."""

import io
import logging
import pytest
from pathlib import Path
from unittest.mock import Mock, patch
from rich.console import Console

from playdeck.main import App, build_parser, main, report_result, setup_logging
from playdeck.config import PlayDeckConfig
from playdeck.models.audio import SessionResult
from playdeck.playback.traversal import TraversalReport


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def app():
    with patch("playdeck.main.setup_logging"):
        application = App(console=Console(file=io.StringIO(), width=200, color_system=None))
    application.player = Mock()
    application.track_delay = 0
    return application


@pytest.mark.unit
class TestParser:
    """Test cases for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.config is None
        assert args.play is None

    def test_play_files(self):
        args = build_parser().parse_args(["--play", "a.mp3", "b.wav", "--log-level", "DEBUG"])

        assert args.play == ["a.mp3", "b.wav"]
        assert args.log_level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "LOUD"])


@pytest.mark.unit
class TestReportResult:
    """Test cases for mapping traversal reports to exit codes."""

    def test_success(self):
        report = TraversalReport(results=[SessionResult.SUCCESS])
        assert report_result(report) == SessionResult.SUCCESS

    def test_stopped_wins(self):
        report = TraversalReport(results=[SessionResult.ERROR, SessionResult.STOPPED_BY_USER],
                                 stopped_by_user=True)
        assert report_result(report) == SessionResult.STOPPED_BY_USER

    def test_failure(self):
        report = TraversalReport(results=[SessionResult.SUCCESS, SessionResult.ERROR])
        assert report_result(report) == SessionResult.ERROR


@pytest.mark.unit
class TestApp:
    """Test cases for App wiring."""

    def test_play_files_continues_after_errors(self, app):
        app.player.side_effect = [SessionResult.ERROR, SessionResult.SUCCESS]

        result = app.play_files(["missing.mp3", "song.wav"])

        assert result == SessionResult.ERROR
        assert [c[0][0].song for c in app.player.call_args_list] == ["missing.mp3", "song.wav"]

    def test_play_files_success(self, app):
        app.player.return_value = SessionResult.SUCCESS
        assert app.play_files(["song.wav"]) == SessionResult.SUCCESS

    def test_music_dir_override(self):
        with patch("playdeck.main.setup_logging"):
            application = App(music_dir="/srv/music")
        assert application.config.get_music_directory() == "/srv/music"

    def test_init_subscribes_status_view(self):
        with patch("playdeck.main.setup_logging"):
            application = App(console=Console(file=io.StringIO()))
        application.init()
        try:
            assert application.status_view.subscribed
            assert application.player.chunk_samples == 8192
        finally:
            application.cleanup()
        assert not application.status_view.subscribed


@pytest.mark.unit
class TestSetupLogging:
    """Test cases for setup_logging()."""

    def test_writes_log_file(self, temp_data_dir, restore_root_logging):
        config = PlayDeckConfig()
        log_file = Path(temp_data_dir) / "logs" / "playdeck.log"
        config.set('logging.file_path', str(log_file))
        config.set('logging.console_output', False)

        setup_logging(config, "DEBUG")
        logging.getLogger("playdeck.test").debug("hello log")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.DEBUG
        assert "hello log" in log_file.read_text()


@pytest.mark.unit
class TestMain:
    """Test cases for main()."""

    def test_missing_config_exits_with_error(self, temp_data_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(Path(temp_data_dir) / "none.yaml")])

        assert exc.value.code == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_play_exit_code_follows_result(self):
        with patch("playdeck.main.App") as app_class:
            app_class.return_value.play_files.return_value = SessionResult.STOPPED_BY_USER
            with pytest.raises(SystemExit) as exc:
                main(["--play", "a.mp3"])

        assert exc.value.code == 2
        app_class.return_value.play_files.assert_called_once_with(["a.mp3"])
        app_class.return_value.cleanup.assert_called_once()

    def test_keyboard_interrupt_says_goodbye(self, capsys):
        with patch("playdeck.main.App") as app_class:
            app_class.return_value.run_interactive.side_effect = KeyboardInterrupt
            with pytest.raises(SystemExit) as exc:
                main([])

        assert exc.value.code == 0
        assert "Goodbye!" in capsys.readouterr().out

    def test_unexpected_error_exits_with_one(self):
        with patch("playdeck.main.App") as app_class:
            app_class.return_value.run_interactive.side_effect = RuntimeError("boom")
            with pytest.raises(SystemExit) as exc:
                main([])

        assert exc.value.code == 1
