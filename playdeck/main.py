"""Main application entry point for PlayDeck."""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from playdeck import __version__
from playdeck.audio.audio_pub import PlaybackPublisher
from playdeck.models.audio import SessionResult
from playdeck.models.playlist import Playlist
from playdeck.playback.player import Player
from playdeck.playback.traversal import TraversalDriver, TraversalReport
from playdeck.services.library import PlaylistLibrary
from playdeck.storage.file_manager import PlaylistFileManager
from playdeck.storage.music_library import MusicDirectory
from playdeck.ui.browser import FileBrowser
from playdeck.ui.keyboard_input import TerminalInput
from playdeck.ui.menu import PlaylistMenu
from playdeck.ui.prompts import Prompter
from playdeck.ui.status_view import StatusView

from .config import PlayDeckConfig

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "[Unknown]"


class App:
    """Wires configuration, playback and the console together."""

    def __init__(self, config_path: Optional[str] = None, log_level: Optional[str] = None,
                 music_dir: Optional[str] = None, console: Optional[Console] = None):
        self.config = PlayDeckConfig(config_path)
        if music_dir:
            self.config.set('library.music_directory', music_dir)
        setup_logging(self.config, log_level or self.config.get('logging.level', 'INFO'))
        self.console = console or Console()

    def init(self) -> None:
        logger.info("Initializing services...")
        self.publisher = PlaybackPublisher()
        self.status_view = StatusView(self.console, self.publisher.topic)
        self.status_view.subscribe()

        chunk_samples = self.config.get('playback.chunk_samples', 8192)
        seek_seconds = self.config.get('playback.seek_seconds', 10)
        logger.info(f"Playback settings: {chunk_samples} samples/chunk, seek {seek_seconds}s")

        self.player = Player(
            keyboard=TerminalInput(),
            on_event=self.publisher.publish_event,
            chunk_samples=chunk_samples,
            seek_seconds=seek_seconds,
            pause_interval=self.config.get('playback.pause_poll_seconds', 0.1),
        )
        self.track_delay = self.config.get('playback.track_delay_seconds', 2.0)
        self.prompter = Prompter(self.console)

    def run_interactive(self) -> None:
        library = PlaylistLibrary(self.config.get('library.slots', 3))
        file_manager = PlaylistFileManager(self.config.get_data_directory())
        music = MusicDirectory(self.config.get_music_directory())
        if not music.ensure_exists():
            self.prompter.error(f"Music directory '{music.root}' is not usable.")

        menu = PlaylistMenu(
            library,
            file_manager,
            FileBrowser(music, self.prompter),
            self.player,
            prompter=self.prompter,
            track_delay=self.track_delay,
        )
        menu.run()

    def play_files(self, paths: List[str]) -> SessionResult:
        """Play files as an ad-hoc playlist and summarize the outcome."""
        playlist = Playlist(name="Command Line")
        for path in paths:
            playlist.add_last(path, UNKNOWN_ARTIST)

        driver = TraversalDriver(
            self.player,
            confirm_continue=lambda: True,
            console=self.console,
            track_delay=self.track_delay,
        )
        return report_result(driver.play_sequential(playlist))

    def cleanup(self) -> None:
        if getattr(self, "status_view", None) is not None:
            self.status_view.unsubscribe()


def report_result(report: TraversalReport) -> SessionResult:
    if report.stopped_by_user:
        return SessionResult.STOPPED_BY_USER
    if report.failures or report.aborted:
        return SessionResult.ERROR
    return SessionResult.SUCCESS


def setup_logging(config, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'data/logs/playdeck.log')
    console_output = config.get('logging.console_output', True)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger = logging.getLogger(__name__)
    logger.info("="*50)
    logger.info("PlayDeck starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("="*50)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="PlayDeck - Console playlist manager and audio player",
        epilog="Playback controls: Space=Play/Pause, s=Stop, j=-10s, k=+10s"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in settings)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config)"
    )

    parser.add_argument(
        "--music-dir",
        type=str,
        help="Music directory to browse (overrides config)"
    )

    parser.add_argument(
        "--play",
        nargs="+",
        metavar="FILE",
        help="Play the given files in order and exit"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"PlayDeck v{__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for PlayDeck application."""
    args = build_parser().parse_args(argv)

    try:
        app = App(args.config, args.log_level, args.music_dir)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    exit_code = 0
    try:
        app.init()
        if args.play:
            exit_code = int(app.play_files(args.play))
        else:
            app.run_interactive()
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except EOFError:
        print()
    except Exception as e:
        print(f"❌ Error: {e}")
        logger.exception(f"Application error: {e}")
        exit_code = 1
    finally:
        app.cleanup()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
