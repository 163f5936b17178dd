"""Interactive playlist menus."""

import logging
from typing import Callable, Optional

from ..models.audio import SessionResult
from ..models.playlist import MAX_NAME_LENGTH, Playlist, PlaylistEntry, is_valid_name
from ..playback.traversal import TraversalDriver, TraversalReport
from ..services.library import LibraryFullError, PlaylistLibrary
from ..storage.file_manager import PlaylistFileManager
from .browser import FileBrowser
from .prompts import Prompter

logger = logging.getLogger(__name__)

MAX_REPEAT_ROUNDS = 10

MAIN_MENU = [
    "1. 📝 Create New Playlist",
    "2. 🎛️ Manage Playlists",
    "3. 💾 Save Active Playlists",
    "4. 📂 Load Playlists from Files",
    "5. 🚪 Exit",
]

MANAGE_SECTIONS = [
    ("PLAYLIST MANAGEMENT", [
        " 1. 📋 Display Playlist",
        " 2. ✏️  Rename Playlist",
        " 3. 🗑️  Delete Entire Playlist",
    ]),
    ("SONG MANAGEMENT", [
        " 4. ⤴️  Add Song to Beginning",
        " 5. ⤵️  Add Song to End",
        " 6. ↩️  Add Song at Position",
        " 7. 🗑️  Delete Song from Beginning",
        " 8. 🗑️  Delete Song from End",
        " 9. 🗑️  Delete Song at Position",
    ]),
    ("PLAYBACK (WITH CONTROLS)", [
        "10. 🎵 Play Specific Song",
        "11. ▶️  Play Sequentially",
        "12. 🔁 Play with Repeat...",
        "13. ◀️  Play in Reverse",
    ]),
    ("ORGANIZATION", [
        "14. 🔍 Search for Song",
        "15. 🔤 Sort Playlist",
    ]),
    ("NAVIGATION", [
        "16. ↩️  Back to Main Menu",
    ]),
]


class PlaylistMenu:
    """Main and manage menus driving the library, storage and playback."""

    def __init__(
        self,
        library: PlaylistLibrary,
        file_manager: PlaylistFileManager,
        browser: FileBrowser,
        play_track: Callable[[PlaylistEntry], SessionResult],
        prompter: Optional[Prompter] = None,
        track_delay: float = 2.0,
    ):
        self.library = library
        self.file_manager = file_manager
        self.browser = browser
        self.prompter = prompter or browser.prompter
        self.driver = TraversalDriver(
            play_track,
            confirm_continue=self.prompter.confirm_continue,
            console=self.prompter.console,
            track_delay=track_delay,
        )

    def run(self) -> None:
        """Show the main menu until the user exits."""
        p = self.prompter
        while True:
            self.show_main_menu()
            choice = p.ask_int("Enter your choice (1-5): ", 1, len(MAIN_MENU))
            if choice == 1:
                self.create_playlist()
            elif choice == 2:
                self.choose_playlist()
            elif choice == 3:
                self.save_playlists()
            elif choice == 4:
                self.load_playlists()
            else:
                p.info("Exiting program. Goodbye!")
                return

    def show_main_menu(self) -> None:
        p = self.prompter
        p.header("🎵 PlayDeck Playlist Manager")
        for item in MAIN_MENU:
            p.line(item)
        p.line()
        p.line("Playlist Slots Status:", "bold")
        for slot in self.library.slots():
            if self.library.is_taken(slot):
                playlist = self.library.get(slot)
                p.line(f"  Slot {slot}: Active - '{self.library.display_name(slot)}' "
                       f"({len(playlist)} songs)")
            else:
                p.line(f"  Slot {slot}: Available")
        p.line(f"Total Active: {len(self.library)}/{self.library.capacity}")

    def create_playlist(self) -> Optional[int]:
        p = self.prompter
        p.header("Create New Playlist")
        if self.library.is_full():
            p.error(f"Maximum number of playlists ({self.library.capacity}) reached. "
                    "Delete a playlist first.")
            return None
        name = p.ask("Enter name for the new playlist: ")
        try:
            slot, playlist = self.library.create(name)
        except LibraryFullError as e:
            p.error(str(e))
            return None
        p.success(f"Playlist '{playlist.display_name}' created in slot {slot}.")
        return slot

    def choose_playlist(self) -> None:
        p = self.prompter
        p.header("Manage Playlists")
        active = self.library.active()
        if not active:
            p.info("No playlists available. Create one first.")
            return
        p.line("Select a list to manage:")
        for i, (slot, playlist) in enumerate(active, start=1):
            p.line(f"{i}. {self.library.display_name(slot)} ({len(playlist)} songs)")
        p.line(f"{len(active) + 1}. Back")
        choice = p.ask_int(f"Enter your choice (1-{len(active) + 1}): ", 1, len(active) + 1)
        if choice <= len(active):
            self.manage_playlist(active[choice - 1][0])

    def save_playlists(self) -> None:
        saved, active = self.file_manager.save_library(self.library)
        if active == 0:
            self.prompter.info("No active playlists to save.")
        elif saved == active:
            self.prompter.success(f"Saved {saved} playlist(s).")
        else:
            self.prompter.error(f"Saved {saved} of {active} playlists. See the log for details.")

    def load_playlists(self) -> None:
        loaded = self.file_manager.load_library(self.library)
        if loaded:
            slots = ", ".join(str(slot) for slot in loaded)
            self.prompter.success(f"Loaded {len(loaded)} playlist(s) into slot(s) {slots}.")
        else:
            self.prompter.info("No playlists loaded. Files missing or slots already in use.")

    def manage_playlist(self, slot: int) -> None:
        """Manage menu for one slot until the user goes back."""
        p = self.prompter
        while self.library.is_taken(slot):
            playlist = self.library.get(slot)
            p.header(f"Managing: {self.library.display_name(slot)}")
            p.line(f"Songs in list: {len(playlist)}")
            for title, items in MANAGE_SECTIONS:
                p.line(f"┌─ {title}", "bold")
                for item in items:
                    p.line(f"│ {item}")
            choice = p.ask_int("Enter your choice (1-16): ", 1, 16)
            if choice == 16:
                return
            try:
                self.handle_manage_choice(slot, playlist, choice)
            except (IndexError, ValueError) as e:
                p.error(str(e))

    def handle_manage_choice(self, slot: int, playlist: Playlist, choice: int) -> None:
        p = self.prompter
        if choice == 1:
            self.print_playlist(playlist)
        elif choice == 2:
            self.rename_playlist(slot)
        elif choice == 3:
            self.delete_playlist(slot)
        elif choice in (4, 5):
            self.add_songs(playlist, at_start=(choice == 4))
        elif choice == 6:
            self.add_song_at(playlist)
        elif choice == 7:
            entry = playlist.remove_first()
            p.success(f"Deleted '{entry.display_name}' from beginning.")
        elif choice == 8:
            entry = playlist.remove_last()
            p.success(f"Deleted '{entry.display_name}' from end.")
        elif choice == 9:
            self.delete_song_at(playlist)
        elif choice in (10, 11, 12, 13):
            self.play(playlist, choice)
        elif choice == 14:
            self.search(playlist)
        elif choice == 15:
            self.sort(playlist)

    def print_playlist(self, playlist: Playlist) -> None:
        p = self.prompter
        p.line(f"🎵 Playlist: {playlist.display_name}", "bold cyan")
        if playlist.is_empty():
            p.info("Playlist is empty.")
            return
        for position, entry in enumerate(playlist, start=1):
            p.line(f"{position:>3}. {entry.display_name} - {entry.artist}")
        p.line(f"Total songs: {len(playlist)}")

    def rename_playlist(self, slot: int) -> None:
        p = self.prompter
        p.line(f"Current list name: {self.library.display_name(slot)}")
        name = p.ask("Enter new name for the list: ")
        if not is_valid_name(name) or len(name) > MAX_NAME_LENGTH:
            p.error(f"Invalid name. Names must be 1-{MAX_NAME_LENGTH} characters "
                    "without \\ / : * ? \" < > |")
            return
        self.library.rename(slot, name)
        p.success(f"List renamed to '{name}'.")

    def delete_playlist(self, slot: int) -> None:
        p = self.prompter
        name = self.library.display_name(slot)
        p.line(f"⚠️ This will delete all {len(self.library.get(slot))} songs", "yellow")
        if not p.confirm(f"   in the list '{name}'. Are you sure you want to proceed? (Y/N): "):
            p.info("Delete canceled.")
            return
        self.library.remove(slot)
        p.success(f"Playlist '{name}' deleted.")

    def add_songs(self, playlist: Playlist, at_start: bool) -> None:
        selection = self.browser.browse(allow_multiple=True)
        if not selection:
            return
        for song, artist in selection:
            if at_start:
                playlist.add_first(song, artist)
            else:
                playlist.add_last(song, artist)
        where = "beginning" if at_start else "end"
        self.prompter.success(f"Added {len(selection)} song(s) to {where} of '{playlist.display_name}'.")

    def add_song_at(self, playlist: Playlist) -> None:
        p = self.prompter
        position = p.ask_int(f"Enter position (1-{len(playlist) + 1}): ", 1, len(playlist) + 1)
        selection = self.browser.browse(allow_multiple=False)
        if not selection:
            return
        song, artist = selection[0]
        entry = playlist.insert_at(song, artist, position)
        p.success(f"Song '{entry.display_name}' added at position {position}.")

    def delete_song_at(self, playlist: Playlist) -> None:
        p = self.prompter
        if playlist.is_empty():
            p.error("List is already empty.")
            return
        self.print_playlist(playlist)
        position = p.ask_int(f"Enter position to delete (1-{len(playlist)}): ", 1, len(playlist))
        entry = playlist.remove_at(position)
        p.success(f"Deleted '{entry.display_name}' from position {position}.")

    def play(self, playlist: Playlist, choice: int) -> Optional[TraversalReport]:
        p = self.prompter
        if playlist.is_empty():
            p.error("List is empty.")
            return None
        if choice == 10:
            self.print_playlist(playlist)
            position = p.ask_int(f"📌 Enter track number to play (1-{len(playlist)}): ",
                                 1, len(playlist))
            return self.driver.play_single(playlist, position)
        if choice == 11:
            return self.driver.play_sequential(playlist)
        if choice == 12:
            rounds = p.ask_int(f"Enter number of times to repeat (1-{MAX_REPEAT_ROUNDS}): ",
                               1, MAX_REPEAT_ROUNDS)
            return self.driver.play_repeat(playlist, rounds)
        return self.driver.play_reverse(playlist)

    def search(self, playlist: Playlist) -> None:
        p = self.prompter
        term = p.ask("Enter song name to search: ")
        if not term:
            p.error("Search term cannot be empty.")
            return
        matches = playlist.search(term)
        if not matches:
            p.info(f"No songs matching '{term}' found.")
            return
        p.success(f"Found {len(matches)} match(es):")
        for position, entry in matches:
            p.line(f"{position:>3}. {entry.display_name} - {entry.artist}")

    def sort(self, playlist: Playlist) -> None:
        p = self.prompter
        p.line(f"Sort list '{playlist.display_name}' by:")
        p.line("1. Song Title")
        p.line("2. Artist Name")
        if p.ask_int("Enter your choice (1-2): ", 1, 2) == 1:
            playlist.sort_by_song()
            p.success("Playlist sorted by song title.")
        else:
            playlist.sort_by_artist()
            p.success("Playlist sorted by artist name.")
