"""Terminal user interface."""

from .browser import FileBrowser
from .keyboard_input import TerminalInput
from .menu import PlaylistMenu
from .prompts import Prompter
from .status_view import StatusView

__all__ = ["FileBrowser", "TerminalInput", "PlaylistMenu", "Prompter", "StatusView"]
