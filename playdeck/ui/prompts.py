"""Console prompts and message lines shared by the menus."""

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.panel import Panel

logger = logging.getLogger(__name__)

INDENT = "\t\t"


class Prompter:
    """Reads validated answers and prints status lines."""

    def __init__(self, console: Optional[Console] = None,
                 ask: Optional[Callable[[str], str]] = None):
        """Initialize prompter.

        Args:
            console: Rich console used for output
            ask: Line reader taking a prompt, defaults to console.input
        """
        self.console = console or Console()
        self._ask = ask or self.console.input

    def ask(self, prompt: str) -> str:
        return self._ask(f"{INDENT}{prompt}").strip()

    def ask_int(self, prompt: str, low: int, high: int) -> int:
        """Ask until the answer is an integer within [low, high]."""
        while True:
            answer = self.ask(prompt)
            try:
                value = int(answer)
            except ValueError:
                value = None
            if value is not None and low <= value <= high:
                return value
            self.error(f"Invalid input. Please enter a value between {low} and {high}.")

    def confirm(self, prompt: str) -> bool:
        """Yes/no question. Anything but y/Y is no."""
        return self.ask(prompt).upper().startswith("Y")

    def confirm_continue(self) -> bool:
        return self.confirm("❓ Error playing track. Continue with next? (Y/N): ")

    def header(self, title: str) -> None:
        self.console.print()
        self.console.print(Panel(title, expand=False, style="bold cyan"))

    def line(self, text: str = "", style: Optional[str] = None) -> None:
        self.console.print(f"{INDENT}{text}", style=style, highlight=False, markup=False)

    def success(self, message: str) -> None:
        self.line(f"✅ {message}", "green")

    def error(self, message: str) -> None:
        self.line(f"❌ {message}", "red")

    def info(self, message: str) -> None:
        self.line(f"ℹ️ {message}", "blue")
