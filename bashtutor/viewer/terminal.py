"""
Terminal rendering for the tutorial.

Provides:
- ANSI colour output (switchable off)
- Boxed section headers
- Numbered catalog listing
- Line input that treats end of input as an empty answer
"""

import logging
import sys
from typing import Callable, Optional, TextIO

logger = logging.getLogger(__name__)


COLORS = {
    "RED": "\033[0;31m",
    "GREEN": "\033[0;32m",
    "YELLOW": "\033[1;33m",
    "BLUE": "\033[0;34m",
    "PURPLE": "\033[0;35m",
    "CYAN": "\033[0;36m",
    "WHITE": "\033[1;37m",
    "BOLD": "\033[1m",
}
RESET = "\033[0m"

HEADER_WIDTH = 60


class Console:
    """
    Thin wrapper around an output stream and a line reader.

    The reader takes no arguments and returns one line without its newline,
    raising EOFError at end of input (the builtin `input` does both).
    """

    def __init__(
        self,
        out: Optional[TextIO] = None,
        reader: Optional[Callable[[], str]] = None,
        color: bool = True,
    ):
        self.out = out or sys.stdout
        self._reader = reader or input
        self.color = color

    def paint(self, color: str, text: str) -> str:
        if not self.color or color not in COLORS:
            return text
        return f"{COLORS[color]}{text}{RESET}"

    def echo(self, text: str = ""):
        print(text, file=self.out, flush=True)

    def cecho(self, color: str, text: str):
        self.echo(self.paint(color, text))

    def read_line(self, prompt: Optional[str] = None) -> str:
        """Show a prompt and read one line. End of input reads as ""."""
        if prompt:
            self.cecho("CYAN", prompt)
        try:
            return self._reader()
        except (EOFError, OSError) as e:
            logger.debug(f"Input unavailable ({type(e).__name__}), treating as empty answer")
            return ""

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def box_header(self, title: str, width: int = HEADER_WIDTH):
        padding = max(0, (width - len(title)) // 2)
        remainder = max(0, width - padding - len(title))

        self.echo()
        self.cecho("BLUE", "╔" + "═" * width + "╗")
        middle = " " * padding + self.paint("WHITE", title) + " " * remainder
        self.echo(self.paint("BLUE", "║") + middle + self.paint("BLUE", "║"))
        self.cecho("BLUE", "╚" + "═" * width + "╝")
        self.echo()

    def sub_heading(self, text: str):
        rule = "-" * 20
        self.cecho("BLUE", rule)
        self.cecho("BOLD", text)
        self.cecho("BLUE", rule)

    def code_block(self, code: str, caption: Optional[str] = None):
        self.echo(caption or "Example:")
        for line in code.rstrip("\n").splitlines():
            self.echo(f"    {line}")
        self.echo()

    def numbered_list(self, titles: list[str]):
        for idx, title in enumerate(titles, start=1):
            self.echo(f"{self.paint('GREEN', f'{idx:2d}.')} {title}")
