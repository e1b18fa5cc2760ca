"""Presentation styles for terminal output."""

from typing import TextIO

# Style kinds
INFO = "info"
SUCCESS = "success"
WARNING = "warning"
ERROR = "error"
TITLE = "title"
SUBTITLE = "subtitle"
LABEL = "label"

STYLE_KINDS = (INFO, SUCCESS, WARNING, ERROR, TITLE, SUBTITLE, LABEL)

COLOR_MODES = ("auto", "always", "never")

# ANSI escape sequences
RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
CYAN = "\033[0;36m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

ANSI_CODES = {
    INFO: BLUE,
    SUCCESS: GREEN,
    WARNING: YELLOW,
    ERROR: RED,
    TITLE: BOLD + CYAN,
    SUBTITLE: BOLD + BLUE,
    LABEL: DIM,
}


class PlainStyle:
    """Style that leaves text untouched."""

    def apply(self, kind: str, text: str) -> str:
        """Return text decorated for the given kind."""
        if kind not in STYLE_KINDS:
            raise ValueError(f"Unknown style kind: {kind}")
        return text


class AnsiStyle(PlainStyle):
    """Style using ANSI colour codes."""

    def apply(self, kind: str, text: str) -> str:
        super().apply(kind, text)
        return f"{ANSI_CODES[kind]}{text}{RESET}"


def make_style(mode: str = "auto", stream: TextIO | None = None) -> PlainStyle:
    """
    Pick a style for a colour mode.

    Args:
        mode: "always", "never" or "auto" (colour only on a TTY)
        stream: Stream checked for TTY in auto mode

    Returns:
        AnsiStyle or PlainStyle
    """
    if mode not in COLOR_MODES:
        raise ValueError(f"Unknown color mode: {mode}")
    if mode == "always":
        return AnsiStyle()
    if mode == "never":
        return PlainStyle()
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        return AnsiStyle()
    return PlainStyle()
