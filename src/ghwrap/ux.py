"""Simple UX helpers for wrapper-owned messages - no external dependencies.

Only messages that ghwrap itself emits go through here; output of git and
of prerequisite commands is never decorated.
"""

from __future__ import annotations

import os
import sys
from typing import TextIO


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"


def _supports_color(stream: TextIO | None = None) -> bool:
    stream = stream or sys.stderr
    if os.environ.get("NO_COLOR"):
        return False
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    return os.environ.get("TERM") != "dumb"


def colorize(text: str, color: str, bold: bool = False, stream: TextIO | None = None) -> str:
    """Apply color to text if terminal supports it."""
    if not _supports_color(stream):
        return text
    prefix = (Colors.BOLD if bold else "") + color
    return f"{prefix}{text}{Colors.RESET}"


def print_error(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stderr
    print(colorize("ghwrap:", Colors.RED, bold=True, stream=stream) + " " + message, file=stream)


__all__ = ["Colors", "colorize", "print_error"]
