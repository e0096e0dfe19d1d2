"""ANSI colour and style codes, written only where the output can show them."""

from __future__ import annotations

import enum
import os
import sys
import weakref
from typing import TextIO, Union


class Style(enum.IntEnum):
    RESET = 0
    BOLD = 1
    DIM = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    RBLINK = 6
    REVERSED = 7
    CONCEAL = 8
    CROSSED = 9


class Fg(enum.IntEnum):
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    GRAY = 37
    RESET = 39


class Bg(enum.IntEnum):
    BLACK = 40
    RED = 41
    GREEN = 42
    YELLOW = 43
    BLUE = 44
    MAGENTA = 45
    CYAN = 46
    GRAY = 47
    RESET = 49


class FgB(enum.IntEnum):
    BLACK = 90
    RED = 91
    GREEN = 92
    YELLOW = 93
    BLUE = 94
    MAGENTA = 95
    CYAN = 96
    GRAY = 97


class BgB(enum.IntEnum):
    BLACK = 100
    RED = 101
    GREEN = 102
    YELLOW = 103
    BLUE = 104
    MAGENTA = 105
    CYAN = 106
    GRAY = 107


class Control(enum.Enum):
    AUTO_COLOR = 0
    FORCE_COLOR = 1


ColorCode = Union[Style, Fg, Bg, FgB, BgB]

_TERMS = (
    "ansi", "color", "console", "cygwin", "gnome", "konsole", "kterm",
    "linux", "msys", "putty", "rxvt", "screen", "vt100", "xterm",
)

_forced: weakref.WeakKeyDictionary[TextIO, bool] = weakref.WeakKeyDictionary()


def supports_color() -> bool:
    """Whether the terminal named by ``TERM`` understands colour codes."""
    if sys.platform == "win32":
        return True
    term = os.environ.get("TERM")
    if term is None:
        return False
    return any(name in term for name in _TERMS)


def _isatty(stream: TextIO) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


def is_terminal(stream: TextIO) -> bool:
    """Whether ``stream`` is standard output or error attached to a terminal."""
    if stream is sys.stdout:
        return _isatty(sys.stdout)
    if stream is sys.stderr:
        return _isatty(sys.stderr)
    return False


def set_control(stream: TextIO, value: Control) -> TextIO:
    """Force colour codes on ``stream``, or go back to detecting support."""
    if value is Control.FORCE_COLOR:
        _forced[stream] = True
    elif value is Control.AUTO_COLOR:
        _forced.pop(stream, None)
    return stream


def colorize(stream: TextIO, value: ColorCode) -> TextIO:
    """Write the escape code of ``value`` to ``stream`` when colours apply."""
    if _forced.get(stream, False) or (supports_color() and is_terminal(stream)):
        stream.write(f"\033[{int(value)}m")
    return stream