"""Line editing on a raw terminal: cursor moves, insertion and deletion."""

from __future__ import annotations

import enum
from typing import TextIO


class KeyType(enum.Enum):
    ASCII = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    BACKSPACE = enum.auto()
    CANC = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    RET = enum.auto()
    EOF = enum.auto()
    IGNORED = enum.auto()


class Symbol(enum.Enum):
    NOTHING = enum.auto()
    COMMAND = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    TAB = enum.auto()
    EOF = enum.auto()


def _flush(stream: TextIO) -> None:
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


class Terminal:
    """Keeps the line being edited and echoes every change to ``out``."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._line = ""
        self._position = 0  # next writing position in the line

    @property
    def line(self) -> str:
        """The line being edited."""
        return self._line

    @property
    def position(self) -> int:
        """The cursor position within the line."""
        return self._position

    def reset_cursor(self) -> None:
        """Forget where the cursor is, as after a fresh prompt."""
        self._position = 0

    def set_line(self, new_line: str) -> None:
        """Replace the edited line, redrawing it on the terminal."""
        out = self._out
        out.write("\b" * self._position + new_line)
        _flush(out)
        if len(new_line) < len(self._line):
            gap = len(self._line) - len(new_line)
            out.write(" " * gap + "\b" * gap)
            _flush(out)
        self._line = new_line
        self._position = len(new_line)

    def keypressed(self, key: KeyType, char: str = " ") -> tuple[Symbol, str]:
        """Apply a key press; return the symbol it produces and its text."""
        out = self._out
        line = self._line
        pos = self._position

        if key is KeyType.EOF:
            return Symbol.EOF, ""
        if key is KeyType.UP:
            return Symbol.UP, ""
        if key is KeyType.DOWN:
            return Symbol.DOWN, ""
        if key is KeyType.RET:
            out.write("\r\n")
            self._line = ""
            self._position = 0
            return Symbol.COMMAND, line
        if key is KeyType.BACKSPACE:
            if pos > 0:
                pos -= 1
                self._line = line[:pos] + line[pos + 1:]
                self._position = pos
                rest = self._line[pos:]
                out.write("\b" + rest + " " + "\b" * (len(self._line) - pos + 1))
                _flush(out)
        elif key is KeyType.LEFT:
            if pos > 0:
                out.write("\b")
                _flush(out)
                self._position = pos - 1
        elif key is KeyType.RIGHT:
            if pos < len(line):
                out.write(line[pos])
                _flush(out)
                self._position = pos + 1
        elif key is KeyType.ASCII:
            if char == "\t":
                return Symbol.TAB, ""
            rest = line[pos:]
            out.write(char + rest + "\b" * len(rest))
            _flush(out)
            self._line = line[:pos] + char + rest
            self._position = pos + 1
        elif key is KeyType.CANC:
            if pos != len(line):
                out.write(line[pos + 1:] + " " + "\b" * (len(line) - pos))
                _flush(out)
                self._line = line[:pos] + line[pos + 1:]
        elif key is KeyType.END:
            out.write(line[pos:])
            _flush(out)
            self._position = len(line)
        elif key is KeyType.HOME:
            out.write("\b" * pos)
            _flush(out)
            self._position = 0
        return Symbol.NOTHING, ""