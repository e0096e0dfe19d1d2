"""Per-session command history with arrow-key style browsing."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable
from typing import TextIO


class _Mode(enum.Enum):
    INSERTING = enum.auto()
    BROWSING = enum.auto()


class History:
    """A bounded history of commands, newest first.

    While browsing (``previous``/``next``), the line being edited is kept as
    the front entry so that it can be restored when coming back down.
    """

    def __init__(self, size: int) -> None:
        self._max_size = size
        self._buffer: deque[str] = deque()
        self._current = 0
        self._commands = 0  # commands issued in this session
        self._mode = _Mode.INSERTING

    def new_command(self, item: str) -> None:
        """Record a command that has just been entered."""
        self._commands += 1
        self._current = 0
        if self._mode is _Mode.BROWSING:
            if len(self._buffer) > 1 and self._buffer[1] == item:
                self._buffer.popleft()
            else:
                self._buffer[self._current] = item
        elif not self._buffer or self._buffer[0] != item:
            self._insert(item)
        self._mode = _Mode.INSERTING

    def previous(self, line: str) -> str:
        """Step back in the history, saving the edited ``line``."""
        if self._mode is _Mode.INSERTING:
            self._insert(line)
            self._mode = _Mode.BROWSING
            self._current = 1 if len(self._buffer) > 1 else 0
        else:
            self._buffer[self._current] = line
            if self._current != len(self._buffer) - 1:
                self._current += 1
        return self._buffer[self._current]

    def next(self) -> str:
        """Step forward in the history; an empty string past the newest item."""
        if not self._buffer or self._current == 0:
            return ""
        self._current -= 1
        return self._buffer[self._current]

    def show(self, out: TextIO) -> None:
        """Write the whole history, newest first, to ``out``."""
        out.write("\n")
        for item in self._buffer:
            out.write(f"{item}\n")
        out.write("\n")
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    def load_commands(self, cmds: Iterable[str]) -> None:
        """Load commands ordered oldest first."""
        for cmd in cmds:
            self._insert(cmd)

    def get_commands(self) -> list[str]:
        """Return the commands issued in this session, oldest first."""
        items = list(self._buffer)
        if self._mode is _Mode.BROWSING:
            items = items[1:]
        count = min(self._commands, len(items))
        return list(reversed(items[:count]))

    def _insert(self, item: str) -> None:
        self._buffer.appendleft(item)
        if len(self._buffer) > self._max_size:
            self._buffer.pop()