"""Key presses read one character at a time from a raw POSIX terminal."""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Callable
from typing import Protocol, TextIO

from menushell.terminal import KeyType

try:
    import termios
except ImportError:  # not a POSIX platform
    termios = None  # type: ignore[assignment]

KeyHandler = Callable[[KeyType, str], object]

_ARROWS = {
    "A": KeyType.UP,
    "B": KeyType.DOWN,
    "D": KeyType.LEFT,
    "C": KeyType.RIGHT,
    "F": KeyType.END,
    "H": KeyType.HOME,
}


class _Scheduler(Protocol):
    def post(self, task: Callable[[], object]) -> None: ...


def decode_key(read: Callable[[], str]) -> tuple[KeyType, str]:
    """Decode one key press, calling ``read`` for each character it needs.

    ``read`` returns one character, or an empty string at the end of input.
    """
    ch = read()
    if ch in ("", "\x04"):
        return KeyType.EOF, " "
    if ch == "\x7f":
        return KeyType.BACKSPACE, " "
    if ch == "\n":
        return KeyType.RET, " "
    if ch == "\x1b":
        if read() != "[":
            return KeyType.IGNORED, " "
        code = read()
        if code == "3":
            return (KeyType.CANC, " ") if read() == "~" else (KeyType.IGNORED, " ")
        return _ARROWS.get(code, KeyType.IGNORED), " "
    return KeyType.ASCII, ch


class LinuxKeyboard:
    """Reads keys in a background thread and hands them to the scheduler.

    While it is open, a terminal input is switched to non-canonical mode
    without echo; ``close`` restores the previous mode.
    """

    def __init__(self, scheduler: _Scheduler, input_stream: TextIO | None = None) -> None:
        self._scheduler = scheduler
        self._input = sys.stdin if input_stream is None else input_stream
        self._handler: KeyHandler | None = None
        self._running = True
        self._fd: int | None = None
        self._saved_mode: list | None = None
        self._to_manual_mode()
        self._thread = threading.Thread(target=self._read, daemon=True)
        self._thread.start()

    def __enter__(self) -> LinuxKeyboard:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def register(self, handler: KeyHandler) -> None:
        """Set the function called with ``(key, char)`` for every key press."""
        self._handler = handler

    def close(self) -> None:
        """Stop reading and restore the terminal mode."""
        self._running = False
        self._to_standard_mode()

    def _read(self) -> None:
        while self._running:
            key, char = decode_key(self._read_char)
            self._notify(key, char)
            if key is KeyType.EOF:
                break

    def _read_char(self) -> str:
        try:
            return self._input.read(1)
        except (OSError, ValueError):
            return ""

    def _notify(self, key: KeyType, char: str) -> None:
        try:
            self._scheduler.post(lambda: self._dispatch(key, char))
        except RuntimeError:
            self._running = False  # the scheduler has been shut down

    def _dispatch(self, key: KeyType, char: str) -> None:
        if self._handler is not None:
            self._handler(key, char)

    def _to_manual_mode(self) -> None:
        if termios is None:
            return
        try:
            fd = self._input.fileno()
        except (AttributeError, OSError, ValueError):
            return
        if not os.isatty(fd):
            return
        saved = termios.tcgetattr(fd)
        manual = list(saved)
        manual[3] &= ~(termios.ICANON | termios.ECHO)
        termios.tcsetattr(fd, termios.TCSANOW, manual)
        self._fd = fd
        self._saved_mode = saved

    def _to_standard_mode(self) -> None:
        if termios is None or self._fd is None or self._saved_mode is None:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSANOW, self._saved_mode)
        except (OSError, termios.error):
            pass
        self._saved_mode = None