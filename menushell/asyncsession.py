"""A session reading its input lines in the background and running them on a scheduler."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable
from typing import Protocol, TextIO

from menushell.session import Cli, CliSession


class _Scheduler(Protocol):
    def post(self, task: Callable[[], object]) -> None: ...


class AsyncCliSession(CliSession):
    """Reads lines from ``input_stream`` without blocking the scheduler.

    Each line is fed to the session on the scheduler's thread; the session
    closes itself at the end of input or when reading fails.
    """

    def __init__(
        self,
        scheduler: _Scheduler,
        cli: Cli,
        input_stream: TextIO | None = None,
        out: TextIO | None = None,
    ) -> None:
        super().__init__(cli, sys.stdout if out is None else out, 1)
        self._scheduler = scheduler
        self._input = sys.stdin if input_stream is None else input_stream
        self._started = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Show the prompt and begin reading input."""
        if self._started or self._closed:
            return
        self._started = True
        self._read()

    def close(self) -> None:
        """Stop reading and stop receiving the global output."""
        if self._closed:
            return
        self._closed = True
        super().close()

    def _read(self) -> None:
        self.prompt()
        threading.Thread(target=self._read_line, daemon=True).start()

    def _read_line(self) -> None:
        line: str | None
        try:
            line = self._input.readline()
        except (OSError, ValueError):
            line = None
        try:
            self._scheduler.post(lambda: self._new_line(line))
        except RuntimeError:
            pass  # the scheduler has been shut down

    def _new_line(self, line: str | None) -> None:
        if self._closed:
            return
        if not line:
            self.close()
            return
        self.feed(line[:-1] if line.endswith("\n") else line)
        self._read()