"""Storage policies for the command history shared across sessions."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable


class HistoryStorage(ABC):
    """Where the commands of closed sessions are kept."""

    @abstractmethod
    def store(self, cmds: Iterable[str]) -> None:
        """Append ``cmds`` (oldest first) to the stored history."""

    @abstractmethod
    def commands(self) -> list[str]:
        """Return the stored commands, oldest first."""

    @abstractmethod
    def clear(self) -> None:
        """Forget every stored command."""


class VolatileHistoryStorage(HistoryStorage):
    """Keeps at most ``size`` commands in memory."""

    def __init__(self, size: int = 1000) -> None:
        self._commands: deque[str] = deque(maxlen=size)

    def store(self, cmds: Iterable[str]) -> None:
        self._commands.extend(cmds)

    def commands(self) -> list[str]:
        return list(self._commands)

    def clear(self) -> None:
        self._commands.clear()


class FileHistoryStorage(HistoryStorage):
    """Keeps at most ``size`` commands in a text file, one per line."""

    def __init__(self, file_name: str | os.PathLike[str], size: int = 1000) -> None:
        self._max_size = size
        self._file_name = os.fspath(file_name)

    def store(self, cmds: Iterable[str]) -> None:
        commands = self.commands()
        commands.extend(cmds)
        if len(commands) > self._max_size:
            commands = commands[len(commands) - self._max_size:]
        with open(self._file_name, "w", encoding="utf-8", newline="") as f:
            f.writelines(f"{line}\n" for line in commands)

    def commands(self) -> list[str]:
        try:
            with open(self._file_name, encoding="utf-8", newline="") as f:
                content = f.read()
        except OSError:
            return []
        lines = content.split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def clear(self) -> None:
        with open(self._file_name, "w", encoding="utf-8"):
            pass