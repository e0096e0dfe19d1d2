"""The command-line interface object and the sessions that run commands on it."""

from __future__ import annotations

from collections.abc import Callable
from typing import TextIO

from menushell.commands import Menu
from menushell.history import History
from menushell.storage import HistoryStorage, VolatileHistoryStorage

ExitAction = Callable[[TextIO], object]
ExceptionHandler = Callable[[TextIO, str, Exception], object]


def _flush(stream: TextIO) -> None:
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


class GlobalOutput:
    """A stream that writes to the output of every open session."""

    def __init__(self) -> None:
        self._streams: list[TextIO] = []

    def write(self, text: str) -> int:
        """Write ``text`` to every registered stream."""
        for stream in tuple(self._streams):
            stream.write(text)
        return len(text)

    def flush(self) -> None:
        """Flush every registered stream."""
        for stream in tuple(self._streams):
            _flush(stream)

    def register(self, stream: TextIO) -> None:
        """Add ``stream`` to the streams written to."""
        self._streams.append(stream)

    def unregister(self, stream: TextIO) -> None:
        """Remove every registration of ``stream``."""
        self._streams = [s for s in self._streams if s is not stream]


_GLOBAL_OUTPUT = GlobalOutput()


class Cli:
    """A root menu plus the settings shared by every session on it.

    ``history_storage`` keeps the commands of closed sessions; by default
    they are kept in memory.
    """

    def __init__(self, root_menu: Menu, history_storage: HistoryStorage | None = None) -> None:
        self._root_menu = root_menu
        self._storage = VolatileHistoryStorage() if history_storage is None else history_storage
        self._exit_action: ExitAction | None = None
        self._exception_handler: ExceptionHandler | None = None

    @property
    def root_menu(self) -> Menu:
        return self._root_menu

    def on_exit(self, action: ExitAction) -> None:
        """Set the action run whenever any session gets the ``exit`` command."""
        self._exit_action = action

    def on_std_exception(self, handler: ExceptionHandler) -> None:
        """Set the handler called with ``(out, cmd, exc)`` when a command raises."""
        self._exception_handler = handler

    @staticmethod
    def cout() -> GlobalOutput:
        """The stream that writes to every open session."""
        return _GLOBAL_OUTPUT

    def _run_exit_action(self, out: TextIO) -> None:
        if self._exit_action is not None:
            self._exit_action(out)

    def _handle_exception(self, out: TextIO, cmd: str, exc: Exception) -> None:
        if self._exception_handler is not None:
            self._exception_handler(out, cmd, exc)
        else:
            out.write(f"{exc}\n")

    def _store_commands(self, cmds: list[str]) -> None:
        self._storage.store(cmds)

    def _stored_commands(self) -> list[str]:
        return self._storage.commands()


class CliSession:
    """One user's conversation with a ``Cli``, writing to ``out``.

    With ``history_command`` the session also offers a ``history`` command.
    """

    def __init__(
        self,
        cli: Cli,
        out: TextIO,
        history_size: int = 100,
        *,
        history_command: bool = False,
    ) -> None:
        self._cli = cli
        self.current: Menu = cli.root_menu
        self.out = out
        self._exit_action: ExitAction = lambda out: None
        self._history = History(history_size)
        self._history.load_commands(cli._stored_commands())

        Cli.cout().register(out)
        self._global_menu = Menu()
        self._global_menu.insert("help", lambda out: self.help(), "This help message")
        self._global_menu.insert("exit", lambda out: self.exit(), "Quit the session")
        if history_command:
            self._global_menu.insert(
                "history", lambda out: self.show_history(), "Show the history"
            )

    def __enter__(self) -> CliSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def feed(self, cmd: str) -> None:
        """Run one command line."""
        words = cmd.split()
        if not words:
            return
        self._history.new_command(cmd)
        try:
            found = self._global_menu.scan_cmds(words, self) or self.current.scan_cmds(
                words, self
            )
            if not found:
                self.out.write(f"wrong command: {cmd}\n")
        except Exception as exc:
            self._cli._handle_exception(self.out, cmd, exc)

    def prompt(self) -> None:
        """Write the prompt of the current menu."""
        self.out.write(f"{self.current.prompt()}> ")
        _flush(self.out)

    def help(self) -> None:
        """Write the list of commands available from the current menu."""
        self.out.write("Commands available:\n")
        self._global_menu.main_help(self.out)
        self.current.main_help(self.out)

    def exit(self) -> None:
        """Run the exit actions and save this session's commands."""
        self._exit_action(self.out)
        self._cli._run_exit_action(self.out)
        self._cli._store_commands(self._history.get_commands())

    def on_exit(self, action: ExitAction) -> None:
        """Set the action run when this session gets the ``exit`` command."""
        self._exit_action = action

    def show_history(self) -> None:
        self._history.show(self.out)

    def previous_cmd(self, line: str) -> str:
        """Step back in the history, keeping the edited ``line``."""
        return self._history.previous(line)

    def next_cmd(self) -> str:
        """Step forward in the history."""
        return self._history.next()

    def get_completions(self, current_line: str) -> list[str]:
        """Sorted, distinct completions for ``current_line``."""
        line = current_line.lstrip()
        result = self._global_menu.get_completions(line)
        result.extend(self.current.get_completions(line))
        return sorted(set(result))

    def close(self) -> None:
        """Stop receiving the global output."""
        Cli.cout().unregister(self.out)