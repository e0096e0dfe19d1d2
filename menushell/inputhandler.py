"""Turns key presses into line editing, history browsing and completion."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from menushell.session import CliSession
from menushell.terminal import KeyType, Symbol, Terminal


def common_prefix(items: Sequence[str]) -> str:
    """Return the longest prefix shared by every string in ``items``."""
    if not items:
        return ""
    first = min(items)
    last = max(items)
    for i, (a, b) in enumerate(zip(first, last)):
        if a != b:
            return first[:i]
    return first


class _InputDevice(Protocol):
    def register(self, handler: Callable[[KeyType, str], object]) -> None: ...


class InputHandler:
    """Feeds the keys of ``keyboard`` to a terminal editing ``session``'s line."""

    def __init__(self, session: CliSession, keyboard: _InputDevice) -> None:
        self._session = session
        self._terminal = Terminal(session.out)
        keyboard.register(self.keypressed)

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    def keypressed(self, key: KeyType, char: str = " ") -> None:
        """Handle one key press."""
        symbol, text = self._terminal.keypressed(key, char)
        self._new_command(symbol, text)

    def _new_command(self, symbol: Symbol, text: str) -> None:
        session = self._session
        terminal = self._terminal
        if symbol is Symbol.EOF:
            session.exit()
        elif symbol is Symbol.COMMAND:
            session.feed(text)
            session.prompt()
        elif symbol is Symbol.DOWN:
            terminal.set_line(session.next_cmd())
        elif symbol is Symbol.UP:
            terminal.set_line(session.previous_cmd(terminal.line))
        elif symbol is Symbol.TAB:
            self._complete()

    def _complete(self) -> None:
        session = self._session
        terminal = self._terminal
        line = terminal.line
        completions = session.get_completions(line)
        if not completions:
            return
        if len(completions) == 1:
            terminal.set_line(completions[0] + " ")
            return
        prefix = common_prefix(completions)
        if len(prefix) > len(line):
            terminal.set_line(prefix)
            return
        session.out.write("\n")
        session.out.write("".join(f"\t{c}" for c in completions) + "\n")
        session.prompt()
        terminal.reset_cursor()
        terminal.set_line(line)