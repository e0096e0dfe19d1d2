"""Commands, menus and the handles used to enable, disable or remove them."""

from __future__ import annotations

import types
import typing
import weakref
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, TextIO


class SessionLike(Protocol):
    """What a command needs from the session that runs it."""

    out: TextIO
    current: Any


_TYPE_NAMES: dict[Any, str] = {
    bool: "<bool>",
    int: "<int>",
    float: "<float>",
    str: "<string>",
}

_STRING_ANNOTATIONS: dict[str, Any] = {
    "bool": bool,
    "int": int,
    "float": float,
    "str": str,
    "list": list,
    "list[str]": list[str],
    "List[str]": list[str],
    "typing.List[str]": list[str],
}

_TRUE_WORDS = frozenset({"true", "1"})
_FALSE_WORDS = frozenset({"false", "0"})


def _is_string_list(tp: Any) -> bool:
    if tp is list:
        return True
    return typing.get_origin(tp) is list and typing.get_args(tp) in ((), (str,))


def type_name(tp: Any) -> str:
    """Return the placeholder shown in help for a parameter of type ``tp``."""
    if _is_string_list(tp):
        return "<list of strings>"
    return _TYPE_NAMES.get(tp, "")


def _from_string(text: str, tp: Any) -> Any:
    """Convert a command-line word; raise ValueError when it does not fit."""
    if tp is str:
        return text
    if tp is bool:
        word = text.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"not a boolean: {text!r}")
    return tp(text)


def _resolve_annotation(annotation: Any) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return _STRING_ANNOTATIONS[annotation.replace(" ", "")]
    except KeyError:
        raise TypeError(f"unsupported parameter annotation {annotation!r}") from None


def _handler_parameters(func: Callable[..., object]) -> list[Any]:
    """Return the types of the arguments a handler takes after the output stream."""
    target: Any = func
    skip = 0
    if isinstance(target, types.MethodType):
        target, skip = target.__func__, 1
    elif not isinstance(target, types.FunctionType):
        call = getattr(type(target), "__call__", None)
        if isinstance(call, types.FunctionType):
            target, skip = call, 1
    code = getattr(target, "__code__", None)
    if code is None:
        raise TypeError(f"cannot inspect command handler {func!r}")

    names = code.co_varnames[: code.co_argcount][skip:]
    kwonly = code.co_varnames[code.co_argcount : code.co_argcount + code.co_kwonlyargcount]
    kwdefaults = getattr(target, "__kwdefaults__", None) or {}
    if any(name not in kwdefaults for name in kwonly):
        raise TypeError(f"command handler {func!r} has a required keyword-only parameter")
    if not names:
        raise TypeError(f"command handler {func!r} must take the output stream")

    annotations = getattr(target, "__annotations__", None) or {}
    return [_resolve_annotation(annotations.get(name, str)) for name in names[1:]]


def _write_params(out: TextIO, param_desc: Sequence[str], types_: Iterable[Any]) -> None:
    if not param_desc:
        for tp in types_:
            out.write(f" {type_name(tp)}")
    for desc in param_desc:
        out.write(f" <{desc}>")


class Command(ABC):
    """Something the user can invoke by name."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._enabled = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    @abstractmethod
    def exec(self, cmd_line: Sequence[str], session: SessionLike) -> bool:
        """Run the command if ``cmd_line`` addresses it; return whether it did."""

    @abstractmethod
    def help(self, out: TextIO) -> None:
        """Write the help entry of the command to ``out``."""

    def get_completion_recursive(self, line: str) -> list[str]:
        """Return the completions this command offers for ``line``."""
        if not self._enabled:
            return []
        if self._name.startswith(line):
            return [self._name]
        return []


def get_completions(cmds: Iterable[Command], current_line: str) -> list[str]:
    """Collect the completions of every command in ``cmds``."""
    return [c for cmd in cmds for c in cmd.get_completion_recursive(current_line)]


class CmdHandler:
    """A handle to an inserted command; inert once the command is gone."""

    def __init__(self, command: Command | None = None, menu: Menu | None = None) -> None:
        self._command = weakref.ref(command) if command is not None else None
        self._menu = weakref.ref(menu) if menu is not None else None

    def _target(self) -> Command | None:
        return self._command() if self._command is not None else None

    def enable(self) -> None:
        command = self._target()
        if command is not None:
            command.enable()

    def disable(self) -> None:
        command = self._target()
        if command is not None:
            command.disable()

    def remove(self) -> None:
        command = self._target()
        menu = self._menu() if self._menu is not None else None
        if command is not None and menu is not None:
            menu._remove(command)


class VariadicFunctionCommand(Command):
    """A command taking a fixed number of typed arguments."""

    def __init__(
        self,
        name: str,
        func: Callable[..., object],
        description: str = "",
        param_desc: Sequence[str] = (),
        param_types: Sequence[Any] | None = None,
    ) -> None:
        super().__init__(name)
        self._func = func
        self._description = description
        self._param_desc = tuple(param_desc)
        found = _handler_parameters(func) if param_types is None else param_types
        self._param_types = tuple(found)

    def exec(self, cmd_line: Sequence[str], session: SessionLike) -> bool:
        if not self.enabled:
            return False
        if len(cmd_line) != len(self._param_types) + 1:
            return False
        if cmd_line[0] != self.name:
            return False
        try:
            args = [_from_string(word, tp) for word, tp in zip(cmd_line[1:], self._param_types)]
        except (ValueError, TypeError):
            return False
        self._func(session.out, *args)
        return True

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        out.write(f" - {self.name}")
        _write_params(out, self._param_desc, self._param_types)
        out.write(f"\n\t{self._description}\n")


class FreeformCommand(Command):
    """A command taking any number of words as a list of strings."""

    def __init__(
        self,
        name: str,
        func: Callable[[TextIO, list[str]], object],
        description: str = "",
        param_desc: Sequence[str] = (),
    ) -> None:
        super().__init__(name)
        self._func = func
        self._description = description
        self._param_desc = tuple(param_desc)

    def exec(self, cmd_line: Sequence[str], session: SessionLike) -> bool:
        if not self.enabled:
            return False
        if cmd_line[0] != self.name:
            return False
        self._func(session.out, list(cmd_line[1:]))
        return True

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        out.write(f" - {self.name}")
        _write_params(out, self._param_desc, (list[str],))
        out.write(f"\n\t{self._description}\n")


class Menu(Command):
    """A named group of commands and sub-menus."""

    def __init__(self, name: str = "", description: str = "(menu)") -> None:
        super().__init__(name)
        self._description = description
        self._parent: Menu | None = None
        self._cmds: list[Command] = []

    @property
    def parent(self) -> Menu | None:
        return self._parent

    def insert(
        self,
        name: str,
        func: Callable[..., object],
        help: str = "",
        param_desc: Sequence[str] = (),
    ) -> CmdHandler:
        """Add a command run by ``func(out, *args)``.

        The argument types come from ``func``'s annotations (unannotated ones
        are strings); a single ``list[str]`` argument takes every word.
        """
        param_types = _handler_parameters(func)
        command: Command
        if len(param_types) == 1 and _is_string_list(param_types[0]):
            command = FreeformCommand(name, func, help, param_desc)
        else:
            command = VariadicFunctionCommand(name, func, help, param_desc, param_types)
        return self.insert_command(command)

    def insert_command(self, command: Command) -> CmdHandler:
        """Add an already built command or sub-menu."""
        if isinstance(command, Menu):
            command._parent = self
        self._cmds.append(command)
        return CmdHandler(command, self)

    def _remove(self, command: Command) -> None:
        index = next((i for i, c in enumerate(self._cmds) if c is command), None)
        if index is not None:
            del self._cmds[index]

    def exec(self, cmd_line: Sequence[str], session: SessionLike) -> bool:
        if not self.enabled:
            return False
        if cmd_line[0] != self.name:
            return False
        if len(cmd_line) == 1:
            session.current = self
            return True
        sub_cmd_line = list(cmd_line[1:])
        return any(cmd.exec(sub_cmd_line, session) for cmd in tuple(self._cmds))

    def scan_cmds(self, cmd_line: Sequence[str], session: SessionLike) -> bool:
        """Run ``cmd_line`` against the commands here, then against the parent."""
        if not self.enabled:
            return False
        if any(cmd.exec(cmd_line, session) for cmd in tuple(self._cmds)):
            return True
        return self._parent is not None and self._parent.exec(cmd_line, session)

    def prompt(self) -> str:
        return self.name

    def main_help(self, out: TextIO) -> None:
        """Write the help of every command here and the parent's entry."""
        if not self.enabled:
            return
        for cmd in self._cmds:
            cmd.help(out)
        if self._parent is not None:
            self._parent.help(out)

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        out.write(f" - {self.name}\n\t{self._description}\n")

    def get_completions(self, current_line: str) -> list[str]:
        """Completions of the commands here, then of the parent menu."""
        result = get_completions(self._cmds, current_line)
        if self._parent is not None:
            result.extend(self._parent.get_completion_recursive(current_line))
        return result

    def get_completion_recursive(self, line: str) -> list[str]:
        """Completion of this menu, or of its commands once its name is typed."""
        if line.startswith(self.name):
            rest = line[len(self.name):].lstrip()
            return [
                f"{self.name} {c}"
                for cmd in self._cmds
                for c in cmd.get_completion_recursive(rest)
            ]
        return super().get_completion_recursive(line)