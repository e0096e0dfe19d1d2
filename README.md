# menushell

Build interactive command shells out of nested menus. Commands are plain
Python callables that take the session's output stream first; the remaining
parameters are parsed from the typed words according to their annotations
(unannotated parameters are strings). A command taking two `int` arguments is
listed in the help as `add <int> <int>`, and a command taking a single
`list[str]` argument receives every word that follows its name.

## Features

- `menushell.commands`: `Menu`, `VariadicFunctionCommand`, `FreeformCommand`
  and `CmdHandler`, the handle returned by `Menu.insert` that enables,
  disables or removes a command at run time
- `menushell.session`: `Cli` (root menu, exit action, exception handler,
  history storage) and `CliSession`, which runs command lines with `feed`;
  `help` and `exit` are available in every menu, and `history` too when the
  session is created with `history_command=True`
- `Cli.cout()`: a global output that writes to every open session
- `menushell.history` and `menushell.storage`: per-session history browsed
  with `previous`/`next`, and shared history kept in memory
  (`VolatileHistoryStorage`) or in a text file (`FileHistoryStorage`)
- `menushell.terminal` and `menushell.inputhandler`: line editing, history
  browsing with the arrow keys and tab completion driven by key presses
- `menushell.keyboard`: `LinuxKeyboard`, which reads keys from a POSIX
  terminal in a background thread
- `menushell.asyncsession`: `AsyncCliSession`, which reads whole lines in the
  background and runs them on a scheduler
- `menushell.loopscheduler.LoopScheduler` (thread-safe) and
  `menushell.asyncioscheduler.AsyncioScheduler` (on an `asyncio` event loop)
- `menushell.colors`: ANSI style and colour codes, written by `colorize` only
  when forced with `set_control` or when the output is a terminal that
  supports them

## Installation

```
pip install menushell
```

## Example

```python
import sys

from menushell.commands import Menu
from menushell.session import Cli, CliSession


def add(out, x: int, y: int):
    out.write(f"{x} + {y} = {x + y}\n")


root = Menu("cli")
root.insert("hello", lambda out: out.write("Hello, world\n"), "Print hello world")
root.insert("add", add, "Print the sum of the two numbers")

sub = Menu("sub")
sub.insert("demo", lambda out: out.write("This is a sample!\n"), "Print a demo string")
root.insert_command(sub)

cli = Cli(root)
cli.on_exit(lambda out: out.write("Goodbye.\n"))

with CliSession(cli, sys.stdout) as session:
    session.feed("hello")      # Hello, world
    session.feed("add 1 2")    # 1 + 2 = 3
    session.feed("sub")        # enter the submenu
    session.prompt()           # prints "sub> "
    session.feed("exit")       # Goodbye.
```

A line that matches no command prints `wrong command: <line>`. An exception
raised by a command is passed to the handler set with `Cli.on_std_exception`,
or its message is printed.

## Demo

A demo shell with nested menus and a set of sample commands is installed with
the package:

```
menushell-demo
```

Options:

- `--mode local` (default): line editing, history and tab completion on the
  keyboard
- `--mode async`: whole lines read from standard input
- `--mode file`: commands read from `--input` (default `input.txt`), output
  written to `--output` (default `output.txt`)
- `--history-file PATH`: keep the command history in a file

Type `help` to list the commands available in the current menu and `exit`
to leave.

## What it does not do

There is no network server: sessions run on the local keyboard, on standard
input or on a file, not over telnet or any other remote connection.

## Running the tests

```
pip install menushell[test]
pytest
```