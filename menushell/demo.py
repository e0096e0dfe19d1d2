"""A sample menu shell run on a keyboard, on standard input or on a file."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import TextIO

from menushell.asyncioscheduler import AsyncioScheduler
from menushell.asyncsession import AsyncCliSession
from menushell.commands import CmdHandler, Menu
from menushell.inputhandler import InputHandler
from menushell.keyboard import LinuxKeyboard
from menushell.loopscheduler import LoopScheduler
from menushell.session import Cli, CliSession
from menushell.storage import FileHistoryStorage


def build_root_menu() -> Menu:
    """Build the sample menu tree with its commands and sub-menus."""
    handlers: dict[str, CmdHandler] = {}
    root = Menu("cli")

    def hello_everysession(out: TextIO) -> None:
        everyone = Cli.cout()
        everyone.write("Hello, everybody\n")
        everyone.flush()

    def answer(out: TextIO, x: int) -> None:
        out.write(f"The answer is: {x}\n")

    def file(out: TextIO, fd: int) -> None:
        out.write(f"file descriptor: {fd}\n")

    def echo(out: TextIO, arg: str) -> None:
        out.write(f"{arg}\n")

    def echo2(out: TextIO, arg1: str, arg2: str) -> None:
        out.write(f"{arg1} {arg2}\n")

    def error(out: TextIO) -> None:
        raise RuntimeError("Error in cmd")

    def reverse(out: TextIO, arg: str) -> None:
        out.write(f"{arg[::-1]}\n")

    def add(out: TextIO, x: int, y: int) -> None:
        out.write(f"{x} + {y} = {x + y}\n")

    def add3(out: TextIO, x: int, y: int, z: int) -> None:
        out.write(f"{x} + {y} + {z} = {x + y + z}\n")

    def sort(out: TextIO, data: list[str]) -> None:
        out.write("sorted list: " + "".join(f"{word} " for word in sorted(data)) + "\n")

    def color(out: TextIO) -> None:
        out.write("Colors ON\n")
        handlers["color"].disable()
        handlers["nocolor"].enable()

    def nocolor(out: TextIO) -> None:
        out.write("Colors OFF\n")
        handlers["color"].enable()
        handlers["nocolor"].disable()

    def removecmds(out: TextIO) -> None:
        handlers["color"].remove()
        handlers["nocolor"].remove()

    root.insert("hello", lambda out: out.write("Hello, world\n"), "Print hello world")
    root.insert(
        "hello_everysession", hello_everysession, "Print hello everybody on all open sessions"
    )
    root.insert("answer", answer, "Print the answer to Life, the Universe and Everything")
    root.insert("file", file, "Print the file descriptor specified", ["file_descriptor"])
    root.insert("echo", echo, "Print the string passed as parameter", ["string to echo"])
    root.insert(
        "echo",
        echo2,
        "Print the strings passed as parameter",
        ["first string to echo", "second string to echo"],
    )
    root.insert("error", error, "Throw an exception in the command handler")
    root.insert("reverse", reverse, "Print the reverse string", ["string_to_revert"])
    root.insert("add", add, "Print the sum of the two numbers", ["first_term", "second_term"])
    root.insert("add", add3, "Print the sum of the three numbers")
    root.insert(
        "sort", sort, "Alphabetically sort a list of words", ["list of strings separated by space"]
    )
    handlers["color"] = root.insert("color", color, "Enable colors in the cli")
    handlers["nocolor"] = root.insert("nocolor", nocolor, "Disable colors in the cli")
    root.insert("removecmds", removecmds)

    sub = Menu("sub")
    sub.insert(
        "hello", lambda out: out.write("Hello, submenu world\n"), "Print hello world in the submenu"
    )
    sub.insert("demo", lambda out: out.write("This is a sample!\n"), "Print a demo string")
    subsub = Menu("subsub")
    subsub.insert(
        "hello",
        lambda out: out.write("Hello, subsubmenu world\n"),
        "Print hello world in the sub-submenu",
    )
    sub.insert_command(subsub)
    root.insert_command(sub)
    return root


def _report_exception(out: TextIO, cmd: str, exc: Exception) -> None:
    out.write(f"Exception caught in cli handler: {exc} handling command: {cmd}.\n")


def _build_cli(history_file: str | None) -> Cli:
    storage = FileHistoryStorage(history_file) if history_file else None
    cli = Cli(build_root_menu(), storage)
    cli.on_exit(lambda out: out.write("Goodbye and thanks for all the fish.\n"))
    cli.on_std_exception(_report_exception)
    return cli


def _run_local(cli: Cli) -> None:
    scheduler = LoopScheduler()
    with CliSession(cli, sys.stdout, 200) as session:

        def closing(out: TextIO) -> None:
            out.write("Closing App...\n")
            scheduler.stop()

        session.on_exit(closing)
        with LinuxKeyboard(scheduler) as keyboard:
            InputHandler(session, keyboard)
            session.prompt()
            scheduler.run()


def _run_async(cli: Cli) -> None:
    with AsyncioScheduler() as scheduler:
        session = AsyncCliSession(scheduler, cli)

        def closing(out: TextIO) -> None:
            out.write("Closing App...\n")
            scheduler.stop()

        session.on_exit(closing)
        try:
            session.start()
            scheduler.run()
        finally:
            session.close()


def _run_file(cli: Cli, input_path: str, output_path: str) -> int:
    try:
        infile = open(input_path, encoding="utf-8")
    except OSError:
        sys.stderr.write(f"File {input_path} not found in current directory!\n")
        return 1
    with infile:
        try:
            outfile = open(output_path, "w", encoding="utf-8")
        except OSError:
            sys.stderr.write(f"Can't write file {output_path} in the current directory!\n")
            return 1
        with outfile, CliSession(cli, outfile) as session:
            for line in infile:
                session.feed(line.rstrip("\n"))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the sample shell; return the process exit status."""
    parser = argparse.ArgumentParser(prog="menushell", description="Sample menu shell.")
    parser.add_argument(
        "--mode",
        choices=("local", "async", "file"),
        default="local",
        help="keyboard line editing, line input from stdin, or commands from a file",
    )
    parser.add_argument("--history-file", default=None, help="file keeping the command history")
    parser.add_argument("--input", default="input.txt", help="command file for file mode")
    parser.add_argument("--output", default="output.txt", help="output file for file mode")
    args = parser.parse_args(argv)

    cli = _build_cli(args.history_file)
    if args.mode == "file":
        return _run_file(cli, args.input, args.output)
    try:
        if args.mode == "local":
            _run_local(cli)
        else:
            _run_async(cli)
    except Exception as exc:
        sys.stderr.write(f"Exception caught in main: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())