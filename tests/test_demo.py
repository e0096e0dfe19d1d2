import io

import pytest

from menushell.demo import build_root_menu, main
from menushell.session import Cli, CliSession


@pytest.fixture
def session():
    out = io.StringIO()
    with CliSession(Cli(build_root_menu()), out) as s:
        yield s


def _run(session, line):
    session.out.seek(0)
    session.out.truncate()
    session.feed(line)
    return session.out.getvalue()


def test_hello(session):
    assert _run(session, "hello") == "Hello, world\n"


def test_answer_takes_an_int(session):
    assert _run(session, "answer 42") == "The answer is: 42\n"
    assert _run(session, "answer foo") == "wrong command: answer foo\n"


def test_echo_overloads(session):
    assert _run(session, "echo one") == "one\n"
    assert _run(session, "echo one two") == "one two\n"


def test_reverse_round_trips(session):
    once = _run(session, "reverse abcdef").strip()
    assert _run(session, f"reverse {once}") == "abcdef\n"


def test_add_overloads(session):
    assert _run(session, "add 1 2") == "1 + 2 = 3\n"
    assert _run(session, "add 1 2 3").startswith("1 + 2 + 3 = ")


def test_sort(session):
    assert _run(session, "sort c a b") == "sorted list: a b c \n"


def test_color_toggles_commands(session):
    assert _run(session, "color") == "Colors ON\n"
    assert _run(session, "color") == "wrong command: color\n"
    assert _run(session, "nocolor") == "Colors OFF\n"
    assert _run(session, "nocolor") == "wrong command: nocolor\n"
    assert _run(session, "color") == "Colors ON\n"


def test_removecmds(session):
    assert session.get_completions("no") == ["nocolor"]
    _run(session, "removecmds")
    assert session.get_completions("col") == []
    assert session.get_completions("no") == []


def test_submenus(session):
    assert _run(session, "sub hello") == "Hello, submenu world\n"
    assert _run(session, "sub subsub hello") == "Hello, subsubmenu world\n"
    _run(session, "sub")
    assert _run(session, "demo") == "This is a sample!\n"
    session.out.seek(0)
    session.out.truncate()
    session.prompt()
    assert session.out.getvalue() == "sub> "


def test_file_mode(tmp_path):
    infile = tmp_path / "in.txt"
    outfile = tmp_path / "out.txt"
    infile.write_text("hello\nerror\nbogus\nexit\n", encoding="utf-8")
    status = main(["--mode", "file", "--input", str(infile), "--output", str(outfile)])
    assert status == 0
    assert outfile.read_text(encoding="utf-8") == (
        "Hello, world\n"
        "Exception caught in cli handler: Error in cmd handling command: error.\n"
        "wrong command: bogus\n"
        "Goodbye and thanks for all the fish.\n"
    )


def test_file_mode_stores_history(tmp_path):
    infile = tmp_path / "in.txt"
    outfile = tmp_path / "out.txt"
    history = tmp_path / "history"
    infile.write_text("hello\nanswer 7\nexit\n", encoding="utf-8")
    args = ["--mode", "file", "--input", str(infile), "--output", str(outfile)]
    assert main(args + ["--history-file", str(history)]) == 0
    assert history.read_text(encoding="utf-8").splitlines() == ["hello", "answer 7", "exit"]


def test_file_mode_missing_input(tmp_path, capsys):
    missing = tmp_path / "missing.txt"
    status = main(["--mode", "file", "--input", str(missing), "--output", str(tmp_path / "o")])
    assert status == 1
    assert "not found" in capsys.readouterr().err