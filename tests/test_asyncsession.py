import io

import pytest

from menushell.asyncioscheduler import AsyncioScheduler
from menushell.asyncsession import AsyncCliSession
from menushell.commands import Menu
from menushell.session import Cli
from menushell.storage import VolatileHistoryStorage


@pytest.fixture
def scheduler():
    with AsyncioScheduler() as s:
        yield s


def _cli(storage=None) -> Cli:
    root = Menu("cli")
    root.insert("hello", lambda out: out.write("Hello, world\n"), "Print hello world")
    return Cli(root, storage)


def test_lines_are_fed_until_end_of_input(scheduler):
    out = io.StringIO()
    session = AsyncCliSession(scheduler, _cli(), io.StringIO("hello\n"), out)
    try:
        session.start()
        scheduler.exec_one()
        assert not session.closed
        scheduler.exec_one()
        assert session.closed
    finally:
        session.close()
    assert out.getvalue() == "cli> Hello, world\ncli> "


def test_last_line_without_newline_is_fed(scheduler):
    out = io.StringIO()
    session = AsyncCliSession(scheduler, _cli(), io.StringIO("hello"), out)
    try:
        session.start()
        scheduler.exec_one()
        scheduler.exec_one()
        assert session.closed
    finally:
        session.close()
    assert "Hello, world\n" in out.getvalue()


def test_read_error_closes_session(scheduler):
    broken = io.StringIO("hello\n")
    broken.close()
    out = io.StringIO()
    session = AsyncCliSession(scheduler, _cli(), broken, out)
    try:
        session.start()
        scheduler.exec_one()
        assert session.closed
    finally:
        session.close()
    assert out.getvalue() == "cli> "


def test_exit_stops_the_scheduler(scheduler):
    storage = VolatileHistoryStorage()
    cli = _cli(storage)
    cli.on_exit(lambda out: out.write("Goodbye and thanks for all the fish.\n"))
    out = io.StringIO()
    session = AsyncCliSession(scheduler, cli, io.StringIO("exit\n"), out)

    def closing(stream):
        stream.write("Closing App...\n")
        scheduler.stop()

    session.on_exit(closing)
    try:
        session.start()
        scheduler.run()
    finally:
        session.close()
    text = out.getvalue()
    assert text.startswith("cli> Closing App...\nGoodbye and thanks for all the fish.\n")
    assert storage.commands() == ["exit"]


def test_start_twice_reads_once(scheduler):
    out = io.StringIO()
    session = AsyncCliSession(scheduler, _cli(), io.StringIO(""), out)
    try:
        session.start()
        session.start()
        scheduler.exec_one()
        assert session.closed
    finally:
        session.close()
    assert out.getvalue() == "cli> "