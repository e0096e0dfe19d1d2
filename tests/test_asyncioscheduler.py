import asyncio
import threading

import pytest

from menushell.asyncioscheduler import AsyncioScheduler


@pytest.fixture
def scheduler():
    s = AsyncioScheduler()
    yield s
    s.close()


def test_scheduling(scheduler):
    done = []
    scheduler.post(lambda: done.append(True))
    assert scheduler.exec_one() is True
    assert done == [True]


def test_same_thread(scheduler):
    ids = {}

    def poster():
        ids["post"] = threading.get_ident()
        scheduler.post(lambda: ids.__setitem__("run", threading.get_ident()))

    th = threading.Thread(target=poster)
    th.start()
    th.join()
    assert scheduler.exec_one() is True
    assert ids["run"] != ids["post"]
    assert ids["run"] == threading.get_ident()


def test_exceptions(scheduler):
    def boom():
        raise ValueError(42)

    scheduler.post(boom)
    with pytest.raises(ValueError):
        scheduler.exec_one()


def test_non_owner_loop_runs_tasks():
    loop = asyncio.new_event_loop()
    try:
        scheduler = AsyncioScheduler(loop)
        done = []
        scheduler.post(lambda: done.append(True))
        loop.run_until_complete(asyncio.sleep(0))
        assert done == [True]
        scheduler.close()
        assert loop.is_closed() is False
    finally:
        loop.close()


def test_owned_loop_closed(scheduler):
    scheduler.close()
    assert scheduler.loop.is_closed() is True


def test_exec_one_runs_a_single_task(scheduler):
    seen = []
    scheduler.post(lambda: seen.append(1))
    scheduler.post(lambda: seen.append(2))
    scheduler.exec_one()
    assert seen == [1]
    scheduler.exec_one()
    assert seen == [1, 2]


def test_poll_one(scheduler):
    assert scheduler.poll_one() is False
    seen = []
    scheduler.post(lambda: seen.append("x"))
    assert scheduler.poll_one() is True
    assert seen == ["x"]


def test_run_until_stop(scheduler):
    seen = []
    scheduler.post(lambda: seen.append("a"))
    scheduler.post(lambda: seen.append("b"))
    scheduler.post(scheduler.stop)
    scheduler.run()
    assert seen == ["a", "b"]


def test_stop_from_other_thread(scheduler):
    timer = threading.Timer(0.05, scheduler.stop)
    timer.start()
    scheduler.run()
    timer.join()
    assert scheduler.loop.is_running() is False