"""A simple thread-safe task scheduler."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable


class LoopScheduler:
    """Runs posted tasks, in order, on the thread that calls ``run``."""

    def __init__(self) -> None:
        self._tasks: deque[Callable[[], object]] = deque()
        self._running = True
        self._cv = threading.Condition()

    def __enter__(self) -> LoopScheduler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def stop(self) -> None:
        """Stop the scheduler; waiting and future calls return at once."""
        with self._cv:
            self._running = False
            self._cv.notify_all()

    def run(self) -> None:
        """Execute tasks until ``stop`` is called."""
        while self.exec_one():
            pass

    def post(self, task: Callable[[], object]) -> None:
        """Queue ``task``; safe to call from any thread."""
        with self._cv:
            self._tasks.append(task)
            self._cv.notify_all()

    def exec_one(self) -> bool:
        """Wait for and execute one task; return False once stopped."""
        with self._cv:
            self._cv.wait_for(lambda: not self._running or bool(self._tasks))
            if not self._running:
                return False
            task = self._tasks.popleft()
        if task is not None:
            task()
        return True

    def poll_one(self) -> bool:
        """Execute one task if one is ready, without waiting."""
        with self._cv:
            if not self._running or not self._tasks:
                return False
            task = self._tasks.popleft()
        if task is not None:
            task()
        return True