"""A task scheduler driven by an asyncio event loop."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable


class AsyncioScheduler:
    """Posts tasks onto an asyncio event loop.

    Without a ``loop`` argument the scheduler creates and owns its loop;
    otherwise the given loop is used and left open on ``close``. Tasks run
    through the loop, so they also run when the owner drives the loop itself.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._owned = loop is None
        self._loop = asyncio.new_event_loop() if loop is None else loop
        self._tasks: deque[Callable[[], object]] = deque()
        self._driving = False
        self._single_step = False
        self._step_done = False
        self._error: BaseException | None = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """The event loop the tasks run on."""
        return self._loop

    def __enter__(self) -> AsyncioScheduler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def stop(self) -> None:
        """Make a running ``run`` or ``exec_one`` return; thread-safe."""
        self._loop.call_soon_threadsafe(self._loop.stop)

    def run(self) -> None:
        """Run the loop until ``stop`` is called."""
        self._drive(single_step=False)

    def exec_one(self) -> bool:
        """Run the loop until one posted task has been executed."""
        return self._drive(single_step=True)

    def poll_one(self) -> bool:
        """Execute at most one ready task without waiting."""
        self._loop.stop()
        return self._drive(single_step=True)

    def post(self, task: Callable[[], object]) -> None:
        """Queue ``task`` on the loop; safe to call from any thread."""
        self._tasks.append(task)
        self._loop.call_soon_threadsafe(self._run_next)

    def close(self) -> None:
        """Close the loop if this scheduler created it."""
        if self._owned and not self._loop.is_closed():
            self._loop.close()

    def _drive(self, single_step: bool) -> bool:
        self._driving = True
        self._single_step = single_step
        self._step_done = False
        self._error = None
        try:
            self._loop.run_forever()
        finally:
            executed = self._step_done
            error = self._error
            self._driving = False
            self._single_step = False
            self._step_done = False
            self._error = None
        if error is not None:
            raise error
        return executed

    def _run_next(self) -> None:
        if self._single_step and self._step_done:
            # one task already ran in this step: leave the rest for later
            self._loop.call_soon(self._run_next)
            return
        task = self._tasks.popleft()
        try:
            task()
        except BaseException as exc:
            if not self._driving:
                raise
            self._error = exc
            self._loop.stop()
        finally:
            if self._single_step:
                self._step_done = True
                self._loop.stop()