import asyncio
import logging
from abc import ABC, abstractmethod
from asyncio import AbstractEventLoop
from collections import deque
from typing import Deque, Optional

from aplus.errors import InvalidConfigError, NoRunningLoopError, SchedulerReentryError
from aplus.types import Task
from aplus.utils import PASSTHROUGH_EXCEPTIONS

_logger = logging.getLogger(__name__)

SCHEDULER_MODES = ("auto", "asyncio", "runloop")


class Scheduler(ABC):
    """
    Runs deferred tasks on a turn strictly later than the one that deferred them.

    Tasks deferred during the same turn run in the order they were deferred.
    """

    @abstractmethod
    def defer(self, task: Task) -> None:
        raise NotImplementedError


class AsyncioScheduler(Scheduler):
    def __init__(self, loop: Optional[AbstractEventLoop] = None) -> None:
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as exc:
                raise NoRunningLoopError("AsyncioScheduler needs a running event loop or an explicit one") from exc
        self._loop = loop

    def defer(self, task: Task) -> None:
        # The ready queue of an asyncio loop is FIFO and call_soon() never runs the callback right away
        self._loop.call_soon(task)

    def get_loop(self) -> AbstractEventLoop:
        return self._loop

    def __repr__(self) -> str:
        return f"<AsyncioScheduler loop={self._loop!r}>"


class RunLoopScheduler(Scheduler):
    """
    An explicit run-loop for hosts without an asyncio event loop.

    Deferred tasks pile up in a queue until somebody calls `run_until_idle()` (or `run_one()`). Tasks deferred by a
    running task are appended to the same queue and run during the same `run_until_idle()` call, after every task
    that was already queued.
    """

    def __init__(self) -> None:
        self._queue: Deque[Task] = deque()
        self._running = False

    @property
    def pending(self) -> int:
        return len(self._queue)

    def defer(self, task: Task) -> None:
        self._queue.append(task)

    def run_one(self) -> bool:
        """
        Run the oldest queued task. Returns False if there was nothing to run.
        """
        self._enter()
        try:
            return self._run_next()
        finally:
            self._running = False

    def run_until_idle(self) -> int:
        """
        Run queued tasks until the queue is empty. Returns the number of tasks that were run.
        """
        self._enter()
        count = 0
        try:
            while self._run_next():
                count += 1
        finally:
            self._running = False
        return count

    def _enter(self) -> None:
        if self._running:
            raise SchedulerReentryError("RunLoopScheduler cannot be run from one of its own tasks")
        self._running = True

    def _run_next(self) -> bool:
        if not self._queue:
            return False
        task = self._queue.popleft()
        try:
            task()
        except PASSTHROUGH_EXCEPTIONS:
            raise
        except BaseException:  # pylint: disable=broad-except
            _logger.exception("Deferred task %r raised an exception", task)
        return True

    def __repr__(self) -> str:
        return f"<RunLoopScheduler pending={len(self._queue)}>"


_global_run_loop = RunLoopScheduler()


def get_global_run_loop() -> RunLoopScheduler:
    return _global_run_loop


def get_default_scheduler(mode: str = "auto") -> Scheduler:
    if mode == "runloop":
        return _global_run_loop
    if mode == "asyncio":
        return AsyncioScheduler()
    if mode == "auto":
        try:
            return AsyncioScheduler()
        except NoRunningLoopError:
            return _global_run_loop
    raise InvalidConfigError(f"Unknown scheduler mode {mode!r}. Expected one of {', '.join(SCHEDULER_MODES)}.")
