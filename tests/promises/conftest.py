from typing import Any, Callable, Iterator

import pytest

from aplus import Promise, PromiseConfig, RunLoopScheduler


@pytest.fixture(autouse=True)
def run_loop() -> Iterator[RunLoopScheduler]:
    """
    Every promise created by a test without an explicit config lands on a fresh run-loop. Calling
    `run_loop.run_until_idle()` stands in for "let the host run the later turns".
    """
    scheduler = RunLoopScheduler()
    PromiseConfig.set_default(PromiseConfig(scheduler=scheduler, log_unhandled_rejections=False))
    yield scheduler
    PromiseConfig.set_default(None)


@pytest.fixture
def resolved() -> Callable[[Any], Promise[Any]]:
    def _resolved(value: Any) -> Promise[Any]:
        return Promise(lambda resolve, reject: resolve(value))

    return _resolved


@pytest.fixture
def rejected() -> Callable[[Any], Promise[Any]]:
    def _rejected(reason: Any) -> Promise[Any]:
        return Promise(lambda resolve, reject: reject(reason))

    return _rejected


@pytest.fixture
def outcome(run_loop: RunLoopScheduler) -> Callable[[Promise[Any]], tuple[str, Any]]:
    """
    Drain the run-loop and report how a promise settled, observed only through `then()`.
    """

    def _outcome(promise: Promise[Any]) -> tuple[str, Any]:
        seen: list[tuple[str, Any]] = []
        promise.then(lambda value: seen.append(("fulfilled", value)), lambda reason: seen.append(("rejected", reason)))
        run_loop.run_until_idle()
        assert len(seen) <= 1
        return seen[0] if seen else ("pending", None)

    return _outcome
