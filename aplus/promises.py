import itertools
import logging
from enum import Enum
from typing import Any, Callable, Generic, Optional

from aplus.configs import PromiseConfig
from aplus.errors import Rejection
from aplus.resolution import resolve_promise
from aplus.schedulers import Scheduler
from aplus.sentinels import NOT_SET
from aplus.types import Capability, Executor, Handler, T_co
from aplus.utils import PASSTHROUGH_EXCEPTIONS, get_rejection_reason

_logger = logging.getLogger(__name__)

_promise_name_counter = itertools.count(1)


class State(Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


def _identity(value: Any) -> Any:
    return value


def _reraise(reason: Any) -> Any:
    raise Rejection(reason)


class Promise(Generic[T_co]):
    """
    A write-once container for a value (or a rejection reason) that becomes known later.

    The executor runs synchronously inside the constructor and receives two capabilities, `resolve(value)` and
    `reject(reason)`. The first of them to be called wins, later calls are ignored. A non-callable executor leaves
    the promise pending forever. If the executor raises, the promise is rejected with the raised exception (or with
    the reason of a raised `Rejection`).

    Callbacks registered with `then()` never run synchronously: they are handed to the promise's scheduler and run
    on a later turn, in the order they were registered.
    """

    def __init__(
        self,
        executor: Optional[Executor],
        *,
        config: Optional[PromiseConfig] = None,
        name: Optional[str] = None,
    ) -> None:
        if config is None:
            config = PromiseConfig.get_default()
        self._init_state(config, config.get_scheduler(), name)

        if not callable(executor):
            return

        resolve, reject = self._create_capabilities()
        try:
            executor(resolve, reject)
        except PASSTHROUGH_EXCEPTIONS:
            raise
        except BaseException as exc:  # pylint: disable=broad-except
            reject(get_rejection_reason(exc))

    @classmethod
    def _create_downstream(cls, upstream: "Promise[Any]") -> "Promise[Any]":
        # Skips the executor and the scheduler lookup: a chain stays on the scheduler of its first promise
        promise = cls.__new__(cls)
        promise._init_state(upstream._config, upstream._scheduler, None)  # pylint: disable=protected-access
        return promise

    def _init_state(self, config: PromiseConfig, scheduler: Scheduler, name: Optional[str]) -> None:
        self._state = State.PENDING
        self._value: Any = NOT_SET
        self._callbacks: list[tuple[Callable[[], None], Callable[[], None]]] = []
        self._handled = False
        self._config = config
        self._scheduler = scheduler

        if name is None:
            name = f"Promise-{next(_promise_name_counter)}"
        self._name = name

    def then(self, on_fulfilled: Optional[Handler] = None, on_rejected: Optional[Handler] = None) -> "Promise[Any]":
        if not callable(on_fulfilled):
            on_fulfilled = _identity
        if not callable(on_rejected):
            on_rejected = _reraise

        downstream = self._create_downstream(self)
        fulfilled_trampoline = self._create_trampoline(on_fulfilled, downstream)
        rejected_trampoline = self._create_trampoline(on_rejected, downstream)
        self._handled = True

        if self._state is State.PENDING:
            self._callbacks.append((fulfilled_trampoline, rejected_trampoline))
        elif self._state is State.FULFILLED:
            self._scheduler.defer(fulfilled_trampoline)
        else:
            self._scheduler.defer(rejected_trampoline)
        return downstream

    def get_name(self) -> str:
        return self._name

    def get_config(self) -> PromiseConfig:
        return self._config

    def _create_capabilities(self) -> tuple[Capability, Capability]:
        # Both capabilities share one flag: once resolve() has handed a thenable to the resolution procedure the
        # promise is still pending, yet it is no longer up to the executor to settle it.
        already_resolved = False

        def resolve(value: Any = None) -> None:
            nonlocal already_resolved
            if already_resolved or self._state is not State.PENDING:
                _logger.debug("%r ignores resolve(%r): already resolved", self, value)
                return
            already_resolved = True
            resolve_promise(self, value)

        def reject(reason: Any = None) -> None:
            nonlocal already_resolved
            if already_resolved or self._state is not State.PENDING:
                _logger.debug("%r ignores reject(%r): already resolved", self, reason)
                return
            already_resolved = True
            self._reject(reason)

        return resolve, reject

    def _create_trampoline(self, handler: Handler, downstream: "Promise[Any]") -> Callable[[], None]:
        def trampoline() -> None:
            try:
                x = handler(self._value)
            except PASSTHROUGH_EXCEPTIONS:
                raise
            except BaseException as exc:  # pylint: disable=broad-except
                downstream._reject(get_rejection_reason(exc))  # pylint: disable=protected-access
            else:
                resolve_promise(downstream, x)

        return trampoline

    def _fulfill(self, value: Any) -> None:
        self._settle(State.FULFILLED, value)

    def _reject(self, reason: Any) -> None:
        self._settle(State.REJECTED, reason)

    def _settle(self, state: State, value: Any) -> None:
        if self._state is not State.PENDING:
            _logger.debug("%r ignores settling as %s with %r: already settled", self, state.value, value)
            return

        self._state = state
        self._value = value
        if state is State.FULFILLED:
            _logger.debug("%r fulfilled", self)
        else:
            _logger.debug("%r rejected: %r", self, value)
        self._scheduler.defer(self._drain_callbacks)

    def _drain_callbacks(self) -> None:
        if self._state is State.REJECTED and not self._handled and self._config.is_log_unhandled_rejections():
            _logger.warning("%r was rejected and nothing handles it: %r", self, self._value)

        index = 0 if self._state is State.FULFILLED else 1
        for callbacks in self._callbacks:
            callbacks[index]()
        self._callbacks = []

    def __repr__(self) -> str:
        return f"<Promise {self._name} {self._state.value}>"
