from typing import Any


class BasePromisingError(Exception):
    pass


class BasePromiseError(BasePromisingError):
    pass


class BaseSchedulerError(BasePromisingError):
    pass


class BasePromiseConfigError(BasePromisingError):
    pass


class SelfResolutionError(BasePromiseError, TypeError):
    """
    Raised (as a rejection reason) when a promise is resolved with itself.
    """

    def __init__(self, message: str = "A promise cannot be resolved with itself") -> None:
        super().__init__(message)


class NoRunningLoopError(BaseSchedulerError):
    pass


class SchedulerReentryError(BaseSchedulerError):
    pass


class InvalidConfigError(BasePromiseConfigError, ValueError):
    pass


class Rejection(BasePromisingError):
    """
    Carries a rejection reason that is not necessarily an exception.

    Raising `Rejection(reason)` from an executor, a `then` handler or a thenable rejects the promise with `reason`
    itself, never with the `Rejection` instance.
    """

    def __init__(self, reason: Any) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return repr(self.reason)
