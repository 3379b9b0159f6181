from aplus.configs import PromiseConfig, PromisingDefaults
from aplus.deferreds import Deferred, defer, deferred
from aplus.errors import (
    BasePromiseConfigError,
    BasePromiseError,
    BasePromisingError,
    BaseSchedulerError,
    InvalidConfigError,
    NoRunningLoopError,
    Rejection,
    SchedulerReentryError,
    SelfResolutionError,
)
from aplus.promises import Promise, State
from aplus.schedulers import (
    AsyncioScheduler,
    RunLoopScheduler,
    Scheduler,
    get_default_scheduler,
    get_global_run_loop,
)


__all__ = [
    "AsyncioScheduler",
    "BasePromiseConfigError",
    "BasePromiseError",
    "BasePromisingError",
    "BaseSchedulerError",
    "Deferred",
    "InvalidConfigError",
    "NoRunningLoopError",
    "Promise",
    "PromiseConfig",
    "PromisingDefaults",
    "Rejection",
    "RunLoopScheduler",
    "Scheduler",
    "SchedulerReentryError",
    "SelfResolutionError",
    "State",
    "defer",
    "deferred",
    "get_default_scheduler",
    "get_global_run_loop",
]
