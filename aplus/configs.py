import os
from typing import Optional

from aplus.errors import InvalidConfigError
from aplus.schedulers import SCHEDULER_MODES, Scheduler, get_default_scheduler
from aplus.sentinels import NOT_SET, Sentinel
from aplus.utils import get_bool_env, get_concrete_value


class PromisingDefaults:
    SCHEDULER = os.getenv("APLUS_DEFAULT_SCHEDULER", "auto").lower()
    LOG_UNHANDLED_REJECTIONS = get_bool_env("APLUS_DEFAULT_LOG_UNHANDLED_REJECTIONS", False)


class PromiseConfig:
    _default: Optional["PromiseConfig"] = None

    def __init__(
        self,
        *,
        scheduler: str | Scheduler | Sentinel = NOT_SET,
        log_unhandled_rejections: bool | Sentinel = NOT_SET,
    ) -> None:
        scheduler = get_concrete_value(scheduler, PromisingDefaults.SCHEDULER)
        if not isinstance(scheduler, Scheduler) and scheduler not in SCHEDULER_MODES:
            raise InvalidConfigError(
                f"Invalid scheduler {scheduler!r}. Expected a Scheduler or one of {', '.join(SCHEDULER_MODES)}."
            )
        self._scheduler = scheduler
        self._log_unhandled_rejections = get_concrete_value(
            log_unhandled_rejections, PromisingDefaults.LOG_UNHANDLED_REJECTIONS
        )

    @classmethod
    def get_default(cls) -> "PromiseConfig":
        if cls._default is None:
            cls._default = cls()
        return cls._default

    @classmethod
    def set_default(cls, config: Optional["PromiseConfig"]) -> None:
        # None drops the current default, the next get_default() call builds a fresh one from PromisingDefaults
        cls._default = config

    def get_scheduler(self) -> Scheduler:
        """
        Pick the scheduler for a new promise. A mode is resolved every time it is asked for, so "auto" follows
        whether an event loop is running at the moment the promise is created.
        """
        if isinstance(self._scheduler, Scheduler):
            return self._scheduler
        return get_default_scheduler(self._scheduler)

    def get_scheduler_mode(self) -> Optional[str]:
        if isinstance(self._scheduler, Scheduler):
            return None
        return self._scheduler

    def is_log_unhandled_rejections(self) -> bool:
        return self._log_unhandled_rejections
