import os
from typing import Any

from aplus.errors import Rejection
from aplus.sentinels import NOT_SET

# Exact types only: a subclass of int or str may still carry a `then` method.
_PRIMITIVE_TYPES = frozenset({type(None), bool, int, float, complex, str, bytes})

# Interpreter shutdown requests are never turned into rejections
PASSTHROUGH_EXCEPTIONS = (KeyboardInterrupt, SystemExit)


def get_bool_env(var_name: str, default: bool) -> bool:
    value = os.getenv(var_name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered not in {"true", "false"}:
        raise ValueError(f"Invalid boolean for {var_name}: {value}. Expected 'true' or 'false'.")
    return lowered == "true"


def get_concrete_value(value: Any, default_value: Any) -> Any:
    if value is NOT_SET:
        return default_value
    return value


def is_primitive(value: Any) -> bool:
    """
    Tell whether a value can never be a thenable (None, booleans, numbers, strings and bytes).
    """
    return type(value) in _PRIMITIVE_TYPES


def get_rejection_reason(exc: BaseException) -> Any:
    """
    Turn an exception raised by user code into a rejection reason.

    A `Rejection` only carries its reason, so it is unwrapped. Any other exception is the reason itself.
    """
    if isinstance(exc, Rejection):
        return exc.reason
    return exc
