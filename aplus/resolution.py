"""
The Promises/A+ resolution procedure: decides whether a pending promise gets fulfilled with a value, adopts the
eventual state of a thenable, or gets rejected.
"""
# pylint: disable=protected-access
import inspect
import logging
import typing
from typing import Any, Callable

from aplus.errors import SelfResolutionError
from aplus.sentinels import NOT_SET
from aplus.utils import PASSTHROUGH_EXCEPTIONS, get_rejection_reason, is_primitive

if typing.TYPE_CHECKING:
    from aplus.promises import Promise

_logger = logging.getLogger(__name__)


def resolve_promise(promise: "Promise[Any]", x: Any) -> None:
    if x is promise:
        promise._reject(SelfResolutionError())
        return

    if is_primitive(x):
        promise._fulfill(x)
        return

    # The attribute is read exactly once. Whatever the read raises rejects the promise, except an AttributeError
    # for a `then` that does not exist at all.
    try:
        then = getattr(x, "then")
    except PASSTHROUGH_EXCEPTIONS:
        raise
    except AttributeError as exc:
        if _declares_then(x):
            promise._reject(exc)
            return
        then = NOT_SET
    except BaseException as exc:  # pylint: disable=broad-except
        promise._reject(get_rejection_reason(exc))
        return

    if then is NOT_SET or not callable(then):
        promise._fulfill(x)
        return

    _adopt(promise, x, then)


def _adopt(promise: "Promise[Any]", thenable: Any, then: Callable[..., Any]) -> None:
    called = False

    def resolve_inner(y: Any = None) -> None:
        nonlocal called
        if called:
            _logger.debug("%r ignores resolve(%r) from %r: already called back", promise, y, thenable)
            return
        called = True
        resolve_promise(promise, y)

    def reject_inner(r: Any = None) -> None:
        nonlocal called
        if called:
            _logger.debug("%r ignores reject(%r) from %r: already called back", promise, r, thenable)
            return
        called = True
        promise._reject(r)

    _logger.debug("%r adopts the state of %r", promise, thenable)
    try:
        # `then` came from getattr(), so a method is already bound to the thenable
        then(resolve_inner, reject_inner)
    except PASSTHROUGH_EXCEPTIONS:
        raise
    except BaseException as exc:  # pylint: disable=broad-except
        if called:
            _logger.debug("%r ignores %r raised by %r after a callback", promise, exc, thenable)
            return
        called = True
        promise._reject(get_rejection_reason(exc))


def _declares_then(x: Any) -> bool:
    # getattr_static() finds class attributes and descriptors without running them
    try:
        inspect.getattr_static(x, "then")
    except AttributeError:
        return False
    return True
