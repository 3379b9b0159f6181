from typing import Any, NamedTuple, Optional

from aplus.configs import PromiseConfig
from aplus.promises import Promise
from aplus.types import Capability


class Deferred(NamedTuple):
    """
    A promise together with the capabilities that settle it, for code that resolves the promise from outside an
    executor (this is also the adapter the Promises/A+ test suite expects).
    """

    promise: Promise[Any]
    resolve: Capability
    reject: Capability


def deferred(*, config: Optional[PromiseConfig] = None, name: Optional[str] = None) -> Deferred:
    capabilities: list[Capability] = []

    def executor(resolve: Capability, reject: Capability) -> None:
        capabilities.extend((resolve, reject))

    promise: Promise[Any] = Promise(executor, config=config, name=name)
    resolve, reject = capabilities
    return Deferred(promise, resolve, reject)


defer = deferred
