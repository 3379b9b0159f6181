from typing import Any, Callable, TypeVar

T_co = TypeVar("T_co", covariant=True)

Capability = Callable[..., None]
Executor = Callable[[Capability, Capability], Any]
Handler = Callable[[Any], Any]
Task = Callable[[], Any]
