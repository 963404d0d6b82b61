from __future__ import annotations
import inspect
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar, Union

T_co = TypeVar("T_co", covariant=True)


class Fetch(Protocol[T_co]):
    """
    Implemented by a value type that knows how to produce a fresh copy of itself
    when there's no usable cached data, usually as a classmethod:

        class Colors(BaseModel):
            names: list[str]

            @classmethod
            def fetch(cls) -> "Colors": ...
    """
    def fetch(self) -> T_co: ...


class AsyncFetch(Protocol[T_co]):
    async def fetch(self) -> T_co: ...


def resolve_fetcher(
    value_type: Union[Fetch[Any], AsyncFetch[Any], type],
    fetcher: Optional[Callable[[], Any]] = None,
    *,
    allow_async: bool = False,
) -> Callable[[], Any]:
    """
    Explicit fetcher wins, otherwise fall back to `value_type.fetch`.

    Coroutine functions are refused unless `allow_async` is set, since a
    blocking caller has nothing to await them with.
    """
    fn = fetcher if fetcher is not None else getattr(value_type, "fetch", None)
    if not callable(fn):
        raise TypeError(f"{value_type!r} has no fetch() and no fetcher was given")
    if not allow_async and inspect.iscoroutinefunction(fn):
        raise TypeError(f"{fn!r} is a coroutine function, use AsyncTote for async fetching")
    return fn
