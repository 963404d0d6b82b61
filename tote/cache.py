from __future__ import annotations
import inspect, logging, os, tempfile, time
from datetime import timedelta
from functools import cached_property
from pathlib import Path
from typing import Any, Callable, Generic, Optional, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import FetchError, FileAccessError, InvalidCacheError, SerializationError, ToteError
from .fetch import resolve_fetcher

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _BaseTote(Generic[T]):
    """
    File cache holding exactly one value of `value_type` at `path`.

    The file's mtime is the freshness signal: data modified more than
    `max_age` ago is expired. Nothing touches the filesystem until one of
    the methods below is called.
    """

    def __init__(
        self,
        value_type: Type[T],
        path: Union[str, "os.PathLike[str]"],
        max_age: Union[timedelta, float],
        *,
        fetcher: Optional[Callable[[], Any]] = None,
        atomic: bool = False,
    ):
        self._value_type = value_type
        self._path = Path(path)
        self._max_age = max_age if isinstance(max_age, timedelta) else timedelta(seconds=max_age)
        self._fetcher = fetcher
        self._atomic = atomic

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value_type!r}, {str(self._path)!r}, {self._max_age!r})"

    @property
    def value_type(self) -> Type[T]:
        return self._value_type

    @property
    def path(self) -> Path:
        return self._path

    @property
    def max_age(self) -> timedelta:
        return self._max_age

    @cached_property
    def _adapter(self) -> TypeAdapter:
        return TypeAdapter(self._value_type)

    def is_valid(self) -> bool:
        """
        True if the cache file exists and was modified within `max_age`.
        """
        try:
            mtime = os.stat(self._path).st_mtime
        except OSError:
            return False
        age = time.time() - mtime
        if age < 0:
            # mtime in the future, can't tell how old it is
            return False
        return age <= self._max_age.total_seconds()

    def read(self) -> T:
        if not self.is_valid():
            raise InvalidCacheError(self._path)
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                contents = f.read()
        except UnicodeDecodeError as e:
            raise SerializationError(f"Cache file is not text: {e}", self._path) from e
        except OSError as e:
            raise FileAccessError(f"Cannot read cache file: {e}", self._path) from e
        try:
            return self._adapter.validate_json(contents)
        except ValidationError as e:
            raise SerializationError(f"Cannot decode cached data: {e}", self._path) from e

    def _coerce(self, value: Any) -> T:
        # Anything that goes into the file must come back out through read().
        try:
            return self._adapter.validate_python(value)
        except ValidationError as e:
            raise SerializationError(f"Value does not match {self._value_type!r}: {e}", self._path) from e

    def put(self, value: T) -> None:
        """
        Write new or updated cache data, replacing whatever was there.
        """
        value = self._coerce(value)
        try:
            data = self._adapter.dump_json(value).decode("utf-8")
        except PydanticSerializationError as e:
            raise SerializationError(f"Cannot encode data: {e}", self._path) from e

        try:
            if self._atomic:
                self._write_atomic(data)
            else:
                with open(self._path, "w", encoding="utf-8") as f:
                    f.write(data)
        except OSError as e:
            raise FileAccessError(f"Cannot write cache file: {e}", self._path) from e
        logger.debug("wrote %d bytes to %s", len(data), self._path)

    def _write_atomic(self, data: str) -> None:
        fd, tmp = tempfile.mkstemp(dir=str(self._path.parent), prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp, self._path)
        except OSError:
            Path(tmp).unlink(missing_ok=True)
            raise


class Tote(_BaseTote[T]):
    """
    Blocking variant: `get()` calls a synchronous fetcher on a miss.

    Example:
        cache = Tote(Colors, "./colors.cache", timedelta(days=1))
        colors = cache.get()
    """

    def get(self) -> T:
        try:
            data = self.read()
            logger.debug("cache hit for %s", self._path)
            return data
        except ToteError as e:
            logger.debug("cache miss for %s: %s", self._path, e)

        fetch = resolve_fetcher(self._value_type, self._fetcher)
        try:
            data = fetch()
        except Exception as e:
            raise FetchError(e, self._path) from e
        if inspect.iscoroutine(data):
            data.close()
            raise TypeError(f"{fetch!r} returned a coroutine, use AsyncTote for async fetching")
        data = self._coerce(data)
        self.put(data)
        return data


class AsyncTote(_BaseTote[T]):
    """
    Same as `Tote`, but `get()` is a coroutine and awaits the fetcher.
    File access stays blocking; the fetch is the only suspension point.
    """

    async def get(self) -> T:
        try:
            data = self.read()
            logger.debug("cache hit for %s", self._path)
            return data
        except ToteError as e:
            logger.debug("cache miss for %s: %s", self._path, e)

        fetch = resolve_fetcher(self._value_type, self._fetcher, allow_async=True)
        try:
            data = fetch()
            if inspect.isawaitable(data):
                data = await data
        except Exception as e:
            raise FetchError(e, self._path) from e
        data = self._coerce(data)
        self.put(data)
        return data
