"""
A lightweight data cache for CLI programs.

`Tote.get()` returns the value stored at the cache path if the file exists,
was modified within `max_age` and decodes cleanly. Otherwise the value type's
`fetch()` is called, the result is written to the file and returned.
"""
from .cache import AsyncTote, Tote
from .errors import FetchError, FileAccessError, InvalidCacheError, SerializationError, ToteError
from .fetch import AsyncFetch, Fetch

__version__ = "0.5.1"

__all__ = [
    "AsyncFetch",
    "AsyncTote",
    "Fetch",
    "FetchError",
    "FileAccessError",
    "InvalidCacheError",
    "SerializationError",
    "Tote",
    "ToteError",
]
