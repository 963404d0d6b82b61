from __future__ import annotations
from pathlib import Path
from typing import Optional


class ToteError(Exception):
    """
    Base class for everything a cache handle raises.
    """
    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class FileAccessError(ToteError):
    pass


class SerializationError(ToteError):
    pass


class InvalidCacheError(ToteError):
    def __init__(self, path: Path):
        super().__init__(f"Cached data is not valid: {path}", path)


class FetchError(ToteError):
    """
    The fetch strategy failed. The original exception is kept as-is on `.error`.
    """
    def __init__(self, error: BaseException, path: Optional[Path] = None):
        super().__init__(f"Fetching data failed: {error!r}", path)
        self.error = error
