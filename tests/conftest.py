from __future__ import annotations
from typing import Any, Callable

import pytest
from pydantic import BaseModel, Field


class Reading(BaseModel):
    name: str
    value: int = Field(ge=0, le=255)

    @classmethod
    def fetch(cls) -> "Reading":
        return cls(name="Test", value=50)


class CountingFetcher:
    """
    Zero-arg fetcher that records how often it ran.
    """
    def __init__(self, produce: Callable[[], Any]):
        self.produce = produce
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.produce()


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "reading.cache"


@pytest.fixture
def fetcher():
    return CountingFetcher(lambda: Reading(name="Test", value=50))
