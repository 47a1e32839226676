"""Shared fixtures for the LRU cache tests."""

from typing import Any, List

import pytest


class DisposeRecorder:
    """Dispose hook that remembers every value it was handed."""

    def __init__(self):
        self.calls: List[Any] = []

    def __call__(self, value: Any) -> None:
        self.calls.append(value)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def disposed():
    """Fresh dispose recorder."""
    return DisposeRecorder()
