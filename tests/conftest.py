"""Shared fixtures: in-memory backends for the stores."""

import pytest

from gastos.errors import PersistenceError


class MemoryBackend:
    """Key-value backend kept in a dict."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data = dict(data or {})
        self.writes = 0

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value


class FailingBackend(MemoryBackend):
    """Backend whose writes always fail, like a full quota."""

    def write(self, key: str, value: str) -> None:
        self.writes += 1
        raise PersistenceError("quota exceeded")


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def failing_backend() -> FailingBackend:
    return FailingBackend()
