"""Shared test fixtures for pacedhttp.

Provides test doubles for the client's collaborators (cache adapter,
logger, clock) and keeps global state -- the output manager and the
``PACEDHTTP_*`` environment variables -- isolated between tests.
"""

from __future__ import annotations

from typing import Optional

import pytest

from pacedhttp.cache import CacheAdapter
from pacedhttp.output import reset_output


# ---------------------------------------------------------------------------
# Global state isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test."""
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _clear_pacedhttp_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PACEDHTTP_* variables from the outer environment out of tests."""
    for var in [
        "PACEDHTTP_MIN_TIMEOUT_PER_REQUEST",
        "PACEDHTTP_MAX_RANDOM_PRE_REQUEST_TIMEOUT",
    ]:
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------


class RecordingLogger:
    """Logger double that keeps every message."""

    def __init__(self) -> None:
        self.infos: list[str] = []
        self.warnings: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)


class MemoryCache(CacheAdapter):
    """In-memory cache adapter that records writes and their TTLs.

    Entries never expire; tests inspect ``ttls`` instead.
    """

    def __init__(self, entries: Optional[dict[str, str]] = None) -> None:
        self.entries: dict[str, str] = dict(entries or {})
        self.ttls: dict[str, float] = {}
        self.reads: list[str] = []

    async def get_item(self, key: str) -> Optional[str]:
        self.reads.append(key)
        return self.entries.get(key)

    def set_item(self, key: str, value: str, ttl_seconds: float) -> None:
        self.entries[key] = value
        self.ttls[key] = ttl_seconds


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
