"""Disk-based response cache.

Uses :mod:`diskcache` to persist serialised JSON payloads on the
filesystem.  Keys handed in by the client are request URLs; they are
hashed with SHA-256 before reaching the store so that arbitrarily long
URLs map to fixed-size keys.

The expiry of each entry is chosen by the caller of :meth:`set_item`
(the client always passes 300 seconds).

See Also:
    :class:`~pacedhttp.models.CacheConfig` -- the Pydantic model that
    controls ``enabled`` and ``size_limit``.
"""

from __future__ import annotations

import asyncio
import hashlib
from pathlib import Path
from typing import Any, Optional

import diskcache

from pacedhttp.cache.base import CacheAdapter
from pacedhttp.models import CacheConfig


class ResponseCache(CacheAdapter):
    """Disk-backed cache of serialised response payloads.

    Args:
        cache_dir: Root directory for the cache.  A ``responses/``
            subdirectory is created inside it.
        config: Cache configuration.  Defaults to an enabled cache.

    Example::

        from pacedhttp.cache import ResponseCache

        cache = ResponseCache("/tmp/pacedhttp")
        cache.set_item("https://api.example.com/users", '[{"id": 1}]', 300)
        hit = await cache.get_item("https://api.example.com/users")
    """

    def __init__(self, cache_dir: str | Path, config: Optional[CacheConfig] = None) -> None:
        self._config = config or CacheConfig()
        self._cache: Optional[diskcache.Cache] = None
        self._cache_dir = Path(cache_dir)
        if self._config.enabled:
            self._cache = diskcache.Cache(
                str(self._cache_dir / "responses"),
                size_limit=self._config.size_limit,
            )

    async def get_item(self, key: str) -> Optional[str]:
        """Look up a cached payload.

        The blocking diskcache read runs in a worker thread.

        Args:
            key: The request URL.

        Returns:
            The serialised payload on a hit, or ``None`` on a miss, after
            expiry, or when caching is disabled.
        """
        if self._cache is None:
            return None
        return await asyncio.to_thread(self._cache.get, self._make_key(key))

    def set_item(self, key: str, value: str, ttl_seconds: float) -> None:
        """Store a serialised payload.

        Args:
            key: The request URL.
            value: The serialised JSON payload.
            ttl_seconds: Seconds until the entry expires.
        """
        if self._cache is None:
            return
        self._cache.set(self._make_key(key), value, expire=ttl_seconds)

    def invalidate(self, key: str) -> None:
        """Remove the entry stored for *key*, if any."""
        if self._cache is None:
            return
        self._cache.delete(self._make_key(key))

    def clear(self) -> None:
        """Remove all entries from the cache."""
        if self._cache is not None:
            self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``enabled`` (bool), and when enabled:
            ``size`` (number of entries) and ``directory`` (str path).
        """
        if self._cache is None:
            return {"enabled": False}
        return {
            "enabled": True,
            "size": len(self._cache),
            "directory": str(self._cache_dir / "responses"),
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        if self._cache is not None:
            self._cache.close()

    def _make_key(self, key: str) -> str:
        return hashlib.sha256(key.encode()).hexdigest()
