"""Cache adapter contract consumed by :class:`~pacedhttp.client.AsyncClient`.

The client only needs two operations from its cache:

- ``await get_item(key)`` -- the stored string, or ``None`` on a miss.
- ``set_item(key, value, ttl_seconds)`` -- store a string that expires
  after *ttl_seconds*.

Keys are request URLs and values are serialised JSON documents.  Errors
raised by an adapter are not handled by the client.

See Also:
    :class:`~pacedhttp.cache.cache.ResponseCache` for the persistent
    diskcache implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class CacheAdapter(ABC):
    """Abstract key/value store with per-entry expiry."""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None`` if absent or expired."""

    @abstractmethod
    def set_item(self, key: str, value: str, ttl_seconds: float) -> None:
        """Store *value* under *key* for *ttl_seconds* seconds."""


class NullCache(CacheAdapter):
    """A cache that never stores anything; every lookup is a miss."""

    async def get_item(self, key: str) -> Optional[str]:
        return None

    def set_item(self, key: str, value: str, ttl_seconds: float) -> None:
        return None
