"""Response caching for pacedhttp.

This package defines the :class:`CacheAdapter` contract used by the
client and ships two implementations: :class:`ResponseCache`, which
persists payloads to disk using :mod:`diskcache`, and :class:`NullCache`,
which never stores anything.
"""

from pacedhttp.cache.base import CacheAdapter, NullCache
from pacedhttp.cache.cache import ResponseCache

__all__ = ["CacheAdapter", "NullCache", "ResponseCache"]
