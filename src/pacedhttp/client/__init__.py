"""HTTP client module for pacedhttp.

Classes:
    :class:`AsyncClient` -- the paced, cache-aware client backed by
        :class:`httpx.AsyncClient`.
    :class:`PacingScheduler` -- computes how long each request waits
        before dispatch.

Example::

    from pacedhttp.cache import ResponseCache
    from pacedhttp.client import AsyncClient

    async with AsyncClient(ResponseCache("/tmp/c"), min_timeout_per_request=200) as client:
        payload = await client.get("https://api.example.com/users")
"""

from pacedhttp.client.async_client import CACHE_TTL_SECONDS, AsyncClient
from pacedhttp.client.pacing import PacingScheduler

__all__ = ["AsyncClient", "PacingScheduler", "CACHE_TTL_SECONDS"]
