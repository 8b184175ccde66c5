"""pacedhttp -- a paced, cache-aware asynchronous HTTP client.

Every request issued through one :class:`~pacedhttp.client.AsyncClient`
passes through a shared pacing cursor so that outbound calls are spaced at
least ``min_timeout_per_request`` milliseconds apart (plus optional random
jitter).  GET responses are cached by URL for five minutes, and concurrent
identical GETs are coalesced into a single transport call.

Typical usage::

    from pacedhttp import AsyncClient, ResponseCache

    cache = ResponseCache("/tmp/pacedhttp")
    async with AsyncClient(cache, min_timeout_per_request=250) as client:
        result = await client.get_with_cache("https://api.example.com/items")
        print(result.payload, result.from_cache)

Modules:
    client: The dispatcher (:class:`AsyncClient`) and the pacing scheduler.
    cache: Cache adapter contract and the diskcache-backed implementation.
    models: Pydantic models for configuration and results.
    config: XDG cache directory and environment-based configuration.
    exceptions: Exception hierarchy.
    output: stderr diagnostics with Rich support.
"""

from pacedhttp.cache import CacheAdapter, NullCache, ResponseCache
from pacedhttp.client import AsyncClient, PacingScheduler
from pacedhttp.models import CachedResult, ClientConfig

__version__ = "0.1.0"

__all__ = [
    "AsyncClient",
    "CacheAdapter",
    "CachedResult",
    "ClientConfig",
    "NullCache",
    "PacingScheduler",
    "ResponseCache",
]
