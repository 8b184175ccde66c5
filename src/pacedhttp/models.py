"""Pydantic models shared across pacedhttp.

**Configuration models** -- validated once at construction time:
    :class:`ClientConfig` and :class:`CacheConfig`.

**Value models** -- produced by the client:
    :class:`RequestOptions` and :class:`CachedResult`.

Timeouts in :class:`ClientConfig` are expressed in milliseconds.  Negative
values are rejected instead of being coerced toward zero.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class ClientConfig(BaseModel):
    """Pacing settings for an :class:`~pacedhttp.client.AsyncClient`.

    Immutable after construction.  Both values default to ``0``, which
    disables pacing and jitter respectively.

    Example::

        ClientConfig(min_timeout_per_request=250, max_random_pre_request_timeout=100)
    """

    model_config = ConfigDict(frozen=True)

    min_timeout_per_request: float = Field(
        default=0,
        ge=0,
        allow_inf_nan=False,
        description="Minimum milliseconds between two dispatched requests",
    )
    max_random_pre_request_timeout: float = Field(
        default=0,
        ge=0,
        allow_inf_nan=False,
        description="Upper bound in milliseconds of uniform random jitter per request (0 disables)",
    )

    @property
    def jitter_enabled(self) -> bool:
        return self.max_random_pre_request_timeout > 0


class CacheConfig(BaseModel):
    """Settings for the disk-backed :class:`~pacedhttp.cache.ResponseCache`."""

    enabled: bool = Field(default=True, description="Enable response caching")
    size_limit: int = Field(
        default=2**28, gt=0, description="Maximum on-disk size in bytes"
    )


# --- Values ---


class RequestOptions(BaseModel):
    """Per-request transport options accepted by the verb methods."""

    headers: Optional[dict[str, str]] = None
    body: Optional[str] = None
    json_body: Optional[Any] = None


class CachedResult(BaseModel):
    """Result of :meth:`~pacedhttp.client.AsyncClient.get_with_cache`.

    ``payload`` is the decoded JSON document, or ``None`` when the fetch
    failed.  ``from_cache`` tells whether it was served without touching
    the network.
    """

    model_config = ConfigDict(frozen=True)

    payload: Any = None
    from_cache: bool = False
