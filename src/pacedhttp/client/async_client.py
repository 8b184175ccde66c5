"""Paced, cache-aware asynchronous HTTP client.

This module provides :class:`AsyncClient`, which wraps
:class:`httpx.AsyncClient` and layers on:

- **Pacing** -- every request, whatever its verb, reserves a slot from
  a shared :class:`~pacedhttp.client.pacing.PacingScheduler` and sleeps
  until that slot before it is sent.
- **Response caching** -- :meth:`AsyncClient.get_with_cache` answers from
  the cache adapter when it can.  Every successful response, whatever its
  verb, is written back under its URL for :data:`CACHE_TTL_SECONDS`.
- **Request coalescing** -- concurrent :meth:`AsyncClient.get_no_cache`
  calls for the same URL share one transport call.
- **Best-effort results** -- network failures and non-JSON bodies are
  logged once as a warning and resolve to ``None`` instead of raising.

See Also:
    :mod:`pacedhttp.client.pacing` for the scheduling rule.
"""

from __future__ import annotations

import asyncio
import json
import random
import time
from typing import Any, Callable, Optional

import httpx

from pacedhttp.cache.base import CacheAdapter
from pacedhttp.client.pacing import PacingScheduler
from pacedhttp.client.response import extract_json_payload
from pacedhttp.config import resolve_client_config
from pacedhttp.exceptions import PacedHTTPError, TransportError
from pacedhttp.models import CachedResult, ClientConfig, RequestOptions
from pacedhttp.output import Logger, debug, get_output

CACHE_TTL_SECONDS = 300
"""Expiry applied to every payload the client writes to its cache."""


class AsyncClient:
    """Asynchronous HTTP client with pacing, caching, and GET coalescing.

    Must be used as an async context manager so that the underlying
    :class:`httpx.AsyncClient` is opened and closed.

    Args:
        cache: Cache adapter consulted by :meth:`get_with_cache` and
            written after every successful fetch.
        logger: Diagnostics sink with ``info`` and ``warning`` methods.
            Defaults to the global :class:`~pacedhttp.output.OutputManager`.
        min_timeout_per_request: Minimum milliseconds between dispatched
            requests.  Falls back to ``PACEDHTTP_MIN_TIMEOUT_PER_REQUEST``,
            then ``0``.
        max_random_pre_request_timeout: Upper bound of per-request jitter
            in milliseconds.  Falls back to
            ``PACEDHTTP_MAX_RANDOM_PRE_REQUEST_TIMEOUT``, then ``0``.
        config: A ready :class:`~pacedhttp.models.ClientConfig`.  Takes
            precedence over the two numeric arguments.
        transport: Optional httpx transport (e.g. :class:`httpx.MockTransport`).
        timeout: Transport timeout in seconds.
        clock: Monotonic clock used by the pacing scheduler.
        rng: Random source for jitter.

    Raises:
        ConfigError: If the pacing settings are negative or not numbers.

    Example::

        async with AsyncClient(cache, min_timeout_per_request=100) as client:
            result = await client.get_with_cache("https://api.example.com/users")
    """

    def __init__(
        self,
        cache: CacheAdapter,
        logger: Optional[Logger] = None,
        min_timeout_per_request: Optional[float] = None,
        max_random_pre_request_timeout: Optional[float] = None,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ) -> None:
        if config is None:
            config = resolve_client_config(
                min_timeout_per_request=min_timeout_per_request,
                max_random_pre_request_timeout=max_random_pre_request_timeout,
            )
        self._cache = cache
        self._logger = logger
        self._config = config
        self._scheduler = PacingScheduler(config, clock=clock, rng=rng)
        self._transport = transport
        self._timeout = timeout
        self._in_flight: dict[str, asyncio.Task[Any]] = {}
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def scheduler(self) -> PacingScheduler:
        return self._scheduler

    @property
    def in_flight(self) -> list[str]:
        """URLs with a coalesced GET currently pending."""
        return sorted(self._in_flight)

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def get_with_cache(self, url: str) -> CachedResult:
        """GET *url*, answering from the cache when possible.

        A hit never waits on the pacing scheduler and never touches the
        network.  A miss (no entry, or an empty one) goes through
        :meth:`get_no_cache`.

        Args:
            url: Absolute request URL; also the cache key.

        Returns:
            A :class:`~pacedhttp.models.CachedResult` whose ``payload`` is
            ``None`` if the fetch failed.
        """
        cached = await self._cache.get_item(url)
        if not cached:
            payload = await self.get_no_cache(url)
            return CachedResult(payload=payload, from_cache=False)

        self._log.info(f"found from cache: {url}")
        return CachedResult(payload=json.loads(cached), from_cache=True)

    async def get_no_cache(self, url: str) -> Any:
        """GET *url* from the network, sharing any identical GET in flight.

        If another caller already started a coalesced GET for *url*, this
        call waits for that request instead of issuing a new one and sees
        the same outcome.  The shared request is shielded, so cancelling
        one waiter does not abort it for the others.

        Returns:
            The decoded JSON payload, or ``None`` if the fetch failed.
        """
        task = self._in_flight.get(url)
        if task is None:
            task = asyncio.create_task(self._coalesced_get(url))
            self._in_flight[url] = task
        return await asyncio.shield(task)

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        body: Optional[str] = None,
        json_body: Optional[Any] = None,
    ) -> Any:
        """Send one paced request.  Never coalesced, never read from cache.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE, ...).
            url: Absolute request URL; also the cache key written on success.
            headers: Extra request headers.
            body: Raw string body.
            json_body: JSON-serialisable body (sets Content-Type automatically).
                Ignored when ``body`` is also given.

        Returns:
            The decoded JSON payload, or ``None`` if the fetch failed.
        """
        options = RequestOptions(headers=headers, body=body, json_body=json_body)
        return await self._fetch_with_delay(method.upper(), url, options)

    async def get(self, url: str, **kwargs: Any) -> Any:
        """Send a paced GET request.

        Args:
            url: Absolute request URL.
            **kwargs: Forwarded to :meth:`request`.
        """
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> Any:
        """Send a paced POST request.

        Args:
            url: Absolute request URL.
            **kwargs: Forwarded to :meth:`request`.
        """
        return await self.request("POST", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> Any:
        """Send a paced PATCH request.

        Args:
            url: Absolute request URL.
            **kwargs: Forwarded to :meth:`request`.
        """
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        """Send a paced DELETE request.

        Args:
            url: Absolute request URL.
            **kwargs: Forwarded to :meth:`request`.
        """
        return await self.request("DELETE", url, **kwargs)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    @property
    def _log(self) -> Logger:
        return self._logger if self._logger is not None else get_output()

    async def _coalesced_get(self, url: str) -> Any:
        try:
            return await self._fetch_with_delay("GET", url, RequestOptions())
        finally:
            self._in_flight.pop(url, None)

    async def _fetch_with_delay(self, method: str, url: str, options: RequestOptions) -> Any:
        """Wait for a pacing slot, then fetch.  Failures resolve to ``None``."""
        delay_ms = self._scheduler.reserve()
        self._log.info(f"Fetching {url} (delay: {delay_ms:.0f}ms)")
        debug(f"next slot for {url} at t={self._scheduler.next_allowed_send_at:.3f}s")

        try:
            if delay_ms > 0:
                await asyncio.sleep(delay_ms / 1000)
            return await self._fetch(method, url, options)
        except PacedHTTPError as exc:
            self._log.warning(f"Error occurred trying to access {url} : {exc}")
            return None

    async def _fetch(self, method: str, url: str, options: RequestOptions) -> Any:
        """Send the request, decode the JSON body, and cache it."""
        assert self._client is not None, "Client not initialised -- use as async context manager"

        self._log.info(f"fetching(native): {url}")

        kwargs: dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": options.headers or {},
        }
        if options.body is not None:
            kwargs["content"] = options.body
        elif options.json_body is not None:
            kwargs["json"] = options.json_body

        try:
            response = await self._client.request(**kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"{method} {url} failed: {exc}", url=url) from exc

        payload = extract_json_payload(response, url)
        self._cache.set_item(url, json.dumps(payload), CACHE_TTL_SECONDS)
        return payload
