"""Configuration resolution with XDG paths and environment overrides.

* **Cache directory** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.pacedhttp/cache/`` on macOS and Windows.  See :func:`get_cache_dir`.
* **Client settings** -- :func:`resolve_client_config` merges explicit
  arguments and environment variables into a validated
  :class:`~pacedhttp.models.ClientConfig`.

Environment variables:

``PACEDHTTP_MIN_TIMEOUT_PER_REQUEST``
    Minimum spacing between requests, in milliseconds.
``PACEDHTTP_MAX_RANDOM_PRE_REQUEST_TIMEOUT``
    Upper bound of the random jitter, in milliseconds.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from pacedhttp.cache import ResponseCache
from pacedhttp.exceptions import ConfigError
from pacedhttp.models import CacheConfig, ClientConfig

_APP_NAME = "pacedhttp"
_ENV_MIN_TIMEOUT = "PACEDHTTP_MIN_TIMEOUT_PER_REQUEST"
_ENV_MAX_JITTER = "PACEDHTTP_MAX_RANDOM_PRE_REQUEST_TIMEOUT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/pacedhttp/`` (default ``~/.cache/pacedhttp/``).
    On macOS/Windows: ``~/.pacedhttp/cache/``.

    Returns:
        Absolute path to the cache directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CACHE_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".cache"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def open_default_cache(config: Optional[CacheConfig] = None) -> ResponseCache:
    """Open a :class:`~pacedhttp.cache.ResponseCache` rooted at :func:`get_cache_dir`."""
    return ResponseCache(get_cache_dir(), config)


# --- Client settings ---


def _env_number(name: str) -> Optional[float]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number of milliseconds, got {raw!r}") from exc


def build_client_config(**values: object) -> ClientConfig:
    """Validate *values* into a :class:`ClientConfig`.

    Raises:
        ConfigError: If any value is negative, infinite, or not a number.
    """
    try:
        return ClientConfig(**values)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid client configuration: {details}") from exc


def resolve_client_config(
    min_timeout_per_request: Optional[float] = None,
    max_random_pre_request_timeout: Optional[float] = None,
) -> ClientConfig:
    """Resolve client settings with precedence.

    Precedence (high to low):
        1. Explicit arguments
        2. Environment variables
        3. Defaults (``0`` for both)

    Raises:
        ConfigError: If a resolved value is invalid.
    """
    values: dict[str, object] = {}

    env_min = _env_number(_ENV_MIN_TIMEOUT)
    if env_min is not None:
        values["min_timeout_per_request"] = env_min
    env_jitter = _env_number(_ENV_MAX_JITTER)
    if env_jitter is not None:
        values["max_random_pre_request_timeout"] = env_jitter

    if min_timeout_per_request is not None:
        values["min_timeout_per_request"] = min_timeout_per_request
    if max_random_pre_request_timeout is not None:
        values["max_random_pre_request_timeout"] = max_random_pre_request_timeout

    return build_client_config(**values)
