"""Exception hierarchy for pacedhttp.

All exceptions inherit from :class:`PacedHTTPError`.  Only
:class:`ConfigError` ever reaches a caller of
:class:`~pacedhttp.client.AsyncClient`: transport and decode failures are
raised inside the fetch path, logged as a warning, and turned into a
``None`` result.

Subclass hierarchy::

    PacedHTTPError
    +-- ConfigError
    +-- TransportError
    +-- ResponseDecodeError
"""


class PacedHTTPError(Exception):
    """Base exception for all pacedhttp errors.

    Args:
        message: Human-readable error description.
        url: The request URL the error relates to, when there is one.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class ConfigError(PacedHTTPError):
    """Raised for invalid client configuration (negative or non-numeric timeouts)."""


class TransportError(PacedHTTPError):
    """Raised on network-level failures (DNS, connection refused, timeout, bad URL)."""


class ResponseDecodeError(PacedHTTPError):
    """Raised when a response body cannot be decoded as JSON."""
