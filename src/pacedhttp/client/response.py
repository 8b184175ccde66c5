"""Payload extraction from :class:`httpx.Response` objects.

The client treats every response body as a JSON document, whatever the
status code: an error document returned by the server is still a
payload.  A body that is not JSON is an error.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from pacedhttp.exceptions import ResponseDecodeError


def extract_json_payload(response: httpx.Response, url: str | None = None) -> Any:
    """Decode the body of *response* as JSON.

    Args:
        response: The :class:`httpx.Response` to decode.
        url: Request URL recorded on the raised error.

    Returns:
        The decoded document (``dict``, ``list``, scalar, or ``None`` for a
        JSON ``null``).

    Raises:
        ResponseDecodeError: If the body is empty or not valid JSON.
    """
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        preview = response.text[:200] if response.text else "<empty body>"
        raise ResponseDecodeError(
            f"HTTP {response.status_code}: body is not JSON ({exc}): {preview}",
            url=url,
        ) from exc
