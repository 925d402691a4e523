"""Response decoding.

Turns the raw status and body returned by the transport into a
:class:`Response`, raising the matching error when the call failed.
"""

from __future__ import annotations

import json
from typing import Any

from .exceptions import DecodeError, SearchError, TransportError
from .response import Response, unify_error

# 202-399 is never a legitimate answer for the APIs this client calls.
ANOMALOUS_STATUS_MIN = 202
ANOMALOUS_STATUS_MAX = 399


def is_anomalous_status(status: int) -> bool:
    return ANOMALOUS_STATUS_MIN <= status <= ANOMALOUS_STATUS_MAX


def check_status(status: int, body: bytes) -> None:
    """Raise a TransportError for statuses outside the expected bands."""
    if is_anomalous_status(status):
        raise TransportError(body.decode("utf-8", errors="replace"), status=status)


def decode_response(method: str, status: int, body: bytes) -> Response:
    """Decode an engine response.

    HEAD responses carry no body and are never decoded. For everything else
    the body is decoded into ``Response.raw`` and into the typed attributes;
    the response travels with any error raised so that callers can still
    inspect ``raw``.
    """
    check_status(status, body)

    response = Response(status=status)
    if method.upper() == "HEAD":
        return response

    try:
        data: Any = json.loads(body)
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"Failed to decode response body: {e}", cause=e, response=response) from e
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a JSON object in response body, got {type(data).__name__}",
            response=response,
        )

    response.raw = data
    try:
        response.fill_from_dict(data)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Unexpected response shape: {e}", cause=e, response=response) from e

    response.error = unify_error(data.get("error"))
    if response.error:
        raise SearchError(response.error, response.status, response=response)
    return response
