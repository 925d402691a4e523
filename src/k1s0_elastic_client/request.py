"""Abstract engine requests.

A :class:`Request` describes one HTTP call without performing it: method, path
segments, query-string arguments and at most one body. Building and encoding a
request never does any I/O.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import EncodeError

JSON_CONTENT_TYPE = "application/json"
BULK_CONTENT_TYPE = "application/x-ndjson"


@dataclass(frozen=True)
class JsonBody:
    """Opaque structured payload sent as a single JSON value."""

    value: Any

    def encode(self) -> bytes:
        try:
            return json.dumps(self.value, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Failed to serialize request body: {e}", cause=e) from e


@dataclass(frozen=True)
class RawBody:
    """Bytes sent verbatim, e.g. a scroll id."""

    data: bytes

    def encode(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class BulkBody:
    """Pre-encoded newline-delimited bulk payload."""

    data: bytes

    def encode(self) -> bytes:
        return self.data


RequestBody = Union[JsonBody, RawBody, BulkBody]

ExtraArgs = Union[Mapping[str, Any], Sequence[tuple[str, Any]], None]


def name_list(names: Sequence[str], field: str) -> tuple[str, ...]:
    """Copy a sequence of index or type names.

    A bare string is rejected instead of being split into characters.
    """
    if isinstance(names, (str, bytes)):
        raise TypeError(f"{field}: expected a sequence of names, got {type(names).__name__}")
    result = tuple(names)
    for name in result:
        if not isinstance(name, str):
            raise TypeError(f"{field}: expected str items, got {type(name).__name__}")
    return result


def _arg_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_args(extra_args: ExtraArgs) -> tuple[tuple[str, str], ...]:
    """Flatten URL arguments into an ordered tuple of pairs.

    Mapping values that are lists or tuples produce one pair per element.
    Arguments whose value is None are left out.
    """
    if not extra_args:
        return ()
    pairs: list[tuple[str, str]] = []
    items = extra_args.items() if isinstance(extra_args, Mapping) else extra_args
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _arg_value(v)) for v in value if v is not None)
        else:
            pairs.append((key, _arg_value(value)))
    return tuple(pairs)


@dataclass(frozen=True)
class Request:
    """One engine call, fully described but not yet sent."""

    method: str
    index_list: tuple[str, ...] = ()
    type_list: tuple[str, ...] = ()
    api: str = ""
    id: str = ""
    extra_args: tuple[tuple[str, str], ...] = ()
    body: RequestBody | None = None

    @classmethod
    def build(
        cls,
        method: str,
        *,
        index_list: Sequence[str] = (),
        type_list: Sequence[str] = (),
        api: str = "",
        id: str = "",
        extra_args: ExtraArgs = None,
        body: RequestBody | None = None,
    ) -> Request:
        """Build a request, copying the caller's sequences.

        Raises TypeError when a name list is a bare string.
        """
        return cls(
            method=method.upper(),
            index_list=name_list(index_list, "index_list"),
            type_list=name_list(type_list, "type_list"),
            api=api,
            id=id,
            extra_args=normalize_args(extra_args),
            body=body,
        )

    def path(self) -> str:
        segments = [
            ",".join(self.index_list),
            ",".join(self.type_list),
            self.api,
            self.id,
        ]
        return "/".join(s for s in segments if s)

    def url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self.path()}"

    def content(self) -> bytes | None:
        if self.body is None:
            return None
        return self.body.encode()

    def headers(self) -> dict[str, str]:
        if self.body is None:
            return {}
        if isinstance(self.body, BulkBody):
            return {"Content-Type": BULK_CONTENT_TYPE}
        return {"Content-Type": JSON_CONTENT_TYPE}

