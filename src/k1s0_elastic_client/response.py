"""Decoded engine responses and aggregation views."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


def _as_dict(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"{name}: expected object, got {type(value).__name__}")
    return value


def _as_int(value: Any, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name}: expected number, got {type(value).__name__}")
    return int(value)


def _as_str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{name}: expected string, got {type(value).__name__}")
    return value


def _as_bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"{name}: expected boolean, got {type(value).__name__}")
    return value


def unify_error(value: Any) -> str:
    """Return the message of an error field, whatever shape the engine used.

    A JSON string is the message itself; objects and arrays are rendered back
    to their compact JSON text. A missing or null field means no error.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class Aggregation(dict[str, Any]):
    """View over one aggregation of a search response."""

    def buckets(self) -> list[Bucket]:
        buckets = self.get("buckets")
        if not isinstance(buckets, list):
            return []
        return [Bucket(b) for b in buckets if isinstance(b, dict)]

    def aggregation(self, name: str) -> Aggregation:
        agg = self.get(name)
        if isinstance(agg, dict):
            return Aggregation(agg)
        return Aggregation()


class Bucket(dict[str, Any]):
    """View over one bucket of an aggregation."""

    def key(self) -> Any:
        return self.get("key")

    def doc_count(self) -> int:
        # Raises KeyError when the bucket carries no doc_count.
        return int(self["doc_count"])

    def aggregation(self, name: str) -> Aggregation:
        """Return the sub-aggregation *name*, or an empty one."""
        agg = self.get(name)
        if isinstance(agg, dict):
            return Aggregation(agg)
        return Aggregation()


@dataclass
class ShardsInfo:
    """Shard summary (`_shards`)."""

    total: int = 0
    successful: int = 0
    failed: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShardsInfo:
        return cls(
            total=_as_int(data.get("total"), "_shards.total"),
            successful=_as_int(data.get("successful"), "_shards.successful"),
            failed=_as_int(data.get("failed"), "_shards.failed"),
        )


@dataclass
class Hit:
    """Single search hit."""

    index: str = ""
    type: str = ""
    id: str = ""
    score: float | None = None
    source: dict[str, Any] = field(default_factory=dict)
    highlight: dict[str, Any] = field(default_factory=dict)
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Hit:
        score = data.get("_score")
        return cls(
            index=_as_str(data.get("_index"), "hit._index"),
            type=_as_str(data.get("_type"), "hit._type"),
            id=_as_str(data.get("_id"), "hit._id"),
            score=None if score is None else float(score),
            source=_as_dict(data.get("_source"), "hit._source"),
            highlight=_as_dict(data.get("highlight"), "hit.highlight"),
            fields=_as_dict(data.get("fields"), "hit.fields"),
        )


@dataclass
class Hits:
    """Search hits (`hits`)."""

    total: int = 0
    max_score: float | None = None
    hits: list[Hit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Hits:
        total = data.get("total")
        # Newer engines report {"value": n, "relation": "eq"}.
        if isinstance(total, dict):
            total = total.get("value")
        max_score = data.get("max_score")
        hits = data.get("hits") or []
        if not isinstance(hits, list):
            raise TypeError(f"hits.hits: expected array, got {type(hits).__name__}")
        return cls(
            total=_as_int(total, "hits.total"),
            max_score=None if max_score is None else float(max_score),
            hits=[Hit.from_dict(_as_dict(h, "hits.hits[]")) for h in hits],
        )


@dataclass
class BulkItem:
    """Per-document result of a bulk request."""

    index: str = ""
    type: str = ""
    id: str = ""
    version: int = 0
    status: int = 0
    error: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BulkItem:
        return cls(
            index=_as_str(data.get("_index"), "item._index"),
            type=_as_str(data.get("_type"), "item._type"),
            id=_as_str(data.get("_id"), "item._id"),
            version=_as_int(data.get("_version"), "item._version"),
            status=_as_int(data.get("status"), "item.status"),
            error=unify_error(data.get("error")),
        )


@dataclass
class Response:
    """Decoded engine response.

    The typed attributes are a best-effort view of the body; ``raw`` holds the
    whole decoded body and is the authoritative fallback.
    """

    status: int = 0
    raw: dict[str, Any] = field(default_factory=dict)
    error: str = ""
    acknowledged: bool = False
    took: int = 0
    timed_out: bool = False
    shards: ShardsInfo = field(default_factory=ShardsInfo)
    hits: Hits = field(default_factory=Hits)
    index: str = ""
    id: str = ""
    type: str = ""
    version: int = 0
    found: bool = False
    count: int = 0
    items: list[dict[str, BulkItem]] = field(default_factory=list)
    errors: bool = False
    scroll_id: str = ""

    def fill_from_dict(self, data: dict[str, Any]) -> None:
        """Populate the typed attributes from a decoded body.

        Attributes are assigned one by one so that a shape error leaves the
        attributes decoded so far in place.
        """
        self.acknowledged = _as_bool(data.get("acknowledged"), "acknowledged")
        self.took = _as_int(data.get("took"), "took")
        self.timed_out = _as_bool(data.get("timed_out"), "timed_out")
        self.shards = ShardsInfo.from_dict(_as_dict(data.get("_shards"), "_shards"))
        self.hits = Hits.from_dict(_as_dict(data.get("hits"), "hits"))
        self.index = _as_str(data.get("_index"), "_index")
        self.id = _as_str(data.get("_id"), "_id")
        self.type = _as_str(data.get("_type"), "_type")
        self.version = _as_int(data.get("_version"), "_version")
        self.found = _as_bool(data.get("found"), "found")
        self.count = _as_int(data.get("count"), "count")
        self.errors = _as_bool(data.get("errors"), "errors")
        self.scroll_id = _as_str(data.get("_scroll_id"), "_scroll_id")
        items = data.get("items") or []
        if not isinstance(items, list):
            raise TypeError(f"items: expected array, got {type(items).__name__}")
        self.items = [
            {
                command: BulkItem.from_dict(_as_dict(result, f"items[].{command}"))
                for command, result in _as_dict(item, "items[]").items()
            }
            for item in items
        ]

    @property
    def aggregations(self) -> dict[str, Aggregation]:
        aggs = self.raw.get("aggregations")
        if not isinstance(aggs, dict):
            return {}
        return {name: Aggregation(agg) for name, agg in aggs.items() if isinstance(agg, dict)}

    def aggregation(self, name: str) -> Aggregation:
        return self.aggregations.get(name, Aggregation())
