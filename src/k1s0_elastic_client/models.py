"""Document model."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from .exceptions import DocumentError


class BulkCommand(StrEnum):
    """Bulk action kinds."""

    INDEX = "index"
    DELETE = "delete"


def _is_record(value: Any) -> bool:
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


@dataclass(frozen=True)
class Document:
    """Unit of data exchanged with the engine.

    ``fields`` is either a mapping with string keys or a record (dataclass or
    pydantic model instance). ``id=None`` lets the engine assign an id, which
    is only meaningful when indexing a single document.
    """

    index: str
    type: str = ""
    id: str | None = None
    fields: Any = None
    bulk_command: BulkCommand = BulkCommand.INDEX

    def __post_init__(self) -> None:
        if not isinstance(self.index, str):
            raise DocumentError(f"Document index must be a string, got {type(self.index).__name__}")
        if not isinstance(self.type, str):
            raise DocumentError(f"Document type must be a string, got {type(self.type).__name__}")
        if self.id is not None and not isinstance(self.id, str):
            raise DocumentError(f"Document id must be a string, got {type(self.id).__name__}")
        if self.fields is None or _is_record(self.fields):
            pass
        elif isinstance(self.fields, Mapping):
            if not all(isinstance(k, str) for k in self.fields):
                raise DocumentError("Document fields mapping must have string keys")
        else:
            raise DocumentError(
                "Document fields not in mapping, dataclass or pydantic model format: "
                f"{type(self.fields).__name__}"
            )
        try:
            object.__setattr__(self, "bulk_command", BulkCommand(self.bulk_command))
        except ValueError as e:
            raise DocumentError(f"Unknown bulk command: {self.bulk_command!r}", cause=e) from e

    def has_source(self) -> bool:
        """Whether the document carries a non-empty source payload."""
        if self.fields is None:
            return False
        if isinstance(self.fields, BaseModel):
            return len(type(self.fields).model_fields) > 0
        if _is_record(self.fields):
            return len(dataclasses.fields(self.fields)) > 0
        return len(self.fields) > 0

    def source(self) -> dict[str, Any] | None:
        """Return the fields as an ordered dict, or None when absent."""
        if self.fields is None:
            return None
        if isinstance(self.fields, BaseModel):
            return self.fields.model_dump(mode="json")
        if _is_record(self.fields):
            return dataclasses.asdict(self.fields)
        return dict(self.fields)

    def require_id(self) -> str:
        """Return the id, failing when the operation needs one and it is absent."""
        if self.id is None:
            raise DocumentError(f"Document in index {self.index!r} has no id")
        return self.id
