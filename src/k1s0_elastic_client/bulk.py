"""Bulk body encoding and bulk result validation.

The bulk endpoint does not take a single JSON document. It expects one JSON
value per line: an action line per document, optionally followed by the
document source, and a final newline after the last entry. The engine rejects
a body without that trailing newline.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from .exceptions import EncodeError, SearchError
from .logger import get_logger
from .models import BulkCommand, Document
from .response import Response

logger = get_logger(__name__)

UNKNOWN_BULK_ERROR = "Unknown error while bulk indexing"


def _dumps(value: Any) -> bytes:
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Failed to serialize bulk line: {e}", cause=e) from e


def action_line(doc: Document) -> bytes:
    return _dumps(
        {
            doc.bulk_command.value: {
                "_index": doc.index,
                "_type": doc.type,
                "_id": doc.id,
            }
        }
    )


def encode_bulk(documents: Iterable[Document]) -> bytes:
    """Render documents into the newline-delimited bulk format.

    Index commands are followed by their source line; delete commands and
    documents without a source get the action line only. Any serialization
    failure raises :class:`EncodeError` and nothing is returned.
    """
    lines: list[bytes] = []
    count = 0
    for doc in documents:
        count += 1
        lines.append(action_line(doc))
        if doc.bulk_command is not BulkCommand.INDEX:
            continue
        if not doc.has_source():
            # Index entries without fields are skipped silently.
            continue
        lines.append(_dumps(doc.source()))

    if not lines:
        return b""

    logger.debug("bulk_encoded", documents=count, lines=len(lines))
    # The empty final segment puts the mandatory newline after the last line.
    lines.append(b"")
    return b"\n".join(lines)


def first_bulk_error(response: Response) -> SearchError | None:
    """Return the error of a bulk response, or None when every item succeeded.

    Only the first failing item is reported, with that item's status.
    """
    if not response.errors:
        return None
    for item in response.items:
        for result in item.values():
            if result.error:
                return SearchError(result.error, result.status, response=response)
    return SearchError(UNKNOWN_BULK_ERROR, 0, response=response)
