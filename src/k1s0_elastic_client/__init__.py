"""k1s0 elastic client library."""

from .bulk import encode_bulk, first_bulk_error
from .client import Client, new_client, new_https_client
from .config import ClientConfig
from .decoder import decode_response
from .exceptions import (
    DecodeError,
    DocumentError,
    ElasticClientError,
    ElasticClientErrorCodes,
    EncodeError,
    SearchError,
    TransportError,
)
from .logger import configure_logging
from .models import BulkCommand, Document
from .request import BulkBody, JsonBody, RawBody, Request
from .response import (
    Aggregation,
    Bucket,
    BulkItem,
    Hit,
    Hits,
    Response,
    ShardsInfo,
    unify_error,
)
from .transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    "Aggregation",
    "Bucket",
    "BulkBody",
    "BulkCommand",
    "BulkItem",
    "Client",
    "ClientConfig",
    "DecodeError",
    "Document",
    "DocumentError",
    "ElasticClientError",
    "ElasticClientErrorCodes",
    "EncodeError",
    "Hit",
    "Hits",
    "HttpxTransport",
    "JsonBody",
    "RawBody",
    "Request",
    "Response",
    "SearchError",
    "ShardsInfo",
    "Transport",
    "TransportError",
    "TransportResponse",
    "configure_logging",
    "decode_response",
    "encode_bulk",
    "first_bulk_error",
    "new_client",
    "new_https_client",
    "unify_error",
]
