"""Response-side helpers: JSON and plain-text bodies."""

import json
import logging
from typing import Any

from roost.http.writer import ResponseWriter

logger = logging.getLogger("roost.responses")

SERIALIZATION_FALLBACK = {
    "message": "Error marshaling value for writing",
    "suggestion": "See error log for more information",
}


def encode_json(value: Any) -> bytes:
    """Compact JSON encoding used for every JSON response body."""
    return json.dumps(value, separators=(",", ":")).encode("utf-8")


def write_json(writer: ResponseWriter, status: int, value: Any) -> None:
    """Write *value* as ``application/json`` with *status*.

    If *value* cannot be encoded, the cause is logged and a fixed 500
    payload is written instead. The caller never sees the error.
    """
    writer.headers.set("Content-Type", "application/json")

    try:
        body = encode_json(value)
    except (TypeError, ValueError):
        logger.exception("error marshaling value for writing")
        writer.write_header(500)
        writer.write(encode_json(SERIALIZATION_FALLBACK))
        return

    writer.write_header(status)
    writer.write(body)


def write_string(writer: ResponseWriter, status: int, value: str) -> None:
    """Write *value* as ``text/plain`` with *status*."""
    writer.headers.set("Content-Type", "text/plain")
    writer.write_header(status)
    writer.write(value)
