"""Request-side helpers: JSON bodies, caller IP, and method checks."""

import json
from typing import Any

from roost.errors import RequestBodyError
from roost.http.request import Request
from roost.http.writer import ResponseWriter
from roost.responses import write_json


def real_ip(request: Request) -> str:
    """Best guess at the caller's IP address.

    Prefers the first entry of ``X-Forwarded-For`` (set by proxies and
    load balancers) and falls back to the connection's peer address.
    """
    forwarded = request.headers.get("x-forwarded-for", "") or ""
    first = forwarded.split(",", 1)[0].strip()
    if first:
        return first
    return request.remote_addr


async def read_json_body(request: Request) -> Any:
    """Read and decode the request body as JSON.

    Raises ``RequestBodyError`` if the body is not valid UTF-8 JSON.
    """
    raw = await request.body()
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"error unmarshaling request body: {exc}"
        raise RequestBodyError(msg) from exc


def validate_http_method(request: Request, writer: ResponseWriter, expected: str) -> bool:
    """Check the request method against *expected*.

    On mismatch a JSON 405 is written and ``False`` is returned; the
    caller should stop handling the request.
    """
    if request.method == expected:
        return True
    write_json(writer, 405, {"message": "method not allowed"})
    return False
