"""Immutable HTTP request.

Frozen metadata with async body access. Middleware that derives a value
for downstream handlers calls ``with_context()`` and passes the new
request inward; the original is left untouched.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any

from roost._internal.asgi import Receive
from roost.context import RequestContext
from roost.http.headers import Headers
from roost.http.query import QueryParams


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, etc.) is frozen at creation.
    Body is read asynchronously via ``.body()`` or ``.text()``.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: dict[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    context: RequestContext = field(default_factory=RequestContext)

    # Private: ASGI receive callable for body streaming
    _receive: Receive = _empty_receive

    # Private: body cache shared by every copy of this request
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def remote_addr(self) -> str:
        """Host part of the connection's peer address, or ``""`` if unknown."""
        if self.client is None:
            return ""
        return str(self.client[0])

    @property
    def raw_query(self) -> str:
        """The raw query string, without the leading ``?``."""
        return self.query.raw

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    # -- Derived copies --

    def with_context(self, **values: str) -> Request:
        """Return a copy whose context carries *values* in addition."""
        return replace(self, context=self.context.with_values(**values))

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy with the router's captured path parameters."""
        return replace(self, path_params=path_params)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then the
        same bytes are returned on subsequent calls, including from
        copies made with ``with_context()``.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncIterator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
