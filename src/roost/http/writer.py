"""Response writer — the sink handlers and middleware write into.

A handler receives ``(request, writer)`` and produces its response by
mutating ``writer.headers``, calling ``writer.write_header(status)``
at most once, and calling ``writer.write(body)`` any number of times.

Semantics follow the usual HTTP server contract:

- Headers may be changed until the status line is written.
- ``write()`` before ``write_header()`` implies status 200.
- A handler that writes nothing produces an empty 200.

``BufferedWriter`` collects the response in memory and emits it
through the ASGI ``send`` callable once the handler chain returns.
"""

import logging
from typing import Protocol, runtime_checkable

from roost._internal.asgi import Send
from roost.http.headers import MutableHeaders

logger = logging.getLogger("roost.server")


@runtime_checkable
class ResponseWriter(Protocol):
    """The capability a handler needs to produce a response."""

    @property
    def headers(self) -> MutableHeaders: ...

    def write_header(self, status: int) -> None: ...

    def write(self, data: bytes | str) -> int: ...


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class BufferedWriter:
    """In-memory ``ResponseWriter`` flushed to ASGI after the handler returns."""

    __slots__ = ("_body", "_committed_headers", "_headers", "_status")

    def __init__(self) -> None:
        self._headers = MutableHeaders()
        self._committed_headers: MutableHeaders | None = None
        self._status: int | None = None
        self._body: list[bytes] = []

    @property
    def headers(self) -> MutableHeaders:
        return self._headers

    @property
    def status(self) -> int | None:
        """Status written so far, or ``None`` if nothing was written."""
        return self._status

    @property
    def started(self) -> bool:
        """True once the status line has been committed."""
        return self._status is not None

    @property
    def body(self) -> bytes:
        return b"".join(self._body)

    def write_header(self, status: int) -> None:
        if self._status is not None:
            logger.warning(
                "superfluous write_header(%d); status %d already written", status, self._status
            )
            return
        self._commit(status)

    def _commit(self, status: int) -> MutableHeaders:
        self._status = status
        self._committed_headers = self._headers.copy()
        return self._committed_headers

    def write(self, data: bytes | str) -> int:
        if self._status is None:
            self.write_header(200)
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        self._body.append(chunk)
        return len(chunk)

    async def send(self, send: Send) -> None:
        """Emit the buffered response as ASGI start and body messages."""
        committed = self._committed_headers
        if committed is None:
            committed = self._commit(200)
        status = self._status or 200
        headers = committed.copy()

        body = self.body if _body_allowed(status) else b""
        if body and "content-type" not in headers:
            headers.set("Content-Type", "text/plain; charset=utf-8")
        # A bodiless reply (HEAD) may announce the length of the full representation
        if body or "content-length" not in headers:
            headers.set("Content-Length", str(len(body)))

        await send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": headers.encode(),
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": body,
            }
        )
