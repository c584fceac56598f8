"""Context capture middleware: caller IP and bearer token.

Both frames derive one value from the request headers and hand the
next handler a request whose ``context`` carries it::

    async def handler(request, writer):
        request.context.ip         # set by capture_ip
        request.context.authtoken  # set by CaptureAuth
"""

import logging
from collections.abc import Callable
from typing import Any

from roost._internal.invoke import invoke
from roost.errors import AuthHeaderError
from roost.http.request import Request
from roost.http.writer import ResponseWriter
from roost.middleware.protocol import Handler
from roost.requests import real_ip

logger = logging.getLogger("roost.middleware")

# Called with the response writer when the Authorization header is bad
InvalidHeaderCallback = Callable[[ResponseWriter], Any]


def capture_ip(next: Handler) -> Handler:
    """Frame that records the caller's IP as ``context.ip``. Always delegates."""

    async def capture(request: Request, writer: ResponseWriter) -> None:
        await invoke(next, request.with_context(ip=real_ip(request)), writer)

    return capture


def parse_bearer_token(header: str | None) -> str:
    """Extract the token from ``Bearer <token>``.

    Raises ``AuthHeaderError`` unless *header* is exactly two
    space-separated parts, the first ``Bearer`` and the second non-empty.
    """
    if not header:
        msg = "missing Authorization header"
        raise AuthHeaderError(msg)

    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        msg = "invalid authorization header. Expected 'Bearer <token here>'"
        raise AuthHeaderError(msg)
    return parts[1]


class CaptureAuth:
    """Frame that records a bearer token as ``context.authtoken``.

    When the header is missing or malformed the chain stops here and
    *on_invalid_header* decides the response::

        def reject(writer):
            write_json(writer, 400, {"error": "invalid JWT header!"})

        app.use(CaptureAuth(reject))
    """

    __slots__ = ("on_invalid_header",)

    def __init__(self, on_invalid_header: InvalidHeaderCallback) -> None:
        self.on_invalid_header = on_invalid_header

    def __call__(self, next: Handler) -> Handler:
        on_invalid_header = self.on_invalid_header

        async def capture_auth(request: Request, writer: ResponseWriter) -> None:
            try:
                token = parse_bearer_token(request.headers.get("authorization"))
            except AuthHeaderError as exc:
                logger.error("%s %s: %s", request.method, request.path, exc)
                await invoke(on_invalid_header, writer)
                return

            await invoke(next, request.with_context(authtoken=token), writer)

        return capture_auth
