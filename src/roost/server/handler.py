"""ASGI handler — translates ASGI scope/messages to roost types.

The only component that touches raw ASGI HTTP messages. Converts the
scope dict to a typed Request, runs the composed handler chain against
a fresh BufferedWriter, and sends the result back through ASGI send().
"""

import logging

from roost._internal.asgi import Receive, Scope, Send
from roost.http.request import Request
from roost.http.writer import BufferedWriter
from roost.middleware.protocol import Handler

logger = logging.getLogger("roost.server")


async def handle_request(scope: Scope, receive: Receive, send: Send, *, handler: Handler) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(dict(scope), receive)
    writer = BufferedWriter()

    try:
        await handler(request, writer)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        # Whatever the handler buffered is discarded; the client gets a clean 500.
        writer = BufferedWriter()
        writer.headers.set("Content-Type", "text/plain; charset=utf-8")
        writer.write_header(500)
        writer.write("Internal Server Error")

    await writer.send(send)
