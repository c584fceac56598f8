"""Method guard: one allowed HTTP method per handler.

A mismatched method gets a plain-text 405. ``OPTIONS`` is the exception:
a preflight is acknowledged with an empty response and the handler is
not called.
"""

import logging

from roost._internal.invoke import invoke
from roost.http.request import Request
from roost.http.writer import ResponseWriter
from roost.middleware.protocol import Handler

logger = logging.getLogger("roost.middleware")


class MethodGuard:
    """Frame that only lets *method* through (case-insensitive).

    Usage::

        app.add_endpoint("/items", MethodGuard("POST")(create_item))

    or, for a single handler, the :func:`allow` shortcut.
    """

    __slots__ = ("method",)

    def __init__(self, method: str) -> None:
        self.method = method.upper()

    def __call__(self, next: Handler) -> Handler:
        allowed = self.method

        async def method_guard(request: Request, writer: ResponseWriter) -> None:
            method = request.method.upper()
            if method == allowed:
                await invoke(next, request, writer)
                return

            if method == "OPTIONS":
                return

            logger.debug("405 %s %s (allowed: %s)", request.method, request.path, allowed)
            writer.headers.set("Content-Type", "text/plain")
            writer.write_header(405)
            writer.write("method not allowed")

        return method_guard


def allow(handler: Handler, method: str) -> Handler:
    """Wrap *handler* so only *method* reaches it."""
    return MethodGuard(method)(handler)
