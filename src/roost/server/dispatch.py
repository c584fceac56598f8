"""Terminal dispatcher — the innermost handler of the middleware chain.

Matches the request against the frozen route table and calls the
endpoint's handler with the captured path parameters. Routing misses
are written here as plain-text 404/405 responses, so every middleware
frame (the request logger in particular) observes them like any other
response.
"""

import logging

from roost._internal.invoke import invoke
from roost.errors import HTTPError
from roost.http.request import Request
from roost.http.writer import ResponseWriter
from roost.middleware.protocol import Handler
from roost.routing.router import Router

logger = logging.getLogger("roost.server")


def write_http_error(writer: ResponseWriter, exc: HTTPError) -> None:
    """Write *exc* as a plain-text response."""
    for name, value in exc.headers:
        writer.headers.set(name, value)
    writer.headers.set("Content-Type", "text/plain; charset=utf-8")
    writer.write_header(exc.status)
    writer.write(exc.detail or str(exc.status))


def make_dispatcher(router: Router) -> Handler:
    """Build the terminal handler for a compiled *router*."""

    async def dispatch(request: Request, writer: ResponseWriter) -> None:
        try:
            match = router.match(request.method, request.path)
        except HTTPError as exc:
            logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
            write_http_error(writer, exc)
            return

        await invoke(match.endpoint.handler, request.with_path_params(match.path_params), writer)

    return dispatch
