"""Handler and frame protocols.

A handler is any callable matching::

    async def handler(request: Request, writer: ResponseWriter) -> None: ...

Plain ``def`` handlers work too; they run on a worker thread.

A frame wraps a handler in another handler::

    def timing(next: Handler) -> Handler:
        async def timed(request: Request, writer: ResponseWriter) -> None:
            start = time.monotonic()
            await invoke(next, request, writer)
            logger.info("%s took %.3fs", request.path, time.monotonic() - start)

        return timed

No base class required. Frames either delegate to ``next`` or write a
response themselves and return.
"""

from typing import Protocol

from roost.http.request import Request
from roost.http.writer import ResponseWriter


class Handler(Protocol):
    """Protocol for roost request handlers."""

    async def __call__(self, request: Request, writer: ResponseWriter) -> None: ...


class Frame(Protocol):
    """Protocol for middleware frames: ``Handler -> Handler``.

    Accepts both functions and callable objects. Frames may hold
    configuration captured at construction, never per-request state.
    """

    def __call__(self, next: Handler) -> Handler: ...
