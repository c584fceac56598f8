"""Request logging middleware.

Logs one INFO record per request once the inner handler has returned,
including when it raises (recorded as status 500).
The message is the request path; the structured fields travel in
``extra`` so any formatter (plain text, JSON) can pick them up:

- ``ip`` — caller IP (``X-Forwarded-For`` aware)
- ``method`` — request method
- ``status`` — final status code observed by a ``StatusRecorder``
- ``execution_time`` — seconds spent in the inner handler
- ``query_params`` — raw query string
"""

import logging
import time

from roost._internal.invoke import invoke
from roost.http.recorder import StatusRecorder
from roost.http.request import Request
from roost.http.writer import ResponseWriter
from roost.middleware.protocol import Handler
from roost.requests import real_ip


class RequestLogger:
    """Frame that logs every request it wraps.

    Usage::

        app.use(RequestLogger())
        app.use(RequestLogger(logging.getLogger("myapp.access")))
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter | None = None) -> None:
        self.logger = logger or logging.getLogger("roost.requests")

    def __call__(self, next: Handler) -> Handler:
        log = self.logger

        async def request_logger(request: Request, writer: ResponseWriter) -> None:
            recorder = StatusRecorder(writer)
            ip = real_ip(request)
            start = time.perf_counter()
            failed = True

            try:
                await invoke(next, request, recorder)
                failed = False
            finally:
                # An escaping exception becomes a 500 in the ASGI adapter
                log.info(
                    request.path,
                    extra={
                        "ip": ip,
                        "method": request.method,
                        "status": 500 if failed else recorder.status,
                        "execution_time": time.perf_counter() - start,
                        "query_params": request.raw_query,
                    },
                )

        return request_logger
