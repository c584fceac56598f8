"""Access control middleware: CORS response headers.

Sets the three ``Access-Control-Allow-*`` headers on every response
before the inner handler runs, then always delegates. Preflight
``OPTIONS`` requests are not answered here; pair with ``MethodGuard``
to acknowledge them silently.
"""

from dataclasses import dataclass

from roost._internal.invoke import invoke
from roost.http.request import Request
from roost.http.writer import ResponseWriter
from roost.middleware.protocol import Handler

ALLOW_ALL_ORIGINS = "*"
ALLOW_ALL_METHODS = "POST, GET, OPTIONS, PUT, DELETE"
ALLOW_ALL_HEADERS = (
    "Accept, Content-Type, Content-Length, Accept-Encoding, X-CSRF-Token, Authorization"
)


@dataclass(frozen=True, slots=True)
class AccessControlConfig:
    """CORS header values. Defaults allow everything.

    Override what you need::

        AccessControlConfig(
            allow_origin="https://example.com",
            allow_methods="GET, POST",
        )
    """

    allow_origin: str = ALLOW_ALL_ORIGINS
    allow_methods: str = ALLOW_ALL_METHODS
    allow_headers: str = ALLOW_ALL_HEADERS


class AccessControlMiddleware:
    """Frame that stamps CORS headers on every response.

    Usage::

        app.use(AccessControlMiddleware(AccessControlConfig(
            allow_origin="https://example.com",
        )))
    """

    __slots__ = ("config",)

    def __init__(self, config: AccessControlConfig | None = None) -> None:
        self.config = config or AccessControlConfig()

    def __call__(self, next: Handler) -> Handler:
        cfg = self.config

        async def access_control(request: Request, writer: ResponseWriter) -> None:
            writer.headers.set("Access-Control-Allow-Origin", cfg.allow_origin)
            writer.headers.set("Access-Control-Allow-Methods", cfg.allow_methods)
            writer.headers.set("Access-Control-Allow-Headers", cfg.allow_headers)
            await invoke(next, request, writer)

        return access_control
