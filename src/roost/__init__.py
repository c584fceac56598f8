"""Roost — a small ASGI serving layer for REST APIs and single-page apps.

Endpoints are sorted into a deterministic dispatch order (static before
dynamic, longest first) and the handler is wrapped in a chain of
middleware frames: CORS headers, method guards, caller-IP and bearer
token capture, request logging.

Basic usage::

    from roost import AppConfig, Endpoint, rest_app
    from roost.responses import write_json

    async def get_user(request, writer):
        write_json(writer, 200, {"id": request.path_params["id"]})

    app = rest_app(AppConfig(port=8080), [
        Endpoint.create("/users/{id}", get_user, ["GET"]),
    ])
    app.run()

Serving requires the ``server`` extra (``pip install roost[server]``).
"""

__version__ = "0.1.0"
__all__ = [
    "AccessControlConfig",
    "App",
    "AppConfig",
    "ConfigurationError",
    "Endpoint",
    "MiddlewareChain",
    "Request",
    "RequestContext",
    "ResponseWriter",
    "RoostError",
    "basic_web_app",
    "rest_app",
    "spa_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from roost.app import App

        return App

    if name == "AppConfig":
        from roost.config import AppConfig

        return AppConfig

    if name == "AccessControlConfig":
        from roost.middleware.access_control import AccessControlConfig

        return AccessControlConfig

    if name == "Endpoint":
        from roost.routing.endpoint import Endpoint

        return Endpoint

    if name == "MiddlewareChain":
        from roost.middleware.chain import MiddlewareChain

        return MiddlewareChain

    if name == "Request":
        from roost.http.request import Request

        return Request

    if name == "RequestContext":
        from roost.context import RequestContext

        return RequestContext

    if name == "ResponseWriter":
        from roost.http.writer import ResponseWriter

        return ResponseWriter

    if name in ("ConfigurationError", "RoostError"):
        from roost import errors as _errors

        return getattr(_errors, name)

    if name in ("basic_web_app", "rest_app", "spa_app"):
        from roost import presets as _presets

        return getattr(_presets, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
