"""Middleware — frames that wrap a handler in another handler.

A frame is any callable ``Handler -> Handler``. Frames registered first
run first (outermost).

Built-in frames:
    AccessControlMiddleware -- CORS Allow-Origin/Methods/Headers
    CaptureAuth -- Bearer token into ``request.context.authtoken``
    capture_ip -- Caller IP into ``request.context.ip``
    MethodGuard -- One allowed method; silent OPTIONS acknowledgment
    RequestLogger -- One log record per request with the final status
"""

from roost.middleware.access_control import AccessControlConfig, AccessControlMiddleware
from roost.middleware.capture import CaptureAuth, capture_ip, parse_bearer_token
from roost.middleware.chain import MiddlewareChain
from roost.middleware.method_guard import MethodGuard, allow
from roost.middleware.protocol import Frame, Handler
from roost.middleware.request_logger import RequestLogger

__all__ = [
    "AccessControlConfig",
    "AccessControlMiddleware",
    "CaptureAuth",
    "Frame",
    "Handler",
    "MethodGuard",
    "MiddlewareChain",
    "RequestLogger",
    "allow",
    "capture_ip",
    "parse_bearer_token",
]
