"""Roost exception hierarchy.

Shared across Router, App, dispatcher, and middleware so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when app configuration is invalid.

    Typically raised during ``App._freeze()`` at startup. Serving never
    begins while one of these is outstanding.
    """


class AuthHeaderError(RoostError):
    """The Authorization header is missing or not ``Bearer <token>``."""


class RequestBodyError(RoostError):
    """The request body could not be decoded."""


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    """An error that maps directly to an HTTP status code.

    Raised by the router. The terminal dispatcher catches these and
    writes the matching plain-text response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Carries an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "method not allowed") -> None:
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", ", ".join(sorted(allowed))),),
        )
