"""Compiled router over the ordered endpoint list.

Endpoints are registered during setup, sorted by precedence when the
router compiles, and matched first-hit-wins afterwards. Fallbacks (the
SPA root handler, for instance) are appended after the sorted endpoints
in registration order and never take part in the sort.
"""

import re
from dataclasses import dataclass

from roost.errors import ConfigurationError, MethodNotAllowed, NotFound
from roost.routing.endpoint import Endpoint, RouteMatch
from roost.routing.ordering import sort_endpoints
from roost.routing.params import CONVERTERS


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/files/{rest:path}" -> [..., PathSegment("{rest:path}", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route {path!r} uses <param> placeholders. "
                "Use {param} syntax instead, e.g. '/users/{id}'."
            )
            raise ConfigurationError(msg)
        is_placeholder = part.startswith("{") and part.endswith("}")
        if ("{" in part or "}" in part) and not is_placeholder:
            msg = (
                f"Route {path!r}: placeholder in {part!r} must fill the whole "
                "segment, e.g. '/files/{name}'."
            )
            raise ConfigurationError(msg)
        if is_placeholder:
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if not param_name.isidentifier():
                msg = f"Route {path!r} has an invalid placeholder name in {part!r}."
                raise ConfigurationError(msg)
            if param_type not in CONVERTERS:
                msg = f"Route {path!r} uses unknown converter {param_type!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def compile_path(path: str) -> re.Pattern[str]:
    """Compile a route path into an anchored regex with named groups.

    A trailing slash on the request path is tolerated. A final ``path``
    segment also matches an empty remainder, so ``/{rest:path}`` matches
    ``/`` as well.
    """
    segments = parse_path(path)
    pattern = ""
    for index, seg in enumerate(segments):
        if not seg.is_param:
            pattern += "/" + re.escape(seg.value)
            continue
        regex = CONVERTERS[seg.param_type]
        group = f"(?P<{seg.param_name}>{regex})"
        if seg.param_type == "path":
            if index != len(segments) - 1:
                msg = f"Route {path!r}: a path converter must be the last segment."
                raise ConfigurationError(msg)
            pattern += f"(?:/{group})?"
        else:
            pattern += "/" + group
    try:
        return re.compile(f"^{pattern}/?$")
    except re.error as exc:
        msg = f"Route {path!r} does not compile: {exc}"
        raise ConfigurationError(msg) from exc


@dataclass(frozen=True, slots=True)
class _CompiledRoute:
    endpoint: Endpoint
    regex: re.Pattern[str]


class Router:
    """Ordered route table with first-match dispatch.

    Usage::

        router = Router()
        router.add(Endpoint.create("/users/{id}", get_user, ["GET"]))
        router.add(Endpoint.create("/users/active", active_users, ["GET"]))
        router.compile()
        match = router.match("GET", "/users/active")
    """

    __slots__ = ("_compiled", "_fallbacks", "_pending", "_table")

    def __init__(self) -> None:
        self._pending: list[Endpoint] = []
        self._fallbacks: list[Endpoint] = []
        self._table: tuple[_CompiledRoute, ...] = ()
        self._compiled = False

    def add(self, endpoint: Endpoint) -> None:
        """Add an endpoint. Must be called before compile()."""
        self._check_not_compiled()
        self._pending.append(endpoint)

    def add_fallback(self, endpoint: Endpoint) -> None:
        """Add an endpoint tried after every sorted endpoint."""
        self._check_not_compiled()
        self._fallbacks.append(endpoint)

    def compile(self) -> None:
        """Sort, compile, and freeze the table. No more endpoints can be added.

        Raises ``ConfigurationError`` on duplicate paths or bad placeholders.
        """
        if self._compiled:
            return
        ordered = [*sort_endpoints(self._pending), *self._fallbacks]
        self._table = tuple(_CompiledRoute(e, compile_path(e.path)) for e in ordered)
        self._compiled = True

    @property
    def routes(self) -> tuple[Endpoint, ...]:
        """Endpoints in dispatch order (empty until compiled)."""
        return tuple(r.endpoint for r in self._table)

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request against the compiled table.

        Returns a ``RouteMatch`` for the first endpoint whose path and
        method both match.
        Raises ``NotFound`` if no path matches.
        Raises ``MethodNotAllowed`` if a path matches but no method does.
        """
        allowed: set[str] = set()
        for compiled in self._table:
            m = compiled.regex.match(path)
            if m is None:
                continue
            if compiled.endpoint.allows(method):
                return RouteMatch(endpoint=compiled.endpoint, path_params=m.groupdict(default=""))
            allowed.update(compiled.endpoint.methods)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def _check_not_compiled(self) -> None:
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
