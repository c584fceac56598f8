"""Endpoint and RouteMatch frozen dataclasses."""

from collections.abc import Iterable
from dataclasses import dataclass

from roost._internal.types import Handler


def is_dynamic(path: str) -> bool:
    """True if *path* contains a ``{placeholder}``."""
    return "{" in path and "}" in path


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A route declaration: path pattern, allowed methods, and handler.

    An empty ``methods`` set accepts every method. Build one with
    :meth:`create` to normalize method names::

        Endpoint.create("/users/{id}", get_user, ["get"])
    """

    path: str
    handler: Handler
    methods: frozenset[str] = frozenset()

    @classmethod
    def create(cls, path: str, handler: Handler, methods: Iterable[str] = ()) -> "Endpoint":
        return cls(path=path, handler=handler, methods=frozenset(m.upper() for m in methods))

    @property
    def dynamic(self) -> bool:
        return is_dynamic(self.path)

    def allows(self, method: str) -> bool:
        return not self.methods or method.upper() in self.methods


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    endpoint: Endpoint
    path_params: dict[str, str]
