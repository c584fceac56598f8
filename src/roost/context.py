"""Typed per-request context.

Values derived by middleware (caller IP, bearer token) travel with the
``Request`` as an immutable ``RequestContext``. Adding a value produces
a new snapshot; the previous one is never mutated, so a frame further
out in the chain keeps seeing exactly what it was handed.

Thread safety:
    Contexts are frozen and owned by one request. Nothing is shared
    between concurrently served requests, so no locks are needed.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Values attached to a request by middleware.

    Every request starts with an empty context::

        ctx = RequestContext()
        ctx2 = ctx.with_values(ip="10.0.0.1")
        ctx.ip   # None
        ctx2.ip  # "10.0.0.1"
    """

    ip: str | None = None
    authtoken: str | None = None

    def with_values(self, **values: str) -> "RequestContext":
        """Return a new snapshot with *values* set.

        Raises ``TypeError`` for names that are not context fields.
        """
        return replace(self, **values)
