"""Route precedence ordering.

The matcher tries endpoints in list order and takes the first hit, so a
general pattern placed early would shadow a specific one. Sorting puts
the most specific declarations first:

1. Static paths before paths with ``{placeholders}``.
2. Within each class, longer paths before shorter ones.
3. Remaining ties broken by plain string comparison of the path.

The key is total, so the result never depends on registration order.
Two endpoints with the same literal path are a configuration error no
matter which methods they declare.
"""

from collections import Counter
from collections.abc import Iterable

from roost.errors import ConfigurationError
from roost.routing.endpoint import Endpoint


def precedence_key(endpoint: Endpoint) -> tuple[bool, int, str]:
    """Sort key: static first, then longest first, then lexicographic."""
    return (endpoint.dynamic, -len(endpoint.path), endpoint.path)


def sort_endpoints(endpoints: Iterable[Endpoint]) -> list[Endpoint]:
    """Return *endpoints* in dispatch order.

    Raises ``ConfigurationError`` if two endpoints share a path.
    """
    items = list(endpoints)
    counts = Counter(e.path for e in items)
    duplicates = sorted(path for path, n in counts.items() if n > 1)
    if duplicates:
        listed = ", ".join(repr(p) for p in duplicates)
        msg = (
            f"Two endpoints can't share the same path: {listed}. "
            "Register one endpoint per path and list every method it accepts."
        )
        raise ConfigurationError(msg)
    return sorted(items, key=precedence_key)
