"""Query string parameters.

Parsed once from the ASGI ``query_string`` into ordered ``(name, value)``
pairs. Lookups return the first value; ``get_list`` returns every value
in the order the client sent them::

    ?tag=a&tag=b&page=2

    query["tag"]           # "a"
    query.get_list("tag")  # ["a", "b"]
    query.get_page()       # 1 (0-based)
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl

from roost.paging import adjust_page


class QueryParams(Mapping[str, str]):
    """Immutable, multi-valued query parameters.

    The undecoded string stays available as ``raw``; the request logger
    records it verbatim.
    """

    __slots__ = ("_pairs", "_raw")

    def __init__(self, query_string: bytes | str = b"") -> None:
        raw = query_string.decode("latin-1") if isinstance(query_string, bytes) else query_string
        self._raw = raw
        self._pairs: tuple[tuple[str, str], ...] = tuple(parse_qsl(raw, keep_blank_values=True))

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len({name for name, _ in self._pairs})

    def __repr__(self) -> str:
        return f"QueryParams({self._raw!r})"

    def get_list(self, key: str) -> list[str]:
        return [value for name, value in self._pairs if name == key]

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """The first value for *key* as an int; *default* if absent or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def get_page(self, key: str = "page") -> int:
        """The 1-based page number in *key*, converted to a 0-based page."""
        return adjust_page(self.get_int(key, 1) or 0)

    @property
    def raw(self) -> str:
        return self._raw
