"""Regexes for typed path placeholders such as ``{id:int}``.

Captured values always reach handlers as strings; the converter only
narrows what a segment will match.
"""

CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    # Multi-segment remainder; only valid as the last segment
    "path": r".*",
}
