"""Shared type aliases used across roost modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# ``(request, writer) -> None``, sync or async
Handler: TypeAlias = Callable[..., Any]
