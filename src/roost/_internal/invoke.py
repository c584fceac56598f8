"""Invoke helpers — call sync or async handlers uniformly.

Roost handlers can be ``def`` or ``async def``. Any code that calls a
user-provided handler or callback goes through :func:`invoke` so the
sync/async check lives in exactly one place.

Plain functions run on a worker thread (``anyio.to_thread``), so a
blocking handler never stalls the event loop serving other requests.

Usage::

    from roost._internal.invoke import invoke

    await invoke(handler, request, writer)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


def is_async_callable(obj: Any) -> bool:
    """True for coroutine functions, partials of them, and async ``__call__``."""
    while isinstance(obj, functools.partial):
        obj = obj.func
    return inspect.iscoroutinefunction(obj) or inspect.iscoroutinefunction(
        getattr(obj, "__call__", None)
    )


async def invoke(handler: Any, *args: Any) -> Any:
    """Call *handler* with *args*, awaiting or offloading as needed."""
    if is_async_callable(handler):
        return await handler(*args)

    result = await anyio.to_thread.run_sync(functools.partial(handler, *args))
    if inspect.isawaitable(result):
        result = await result
    return result
