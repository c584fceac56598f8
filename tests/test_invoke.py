"""Tests for roost._internal.invoke — sync/async handler calls."""

import functools
import threading

from roost._internal.invoke import invoke, is_async_callable


class _AsyncCallable:
    async def __call__(self) -> str:
        return "called"


class TestIsAsyncCallable:
    def test_coroutine_function(self) -> None:
        async def handler() -> None:
            pass

        assert is_async_callable(handler)

    def test_partial(self) -> None:
        async def handler(x: int) -> int:
            return x

        assert is_async_callable(functools.partial(handler, 1))

    def test_callable_object(self) -> None:
        assert is_async_callable(_AsyncCallable())

    def test_sync(self) -> None:
        assert not is_async_callable(lambda: None)


class TestInvoke:
    async def test_async(self) -> None:
        assert await invoke(_AsyncCallable()) == "called"

    async def test_sync_runs_off_the_event_loop_thread(self) -> None:
        main = threading.get_ident()
        assert await invoke(threading.get_ident) != main

    async def test_sync_returning_awaitable(self) -> None:
        async def inner() -> int:
            return 3

        def outer():
            return inner()

        assert await invoke(outer) == 3
