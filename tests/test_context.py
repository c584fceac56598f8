"""Tests for roost.context and Request.with_context."""

import dataclasses

import pytest

from roost.context import RequestContext
from roost.http.request import Request


class TestRequestContext:
    def test_empty(self) -> None:
        ctx = RequestContext()
        assert ctx.ip is None
        assert ctx.authtoken is None

    def test_with_values_returns_new_snapshot(self) -> None:
        ctx = RequestContext()
        ctx2 = ctx.with_values(ip="10.0.0.1")
        assert ctx.ip is None
        assert ctx2.ip == "10.0.0.1"

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            RequestContext().ip = "x"  # type: ignore[misc]

    def test_unknown_key(self) -> None:
        with pytest.raises(TypeError):
            RequestContext().with_values(user="bob")


class TestRequestWithContext:
    def test_original_untouched(self) -> None:
        request = Request(method="GET", path="/")
        derived = request.with_context(authtoken="abc")
        assert request.context.authtoken is None
        assert derived.context.authtoken == "abc"
        assert derived.path == "/"

    def test_values_accumulate(self) -> None:
        request = Request(method="GET", path="/").with_context(ip="1.1.1.1")
        request = request.with_context(authtoken="t")
        assert request.context == RequestContext(ip="1.1.1.1", authtoken="t")

    async def test_body_cache_shared_with_copies(self) -> None:
        reads = 0

        async def receive():
            nonlocal reads
            reads += 1
            return {"type": "http.request", "body": b"payload", "more_body": False}

        request = Request(method="POST", path="/", _receive=receive)
        assert await request.body() == b"payload"
        assert await request.with_context(ip="x").body() == b"payload"
        assert reads == 1
