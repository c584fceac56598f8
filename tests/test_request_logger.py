"""Tests for roost.middleware.request_logger — one record per request."""

import logging

import pytest

from roost.app import App
from roost.http.headers import Headers
from roost.http.query import QueryParams
from roost.http.request import Request
from roost.http.writer import BufferedWriter
from roost.middleware.request_logger import RequestLogger
from roost.testing import TestClient


def _request(path: str = "/items", query: bytes = b"", headers: dict[str, str] | None = None):
    return Request(
        method="GET",
        path=path,
        headers=Headers.from_dict(headers or {}),
        query=QueryParams(query),
        client=("10.1.1.1", 4000),
    )


class TestRequestLogger:
    async def test_logs_status_and_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        async def handler(request, writer) -> None:
            writer.write_header(404)
            writer.write("missing")

        with caplog.at_level(logging.INFO, logger="roost.requests"):
            await RequestLogger()(handler)(_request(query=b"page=2&q=x"), BufferedWriter())

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.getMessage() == "/items"
        assert record.status == 404
        assert record.method == "GET"
        assert record.ip == "10.1.1.1"
        assert record.query_params == "page=2&q=x"
        assert record.execution_time >= 0

    async def test_default_status_is_200(self, caplog: pytest.LogCaptureFixture) -> None:
        async def handler(request, writer) -> None:
            writer.write("ok")

        with caplog.at_level(logging.INFO, logger="roost.requests"):
            await RequestLogger()(handler)(_request(), BufferedWriter())
        assert caplog.records[0].status == 200

    async def test_forwarded_ip(self, caplog: pytest.LogCaptureFixture) -> None:
        async def handler(request, writer) -> None:
            pass

        with caplog.at_level(logging.INFO, logger="roost.requests"):
            await RequestLogger()(handler)(
                _request(headers={"X-Forwarded-For": "192.0.2.7"}), BufferedWriter()
            )
        assert caplog.records[0].ip == "192.0.2.7"

    async def test_inner_writes_reach_outer_writer(self) -> None:
        async def handler(request, writer) -> None:
            writer.write_header(201)
            writer.write("made")

        writer = BufferedWriter()
        await RequestLogger()(handler)(_request(), writer)
        assert writer.status == 201
        assert writer.body == b"made"

    async def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        async def handler(request, writer) -> None:
            pass

        custom = logging.getLogger("myapp.access")
        with caplog.at_level(logging.INFO, logger="myapp.access"):
            await RequestLogger(custom)(handler)(_request(), BufferedWriter())
        assert [r.name for r in caplog.records] == ["myapp.access"]

    async def test_raising_handler_logged_as_500(self, caplog: pytest.LogCaptureFixture) -> None:
        async def handler(request, writer) -> None:
            writer.write("partial")
            raise RuntimeError("boom")

        with caplog.at_level(logging.INFO, logger="roost.requests"):
            with pytest.raises(RuntimeError):
                await RequestLogger()(handler)(_request(), BufferedWriter())

        records = [r for r in caplog.records if r.name == "roost.requests"]
        assert len(records) == 1
        assert records[0].status == 500

    async def test_raising_handler_logged_through_app(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        app = App()
        app.use(RequestLogger())

        def explode(request, writer) -> None:
            raise RuntimeError("boom")

        app.add_endpoint("/explode", explode)
        with caplog.at_level(logging.INFO, logger="roost.requests"):
            async with TestClient(app) as client:
                response = await client.get("/explode")

        assert response.status == 500
        records = [r for r in caplog.records if r.name == "roost.requests"]
        assert [r.status for r in records] == [500]
        assert records[0].getMessage() == "/explode"
