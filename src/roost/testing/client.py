"""In-process client for exercising a roost app over ASGI.

No sockets and no server: each call builds an HTTP scope, feeds the
body through ``receive`` and collects what the app hands to ``send``.
Middleware, routing and error handling run exactly as they would
behind a real server.
"""

import json as json_module
from dataclasses import dataclass, field
from typing import Any

from roost.app import App


@dataclass(frozen=True, slots=True)
class TestResponse:
    """Status, lowercased headers and body of one exchange."""

    __test__ = False  # Not a pytest test class

    status: int
    headers: tuple[tuple[str, str], ...]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def header(self, name: str) -> str | None:
        key = name.lower()
        return next((value for k, value in self.headers if k == key), None)

    def json(self) -> Any:
        return json_module.loads(self.body)


@dataclass(slots=True)
class _Exchange:
    """The ASGI ``receive``/``send`` pair for a single request."""

    body: bytes
    delivered: bool = False
    status: int = 200
    headers: list[tuple[bytes, bytes]] = field(default_factory=list)
    chunks: list[bytes] = field(default_factory=list)

    async def receive(self) -> dict[str, Any]:
        if self.delivered:
            return {"type": "http.disconnect"}
        self.delivered = True
        return {"type": "http.request", "body": self.body, "more_body": False}

    async def send(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", ()))
        elif message["type"] == "http.response.body":
            self.chunks.append(message.get("body", b""))

    def response(self) -> TestResponse:
        return TestResponse(
            status=self.status,
            headers=tuple((k.decode("latin-1"), v.decode("latin-1")) for k, v in self.headers),
            body=b"".join(self.chunks),
        )


def _http_scope(
    method: str,
    target: str,
    headers: dict[str, str],
    client: tuple[str, int],
) -> dict[str, Any]:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in headers.items()],
        "server": ("testserver", 80),
        "client": client,
    }


class TestClient:
    """Drive an ``App`` through its ASGI interface.

    Entering the client freezes the app and runs its startup hooks;
    leaving runs the shutdown hooks::

        async with TestClient(app) as client:
            response = await client.get("/users/7")
            assert response.status == 200
    """

    __test__ = False  # Not a pytest test class

    __slots__ = ("app", "client_addr")

    def __init__(self, app: App, *, client_addr: tuple[str, int] = ("127.0.0.1", 0)) -> None:
        self.app = app
        self.client_addr = client_addr

    async def __aenter__(self) -> "TestClient":
        await self.app.startup()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.app.shutdown()

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send one request. *method* is passed to the app unchanged.

        A *json* value is encoded as the body and sets
        ``Content-Type: application/json`` unless *headers* override it.
        """
        all_headers = dict(headers or {})
        if json is not None:
            body = json_module.dumps(json).encode("utf-8")
            all_headers = {"content-type": "application/json", **all_headers}

        exchange = _Exchange(body=body or b"")
        scope = _http_scope(method, path, all_headers, self.client_addr)
        await self.app(scope, exchange.receive, exchange.send)
        return exchange.response()

    async def get(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("GET", path, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("HEAD", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("DELETE", path, **kwargs)

    async def options(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("OPTIONS", path, **kwargs)
