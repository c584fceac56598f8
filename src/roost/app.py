"""Roost application class.

Mutable during setup (endpoints, middleware, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.types import Handler
from roost.config import AppConfig
from roost.middleware.chain import MiddlewareChain
from roost.middleware.protocol import Frame
from roost.routing.endpoint import Endpoint
from roost.routing.router import Router
from roost.server.dispatch import make_dispatcher
from roost.server.handler import handle_request

logger = logging.getLogger("roost.server")


class App:
    """The roost application.

    Mutable during setup (endpoints, middleware, hooks).
    Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.
    Freezing sorts the endpoints into dispatch order and builds the
    middleware chain around the router, exactly once.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app, even when several server workers call
        ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_chain",
        "_freeze_lock",
        "_frozen",
        "_handler",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._chain = MiddlewareChain()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Set by _freeze()
        self._handler: Handler | None = None

    # -- Endpoint registration --

    def add_endpoint(
        self,
        path: str | Endpoint,
        handler: Handler | None = None,
        methods: Iterable[str] = ("GET",),
    ) -> Endpoint:
        """Register an endpoint.

        Accepts either an ``Endpoint`` or its parts::

            app.add_endpoint("/users/{id}", get_user, ["GET"])
            app.add_endpoint(Endpoint.create("/users", list_users, ["GET"]))

        Pass ``methods=()`` to accept every method.
        """
        self._check_not_frozen()
        endpoint = self._as_endpoint(path, handler, methods)
        self._router.add(endpoint)
        return endpoint

    def add_endpoints(self, endpoints: Iterable[Endpoint]) -> None:
        for endpoint in endpoints:
            self.add_endpoint(endpoint)

    def route(self, path: str, *, methods: Iterable[str] = ("GET",)) -> Callable[[Handler], Handler]:
        """Register an endpoint via decorator.

        Args:
            path: URL path pattern. Use ``{param}`` for path parameters.
            methods: HTTP methods. Defaults to ``["GET"]``.
        """

        def decorator(func: Handler) -> Handler:
            self.add_endpoint(path, func, methods)
            return func

        return decorator

    def add_fallback(
        self,
        path: str | Endpoint,
        handler: Handler | None = None,
        methods: Iterable[str] = (),
    ) -> Endpoint:
        """Register a catch-all tried after every regular endpoint.

        Fallbacks keep their registration order and are not sorted.
        """
        self._check_not_frozen()
        endpoint = self._as_endpoint(path, handler, methods)
        self._router.add_fallback(endpoint)
        return endpoint

    # -- Middleware --

    def use(self, *frames: Frame) -> None:
        """Add middleware frames. The first frame ever added runs first."""
        self._check_not_frozen()
        for frame in frames:
            self._chain.use(frame)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> tuple[Endpoint, ...]:
        """Endpoints in dispatch order. Freezes the app."""
        self._ensure_frozen()
        return self._router.routes

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and serve it with pounce.

        Configuration errors (duplicate paths, bad placeholders) surface
        here, before a socket is bound.
        """
        self._ensure_frozen()

        from roost.server.run import run_server

        run_server(self, host, port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()
        assert self._handler is not None

        await handle_request(scope, receive, send, handler=self._handler)

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, so a configuration error is reported
        as ``lifespan.startup.failed`` and the server never serves.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Freeze the app and run the startup hooks in registration order."""
        self._ensure_frozen()
        await _run_hooks(self._startup_hooks)

    async def shutdown(self) -> None:
        """Run the shutdown hooks in registration order."""
        await _run_hooks(self._shutdown_hooks)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Sort and compile the route table (raises ConfigurationError)
        self._router.compile()

        # 2. Wrap the dispatcher in the middleware chain, outer-first
        self._handler = self._chain.build(make_dispatcher(self._router))

        self._frozen = True
        logger.debug(
            "app frozen: %d routes, %d middleware frames",
            len(self._router.routes),
            len(self._chain),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register endpoints and middleware before calling app.run()."
            )
            raise RuntimeError(msg)

    @staticmethod
    def _as_endpoint(
        path: str | Endpoint,
        handler: Handler | None,
        methods: Iterable[str],
    ) -> Endpoint:
        if isinstance(path, Endpoint):
            return path
        if handler is None:
            msg = f"add_endpoint({path!r}) needs a handler"
            raise TypeError(msg)
        return Endpoint.create(path, handler, methods)


async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
    for hook in hooks:
        result = hook()
        if inspect.isawaitable(result):
            await result
