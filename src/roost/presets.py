"""Preconfigured apps for the common server shapes.

Each preset wires CORS headers from the config, registers the given
endpoints, and (for app-style servers) the static asset routes. Pass an
existing ``App`` to add the same wiring to it instead of a new one.

- ``rest_app`` — JSON APIs.
- ``basic_web_app`` — server-rendered pages plus ``/static/``.
- ``spa_app`` — a single-page application: ``/static/``, ``main.js``,
  ``manifest.json``, and ``index.html`` for every client-side route.
"""

from collections.abc import Iterable

from roost.app import App
from roost.assets import AssetProvider, select_assets, spa_root, static_files
from roost.config import AppConfig
from roost.middleware.access_control import AccessControlMiddleware
from roost.routing.endpoint import Endpoint


def rest_app(
    config: AppConfig | None = None,
    endpoints: Iterable[Endpoint] = (),
    *,
    app: App | None = None,
) -> App:
    """An app for REST APIs: CORS headers and the given endpoints."""
    config = config or (app.config if app is not None else AppConfig())
    app = app or App(config)
    app.use(AccessControlMiddleware(config.access_control))
    app.add_endpoints(endpoints)
    return app


def _static_path(config: AppConfig) -> str:
    return "/" + config.static_prefix.strip("/") + "/{filepath:path}"


def basic_web_app(
    config: AppConfig | None = None,
    endpoints: Iterable[Endpoint] = (),
    *,
    app: App | None = None,
    assets: AssetProvider | None = None,
) -> App:
    """An app for server-rendered sites: REST wiring plus static assets.

    Assets come from *assets* when given, else from ``select_assets(config)``.
    """
    config = config or (app.config if app is not None else AppConfig())
    app = rest_app(config, endpoints, app=app)
    provider = assets or select_assets(config)
    app.add_endpoint(_static_path(config), static_files(provider), ["GET", "HEAD"])
    return app


def spa_app(
    config: AppConfig | None = None,
    endpoints: Iterable[Endpoint] = (),
    *,
    app: App | None = None,
    assets: AssetProvider | None = None,
) -> App:
    """An app for single-page applications.

    Every path not claimed by an endpoint or a static asset falls
    through to the SPA root handler, which serves ``index.html``.
    """
    config = config or (app.config if app is not None else AppConfig())
    provider = assets or select_assets(config)
    app = basic_web_app(config, endpoints, app=app, assets=provider)
    app.add_fallback("/{path:path}", spa_root(provider))
    return app
