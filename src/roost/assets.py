"""Static assets for app-style servers.

Assets come from one of two places:

- ``DirectoryAssets`` — files on disk, re-read on every request. Used
  while developing the front end.
- ``PackageAssets`` — files bundled inside an installed Python package
  (``importlib.resources``). Used for releases, so the server ships as
  a single installable artifact.

``select_assets`` picks one from the app config. ``static_files`` and
``spa_root`` turn a provider into handlers.
"""

import logging
import mimetypes
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Protocol

from roost.config import AppConfig
from roost.errors import ConfigurationError
from roost.http.request import Request
from roost.http.writer import ResponseWriter
from roost.middleware.protocol import Handler

logger = logging.getLogger("roost.server")


class AssetProvider(Protocol):
    """Resolves a relative asset name to its bytes."""

    def read(self, name: str) -> bytes | None: ...


def _clean_name(name: str) -> str | None:
    """Normalize *name*; ``None`` if it escapes the asset root."""
    parts = PurePosixPath(name.lstrip("/")).parts
    if any(part == ".." for part in parts):
        return None
    return "/".join(parts)


class DirectoryAssets:
    """Assets read from a directory on disk.

    Security: resolves symlinks and verifies the final path is within
    the configured directory to prevent path traversal.
    """

    __slots__ = ("directory",)

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory).resolve()

    def read(self, name: str) -> bytes | None:
        relative = _clean_name(name)
        if relative is None:
            return None
        file_path = (self.directory / relative).resolve()
        if not file_path.is_relative_to(self.directory) or not file_path.is_file():
            return None
        return file_path.read_bytes()


class PackageAssets:
    """Assets bundled inside an importable package."""

    __slots__ = ("_root",)

    def __init__(self, package: str, directory: str | Path = "app") -> None:
        try:
            root = resources.files(package).joinpath(str(directory))
        except ModuleNotFoundError as exc:
            msg = f"unable to load application static assets: {exc}"
            raise ConfigurationError(msg) from exc
        if not root.is_dir():
            msg = (
                f"unable to load application static assets: "
                f"{package!r} has no {str(directory)!r} directory"
            )
            raise ConfigurationError(msg)
        self._root: Traversable = root

    def read(self, name: str) -> bytes | None:
        relative = _clean_name(name)
        if relative is None:
            return None
        node = self._root
        for part in relative.split("/"):
            if part:
                node = node.joinpath(part)
        if not node.is_file():
            return None
        return node.read_bytes()


def select_assets(config: AppConfig) -> AssetProvider:
    """Disk assets in development, the package bundle otherwise.

    Raises ``ConfigurationError`` if a release build has no
    ``app_package`` to load from.
    """
    if config.is_development:
        return DirectoryAssets(config.app_directory)
    if config.app_package is None:
        msg = (
            "unable to load application static assets: set AppConfig.app_package "
            "or use version='development' to serve from disk"
        )
        raise ConfigurationError(msg)
    return PackageAssets(config.app_package, config.app_directory)


def _not_found(writer: ResponseWriter) -> None:
    writer.headers.set("Content-Type", "text/plain; charset=utf-8")
    writer.write_header(404)
    writer.write("Not found")


def static_files(
    provider: AssetProvider,
    *,
    param: str = "filepath",
    cache_control: str = "public, max-age=3600",
) -> Handler:
    """Handler serving ``request.path_params[param]`` from *provider*.

    Register it on a catch-all path::

        app.add_endpoint("/static/{filepath:path}", static_files(assets), ["GET", "HEAD"])
    """

    async def serve_static(request: Request, writer: ResponseWriter) -> None:
        name = request.path_params.get(param, "")
        body = provider.read(name) if name else None
        if body is None:
            _not_found(writer)
            return

        content_type, _ = mimetypes.guess_type(name)
        writer.headers.set("Content-Type", content_type or "application/octet-stream")
        writer.headers.set("Cache-Control", cache_control)
        writer.headers.set("Content-Length", str(len(body)))
        writer.write_header(200)
        if request.method != "HEAD":
            writer.write(body)

    return serve_static


def _write_asset(writer: ResponseWriter, provider: AssetProvider, name: str, content_type: str) -> None:
    body = provider.read(name)
    if body is None:
        logger.error("application asset %r is missing", name)
        _not_found(writer)
        return
    writer.headers.set("Content-Type", content_type)
    writer.write(body)


def spa_root(provider: AssetProvider) -> Handler:
    """Handler for a single-page application's client-side routes.

    - any path containing ``/main.js`` → ``main.js``
    - any path containing ``/manifest.json`` → ``manifest.json``
    - any other path with a dot (a file that wasn't found) → 404
    - everything else → ``index.html``, for the client router to handle
    """

    async def serve_spa(request: Request, writer: ResponseWriter) -> None:
        path = request.path

        if "/main.js" in path:
            _write_asset(writer, provider, "main.js", "text/javascript")
            return

        if "/manifest.json" in path:
            _write_asset(writer, provider, "manifest.json", "application/json")
            return

        if "." in path:
            _not_found(writer)
            return

        _write_asset(writer, provider, "index.html", "text/html")

    return serve_spa
