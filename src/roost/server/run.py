"""Server startup under pounce.

Maps the app's timeout settings onto the ASGI server: the idle timeout
becomes the keep-alive timeout, and the longer of the read and write
timeouts bounds each request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roost.app import App

logger = logging.getLogger("roost.server")


def run_server(app: App, host: str | None = None, port: int | None = None) -> None:
    """Serve *app* until the process is stopped.

    Requires the ``server`` extra (``pip install roost[server]``).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    cfg = app.config
    config = ServerConfig(
        host=host or cfg.host,
        port=port or cfg.port,
        workers=cfg.workers,
        reload=cfg.debug,
        log_level=cfg.log_level,
        keep_alive_timeout=float(cfg.idle_timeout),
        request_timeout=float(max(cfg.read_timeout, cfg.write_timeout)),
    )
    logger.info("serving on %s:%d", config.host, config.port)
    Server(config, app).run()
