"""Development server for ``App.run()``.

Serving is delegated to pounce, installed with the ``server`` extra.
"""

import logging

logger = logging.getLogger("veer.server")


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = True,
    app_path: str | None = None,
) -> None:
    """Serve *app* on *host*:*port* with a single pounce worker.

    *app* is the live ASGI callable. Pass *app_path* (``"module:attr"``)
    to let pounce re-import the app when it reloads.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    logger.info("Serving on http://%s:%d (reload=%s)", host, port, reload)
    Server(
        ServerConfig(host=host, port=port, workers=1, reload=reload),
        app,
        app_path=app_path,
    ).run()
