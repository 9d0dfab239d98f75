"""Veer ASGI application.

Wraps a Router so it can be served directly or mounted in front of
another ASGI app, which then receives every request the router doesn't
match.
"""

import logging
from collections.abc import Callable
from typing import Any

from veer._internal.asgi import ASGIApp, Receive, Scope, Send
from veer._internal.invoke import invoke
from veer.config import AppConfig
from veer.routing.router import Router
from veer.server.handler import handle_request

logger = logging.getLogger("veer.server")


class App:
    """ASGI 3.0 entry point around a ``Router``.

    Usage::

        router = Router().route("/", {"GET": index})
        app = App(router)

        # or in front of another ASGI app
        app = App(router, fallback=legacy_app)
    """

    __slots__ = (
        "_fallback",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(
        self,
        router: Router | None = None,
        config: AppConfig | None = None,
        *,
        fallback: ASGIApp | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = router if router is not None else Router()
        self._fallback = fallback
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []

    @property
    def router(self) -> Router:
        return self._router

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run at ASGI lifespan startup."""
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run at ASGI lifespan shutdown."""
        self._shutdown_hooks.append(func)
        return func

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with the pounce development server."""
        from veer.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.reload,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            if self._fallback is not None:
                await self._fallback(scope, receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            fallback=self._fallback,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Answer lifespan startup and shutdown, running the registered hooks."""
        while True:
            event = (await receive())["type"]
            if event == "lifespan.startup":
                try:
                    await _run_hooks(self._startup_hooks)
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif event == "lifespan.shutdown":
                await _run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return


async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
    for hook in hooks:
        await invoke(hook)
