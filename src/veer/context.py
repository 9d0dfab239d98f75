"""Per-request dispatch context.

Provides:
- ``Context``: mutable request-scoped state. The router fills in
  ``route``, ``resource`` and ``params``; handlers and middleware write
  ``status``, ``body`` and headers.
- ``context_var`` / ``get_context()``: the in-flight ``Context`` for code
  that isn't handed it explicitly.

Thread safety:
    ``ContextVar`` is task-local under asyncio. Each request gets its own
    ``Context``; nothing on it is shared between requests.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from veer.http.request import Request
from veer.http.response import Response

if TYPE_CHECKING:
    from veer.routing.resource import Resource
    from veer.routing.route import Route


class Context:
    """Mutable state for one request.

    ``method`` starts as the request method and is what the router
    dispatches on; the HEAD fallback rewrites it to ``GET``. ``path`` is the
    raw, still percent-encoded request path. ``state`` is free for
    middleware to share data with handlers.
    """

    __slots__ = (
        "_headers",
        "body",
        "content_type",
        "method",
        "params",
        "path",
        "request",
        "resource",
        "route",
        "state",
        "status",
    )

    def __init__(self, request: Request) -> None:
        self.request = request
        self.method: str = request.method.upper()
        self.path: str = request.raw_path
        self.route: Route | None = None
        self.resource: Resource | None = None
        self.params: dict[str, str] = {}
        self.state: dict[str, Any] = {}
        self.status: int | None = None
        self.body: str | bytes | None = None
        self.content_type: str = "text/plain; charset=utf-8"
        # lowercased name -> (name as set, value)
        self._headers: dict[str, tuple[str, str]] = {}

    def __repr__(self) -> str:
        return f"<Context {self.method} {self.path!r} status={self.status}>"

    # -- Response headers --

    def set(self, name: str, value: str) -> None:
        """Set response header *name*, replacing any previous value."""
        self._headers[name.lower()] = (name, value)

    def get(self, name: str) -> str | None:
        """Current value of response header *name*, or ``None``."""
        entry = self._headers.get(name.lower())
        return entry[1] if entry is not None else None

    def remove(self, name: str) -> None:
        self._headers.pop(name.lower(), None)

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers.values())

    # -- Finalization --

    def to_response(self) -> Response:
        """Snapshot what has been written so far as a ``Response``.

        Nothing written means 404; a body without an explicit status
        means 200.
        """
        if self.status is None and self.body is None:
            status, body = 404, "Not Found"
        else:
            status = self.status if self.status is not None else 200
            body = self.body if self.body is not None else ""
        return Response(
            body=body,
            status=status,
            content_type=self.content_type,
            headers=self.headers,
        )


# -- Current context --

context_var: ContextVar[Context] = ContextVar("veer_context")
"""The in-flight context. Set by the ASGI handler around dispatch."""


def get_context() -> Context:
    """Return the context of the request being handled.

    Raises ``LookupError`` if called outside a request.
    """
    return context_var.get()
