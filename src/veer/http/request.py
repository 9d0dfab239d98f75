"""Incoming HTTP request.

Request metadata is frozen; the router never rewrites it. Whatever
dispatch changes (the effective method on HEAD, matched params) lives on
the ``Context`` instead.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from veer._internal.asgi import Receive, Scope
from veer.http.headers import Headers


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """One HTTP request as the host delivered it.

    ``raw_path`` is the path exactly as it appeared on the request line,
    percent-escapes intact; routing matches against it. ``path`` is the
    server's decoded copy.
    """

    method: str
    path: str
    raw_path: str
    query_string: str
    headers: Headers
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    _receive: Receive = _no_body
    # holds the body once read; the dict itself is mutable
    _body: dict[str, bytes] = field(default_factory=dict, repr=False, compare=False)

    @property
    def url(self) -> str:
        """Raw path plus query string, as requested."""
        return f"{self.raw_path}?{self.query_string}" if self.query_string else self.raw_path

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks as they arrive. Consumes the ASGI receive channel."""
        more = True
        while more:
            message = await self._receive()
            more = message.get("more_body", False)
            if chunk := message.get("body", b""):
                yield chunk

    async def body(self) -> bytes:
        """The whole body. Read once, then served from memory."""
        if "body" not in self._body:
            self._body["body"] = b"".join([chunk async for chunk in self.stream()])
        return self._body["body"]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json.loads(await self.body())

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build a request from an ASGI HTTP scope.

        Servers that omit ``raw_path`` get ``path`` in its place.
        """
        raw_path = scope.get("raw_path")
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            raw_path=raw_path.decode("latin-1") if raw_path else scope["path"],
            query_string=scope.get("query_string", b"").decode("latin-1"),
            headers=Headers(scope.get("headers", ())),
            http_version=scope.get("http_version", "1.1"),
            server=(server[0], server[1]) if server else None,
            client=(client[0], client[1]) if client else None,
            _receive=receive,
        )
