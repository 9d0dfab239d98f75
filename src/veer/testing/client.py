"""In-process ASGI client for tests.

Drives an ``App`` (or a bare ``Router``, wrapped in a default ``App``)
through its ASGI interface and collects what it sends back into a
``Response``, the same type handlers return.
"""

from __future__ import annotations

import json as json_module
from typing import Any
from urllib.parse import unquote

from veer._internal.asgi import Message, Scope
from veer._internal.invoke import invoke
from veer.app import App
from veer.http.response import Response
from veer.routing.router import Router


class TestClient:
    """Send requests to a veer app without a network.

    Usage::

        async with TestClient(router) as client:
            response = await client.get("/widget/1")
            assert response.status == 200

    Entering the context runs the app's startup hooks, leaving it runs
    the shutdown hooks. Response headers other than content-type end up
    in ``Response.headers``, lowercased, including ``content-length``.
    """

    __test__ = False  # not a pytest test class

    __slots__ = ("app",)

    def __init__(self, app: App | Router) -> None:
        self.app = app if isinstance(app, App) else App(app)

    async def __aenter__(self) -> TestClient:
        for hook in self.app._startup_hooks:
            await invoke(hook)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        for hook in self.app._shutdown_hooks:
            await invoke(hook)

    # -- Verbs --

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("HEAD", path, headers=headers)

    async def options(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("OPTIONS", path, headers=headers)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("DELETE", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """POST *body*, or *json* serialized with a JSON content type."""
        if json is not None:
            body = json_module.dumps(json).encode("utf-8")
            headers = {"content-type": "application/json", **(headers or {})}
        return await self.request("POST", path, headers=headers, body=body)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        return await self.request("PUT", path, headers=headers, body=body)

    # -- Core --

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Run one request through the app and return what it sent."""
        pending = [{"type": "http.request", "body": body or b"", "more_body": False}]
        sent: list[Message] = []

        async def receive() -> Message:
            return pending.pop() if pending else {"type": "http.disconnect"}

        async def send(message: Message) -> None:
            sent.append(message)

        await self.app(build_scope(method, path, headers=headers), receive, send)
        return _collect(sent)


def _collect(messages: list[Message]) -> Response:
    status = 200
    content_type = "text/plain; charset=utf-8"
    headers: list[tuple[str, str]] = []
    chunks: list[bytes] = []

    for message in messages:
        if message["type"] == "http.response.start":
            status = message["status"]
            for raw_name, raw_value in message.get("headers", ()):
                name = raw_name.decode("latin-1")
                value = raw_value.decode("latin-1")
                if name == "content-type":
                    content_type = value
                else:
                    headers.append((name, value))
        elif message["type"] == "http.response.body":
            chunks.append(message.get("body", b""))

    return Response(
        body=b"".join(chunks),
        status=status,
        content_type=content_type,
        headers=tuple(headers),
    )


def build_scope(
    method: str,
    path: str,
    *,
    headers: dict[str, str] | None = None,
) -> Scope:
    """ASGI HTTP scope for *path*, which may include a query string.

    *path* is taken as already percent-encoded, the way it would appear on
    the request line: ``raw_path`` keeps it and ``path`` is its decoded
    form.
    """
    raw_path, _, query = path.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "scheme": "http",
        "path": unquote(raw_path),
        "raw_path": raw_path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }
