"""HTTP request handling for the ASGI app.

Builds a Request and Context from an http scope, runs the router, and
sends the outcome back through ASGI send(). Lifespan and other scope
types are handled by ``veer.app.App``.
"""

from contextvars import Token
from typing import Any

from veer._internal.asgi import ASGIApp, Receive, Scope, Send
from veer.context import Context, context_var
from veer.errors import HTTPError
from veer.http.request import Request
from veer.http.response import Response
from veer.routing.router import Router
from veer.server.errors import handle_http_error, handle_internal_error
from veer.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    fallback: ASGIApp | None = None,
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the router.

    When *fallback* is given, unmatched paths are forwarded to it with the
    original scope, receive and send; otherwise the router answers 404.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    ctx = Context(request)
    token: Token[Context] = context_var.set(ctx)
    delegated = False

    async def forward() -> None:
        nonlocal delegated
        delegated = True
        assert fallback is not None
        await fallback(scope, receive, send)

    try:
        outcome: Any = await router.dispatch(ctx, forward if fallback is not None else None)
        if delegated:
            return
        response = outcome if isinstance(outcome, Response) else ctx.to_response()
    except HTTPError as exc:
        if delegated:
            raise
        response = handle_http_error(exc, request, debug)
    except Exception as exc:
        if delegated:
            raise
        response = handle_internal_error(exc, request, debug)
    finally:
        context_var.reset(token)

    await send_response(response, send, head=request.method.upper() == "HEAD")
