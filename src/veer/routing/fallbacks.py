"""Fallback handlers: what happens when a resource lacks the request method.

Three slots, seeded with defaults and replaced one at a time through
``Router.handle()``:

    methodNotAllowed(ctx)         405 + Allow
    OPTIONS(ctx)                  200 + Allow, body echoes the methods
    HEAD(ctx, next, router)       re-dispatch as GET, or 405 without GET
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from veer._internal.invoke import invoke
from veer._internal.types import FallbackHandler, NextHandler

if TYPE_CHECKING:
    from veer.context import Context
    from veer.routing.router import Router

logger = logging.getLogger("veer.routing")

# handle() type name -> FallbackHandlers field
FALLBACK_TYPES: dict[str, str] = {
    "methodNotAllowed": "method_not_allowed",
    "OPTIONS": "options",
    "HEAD": "head",
}


def allow_header(ctx: Context) -> str:
    """Comma-joined methods of the matched resource, in declaration order."""
    return ",".join(ctx.resource.supported_methods())


def method_not_allowed(ctx: Context) -> None:
    ctx.set("Allow", allow_header(ctx))
    ctx.status = 405
    ctx.body = "Method Not Allowed"


def options(ctx: Context) -> None:
    header = allow_header(ctx)
    ctx.set("Allow", header)
    ctx.status = 200
    ctx.body = f"Allow: {header}"


async def head(ctx: Context, next: NextHandler | None, router: Router) -> Any:
    """Serve HEAD through the GET handler.

    Only the effective method is rewritten; stripping the body is left
    to the transport.
    """
    if ctx.resource.handler_for("GET") is None:
        return await invoke(router.fallbacks.method_not_allowed, ctx)
    ctx.method = "GET"
    return await router.resolve(ctx, next)


@dataclass(frozen=True, slots=True)
class FallbackHandlers:
    """The three fallback slots a Router consults."""

    method_not_allowed: FallbackHandler = method_not_allowed
    options: FallbackHandler = options
    head: FallbackHandler = head

    def with_handler(self, type_name: str, handler: FallbackHandler) -> FallbackHandlers:
        """Return a copy with the slot named by *type_name* swapped out."""
        field_name = FALLBACK_TYPES[type_name]
        logger.debug("Overriding %s fallback with %r", type_name, handler)
        return replace(self, **{field_name: handler})
