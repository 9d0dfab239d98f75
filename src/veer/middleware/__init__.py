"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: Context) -> None

Built-in helpers:
    response_hooks -- Router plugin mapping returned Responses and raised
                      HTTPErrors onto the context
"""

from veer.middleware.protocol import Middleware
from veer.middleware.responses import apply_response, response_hooks

__all__ = [
    "Middleware",
    "apply_response",
    "response_hooks",
]
