"""Middleware protocol.

A middleware is any callable matching::

    async def my_mw(ctx: Context) -> None: ...

No base class required, and no ``next``: once a route matches and its
method resolves, every middleware runs in registration order. The only
way to stop the pipeline is to raise, which hands the error to the
router's ``middleware_err`` hook.
"""

from collections.abc import Awaitable
from typing import Any, Protocol

from veer.context import Context


class Middleware(Protocol):
    """Protocol for veer middleware.

    Accepts both functions and callable objects, sync or async::

        # Function middleware
        async def authenticate(ctx: Context) -> None:
            if ctx.resource.meta.get("authenticate") and "user" not in ctx.state:
                raise HTTPError(401)

        # Class middleware
        class Fetch:
            async def __call__(self, ctx: Context) -> None:
                ...
    """

    def __call__(self, ctx: Context) -> Awaitable[Any] | Any: ...
