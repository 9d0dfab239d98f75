"""Invoke helpers: call sync or async callables uniformly.

Resource handlers, middleware, fallback handlers and override hooks can
all be ``def`` or ``async def``. Any code that calls one of them goes
through this helper so the sync/async check lives in exactly one place.

Usage::

    from veer._internal.invoke import invoke

    result = await invoke(handler, ctx)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def get(ctx):
            ctx.body = "hello"

        # async: returns a coroutine, awaited here
        async def get(ctx):
            ctx.body = await load_greeting()
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
