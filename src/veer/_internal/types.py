"""Callable shapes the router accepts. Any of them may be sync or async."""

from collections.abc import Callable
from typing import Any, TypeAlias

# handler(ctx)
Handler: TypeAlias = Callable[..., Any]

# hook(ctx, value) / hook(ctx, exc)
Hook: TypeAlias = Callable[..., Any]

# fallback(ctx), or fallback(ctx, next, router) for HEAD
FallbackHandler: TypeAlias = Callable[..., Any]

# next(), the host's continuation for unmatched paths
NextHandler: TypeAlias = Callable[[], Any]
