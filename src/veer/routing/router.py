"""Resource router with ordered route matching.

Routes, middleware, fallback handlers and override hooks are registered
during setup. ``dispatch()`` then runs each request through the same
sequence: lookup, method resolution, middleware, handler, hooks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from veer._internal.invoke import invoke
from veer._internal.types import FallbackHandler, Hook, NextHandler
from veer.config import RouterConfig
from veer.errors import ConfigurationError, NotFound
from veer.routing.fallbacks import FALLBACK_TYPES, FallbackHandlers
from veer.routing.outcome import resolve_outcome
from veer.routing.pattern import PathPattern, validate_path
from veer.routing.resource import Resource
from veer.routing.route import Route

if TYPE_CHECKING:
    from veer.context import Context

logger = logging.getLogger("veer.routing")


def parent_path(path: str) -> str:
    """Strip the last non-empty segment from *path*.

    Examples::

        "/users/:id"   -> "/users"
        "/users/:id/"  -> "/users"
        "/users"       -> ""
    """
    pieces = path.split("/")
    last = pieces.pop()
    if not last and pieces:
        pieces.pop()
    return "/".join(pieces)


def _return_value(ctx: Context, value: Any) -> Any:
    return value


def _reraise(ctx: Context, exc: BaseException) -> Any:
    raise exc


class Router:
    """Matches request paths to resources and dispatches by HTTP method.

    Usage::

        router = Router(case_sensitive=True)
        router.use(authenticate)
        router.route("/users/:id", {"GET": show_user, "PUT": update_user})
        await router.dispatch(ctx, next)

    Routes are tried in registration order; the first match wins.
    Registration is expected to finish before the router starts serving;
    mutating it concurrently with in-flight dispatches is unsupported.
    """

    __slots__ = (
        "_config",
        "_fallbacks",
        "_middleware",
        "_middleware_err",
        "_resource_err",
        "_resource_ok",
        "_routes",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        strict: bool | None = None,
        case_sensitive: bool | None = None,
    ) -> None:
        config = config or RouterConfig()
        if strict is not None:
            config = replace(config, strict=strict)
        if case_sensitive is not None:
            config = replace(config, case_sensitive=case_sensitive)
        self._config: RouterConfig = config
        self._routes: list[Route] = []
        self._middleware: list[Callable[..., Any]] = []
        self._fallbacks = FallbackHandlers()
        self._resource_ok: Hook = _return_value
        self._resource_err: Hook = _reraise
        self._middleware_err: Hook = _reraise

    def __repr__(self) -> str:
        return f"<Router routes={len(self._routes)} middleware={len(self._middleware)}>"

    # -- Introspection --

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes, in match-priority order."""
        return tuple(self._routes)

    @property
    def middleware(self) -> tuple[Callable[..., Any], ...]:
        """Registered middleware, in execution order."""
        return tuple(self._middleware)

    @property
    def fallbacks(self) -> FallbackHandlers:
        return self._fallbacks

    # -- Registration --

    def route(self, path: PathPattern, resource: object) -> Router:
        """Bind *path* to *resource*.

        *resource* is a ``Resource``, a mapping of method names to handlers
        (other keys become metadata), or an object whose class defines
        method-named handlers.
        """
        validate_path(path)
        resolved = Resource.coerce(resource)
        if not resolved.supported_methods():
            msg = "Resource should have at least one key with a valid HTTP verb"
            raise ConfigurationError(msg)

        route = Route.compile(path, resolved, self._config)
        self._routes.append(route)
        logger.debug("Registered route %r -> %r", path, resolved)
        return self

    def collection(
        self,
        path: str,
        pair: Mapping[str, Any] | None = None,
        *,
        collection: object = None,
        member: object = None,
    ) -> Router:
        """Register a member resource at *path* and its collection at the parent.

        ::

            router.collection("/users/:id", collection=users, member=user)
            # users at "/users", user at "/users/:id"
        """
        if pair is not None:
            collection = pair.get("collection", collection)
            member = pair.get("member", member)

        if collection is None:
            msg = (
                "Router.collection() requires a `collection` resource. "
                f"Path was: {path!r}"
            )
            raise ConfigurationError(msg)
        if not isinstance(path, str):
            msg = f"Router.collection() requires a string path, got {path!r}"
            raise ConfigurationError(msg)

        if member is not None:
            self.route(path, member)
        return self.route(parent_path(path), collection)

    def use(self, fn: Callable[..., Any]) -> Router:
        """Add a middleware, run for every matched, method-resolved request."""
        if not callable(fn):
            msg = "`use` requires a function"
            raise TypeError(msg)
        self._middleware.append(fn)
        return self

    def handle(self, type_name: str, handler: FallbackHandler) -> Router:
        """Replace one of the ``methodNotAllowed`` / ``OPTIONS`` / ``HEAD`` fallbacks."""
        if type_name not in FALLBACK_TYPES:
            msg = f"Invalid `type` argument to `handle()`: {type_name}"
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = "Handler must be a function"
            raise TypeError(msg)
        self._fallbacks = self._fallbacks.with_handler(type_name, handler)
        return self

    def apply(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Router:
        """Call ``fn(router, *args, **kwargs)``, for plugins that register several things."""
        if not callable(fn):
            msg = "`apply` requires a function"
            raise TypeError(msg)
        fn(self, *args, **kwargs)
        return self

    # -- Override hooks --

    def resource_ok(self, fn: Hook) -> Router:
        """Set the hook called with ``(ctx, value)`` when a handler returns."""
        self._resource_ok = _check_hook("resource_ok", fn)
        return self

    def resource_err(self, fn: Hook) -> Router:
        """Set the hook called with ``(ctx, exc)`` when a handler raises."""
        self._resource_err = _check_hook("resource_err", fn)
        return self

    def middleware_err(self, fn: Hook) -> Router:
        """Set the hook called with ``(ctx, exc)`` when a middleware raises."""
        self._middleware_err = _check_hook("middleware_err", fn)
        return self

    # -- Dispatch --

    def find(self, path: str) -> Route | None:
        """Return the first route matching *path*, or ``None``."""
        for route in self._routes:
            if route.match(path):
                return route
        return None

    async def dispatch(self, ctx: Context, next: NextHandler | None = None) -> Any:
        """Route *ctx* to its resource and run the handler pipeline.

        *next* is the host's continuation for unmatched paths. Without one,
        an unmatched path raises ``NotFound``. Returns the dispatch outcome
        (the value produced by the handler, fallback, or hook).
        """
        path = ctx.path
        route = self.find(path)

        if route is None:
            if next is None:
                raise NotFound(f"No route matches {ctx.method} {path!r}")
            logger.debug("No route for %s %s, delegating", ctx.method, path)
            return await invoke(next)

        ctx.route = route
        ctx.resource = route.resource
        ctx.params = route.params(path) or {}
        return await self.resolve(ctx, next)

    async def resolve(self, ctx: Context, next: NextHandler | None = None) -> Any:
        """Resolve ``ctx.method`` against the matched resource and run it.

        Expects ``ctx.resource`` to be populated. Also the re-entry point
        for the HEAD fallback after it rewrites the method.
        """
        method = ctx.method.upper()
        handler = ctx.resource.handler_for(method)

        if handler is None:
            fallbacks = self._fallbacks
            if method == "HEAD":
                logger.debug("HEAD fallback for %s", ctx.path)
                return await invoke(fallbacks.head, ctx, next, self)
            if method == "OPTIONS":
                logger.debug("OPTIONS fallback for %s", ctx.path)
                return await invoke(fallbacks.options, ctx)
            logger.debug("%s not allowed on %s", method, ctx.path)
            return await invoke(fallbacks.method_not_allowed, ctx)

        try:
            for fn in self._middleware:
                await invoke(fn, ctx)
        except Exception as exc:
            logger.debug("Middleware failed for %s %s: %r", method, ctx.path, exc)
            return resolve_outcome(await invoke(self._middleware_err, ctx, exc))

        try:
            result = await invoke(handler, ctx)
        except Exception as exc:
            logger.debug("Handler failed for %s %s: %r", method, ctx.path, exc)
            return resolve_outcome(await invoke(self._resource_err, ctx, exc))

        return resolve_outcome(await invoke(self._resource_ok, ctx, result))


def _check_hook(name: str, fn: Hook) -> Hook:
    if not callable(fn):
        msg = f"`{name}` requires a function"
        raise TypeError(msg)
    return fn
