"""Veer: a resource router for ASGI and other async hosts.

Map path patterns to resources (tables of HTTP method handlers), run a
shared middleware pipeline, and get 405 / OPTIONS / HEAD handling for
free.

Basic usage::

    from veer import App, Router

    async def show_user(ctx):
        ctx.body = f"user {ctx.params['id']}"

    router = Router()
    router.route("/users/:id", {"GET": show_user})

    app = App(router)
    app.run()

Inside another host, call ``await router.dispatch(ctx, next)`` with a
``Context`` and the host's continuation for unmatched paths.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Context",
    "HTTPError",
    "Handled",
    "Middleware",
    "NotFound",
    "ParamDecodeError",
    "Propagate",
    "Request",
    "Resource",
    "Response",
    "Route",
    "Router",
    "RouterConfig",
    "VeerError",
    "get_context",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "App": "veer.app",
    "AppConfig": "veer.config",
    "ConfigurationError": "veer.errors",
    "Context": "veer.context",
    "HTTPError": "veer.errors",
    "Handled": "veer.routing.outcome",
    "Middleware": "veer.middleware.protocol",
    "NotFound": "veer.errors",
    "ParamDecodeError": "veer.errors",
    "Propagate": "veer.routing.outcome",
    "Request": "veer.http.request",
    "Resource": "veer.routing.resource",
    "Response": "veer.http.response",
    "Route": "veer.routing.route",
    "Router": "veer.routing.router",
    "RouterConfig": "veer.config",
    "VeerError": "veer.errors",
    "get_context": "veer.context",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import veer`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
