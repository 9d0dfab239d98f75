"""Response hooks plugin.

Lets resource handlers return a ``Response`` or raise an ``HTTPError``
instead of writing to the context themselves::

    router.apply(response_hooks())

    def show(ctx):
        widget = find(ctx.params["id"])
        if widget is None:
            raise HTTPError(404, "No such widget")
        return Response(widget.name)

Other return values are left alone and other exceptions propagate.
"""

from collections.abc import Callable
from typing import Any

from veer.context import Context
from veer.errors import HTTPError
from veer.http.response import Response
from veer.routing.outcome import Handled, Propagate
from veer.routing.router import Router


def apply_response(ctx: Context, response: Response) -> None:
    """Copy status, body, content type and headers of *response* onto *ctx*."""
    ctx.status = response.status
    ctx.body = response.body
    ctx.content_type = response.content_type
    for name, value in response.headers:
        ctx.set(name, value)


def response_hooks(*, errors: bool = True) -> Callable[[Router], None]:
    """Build a plugin for ``Router.apply``.

    With *errors* false only successful results are mapped and every
    exception keeps propagating.
    """

    def on_ok(ctx: Context, result: Any) -> Any:
        if isinstance(result, Response):
            apply_response(ctx, result)
        return result

    def on_err(ctx: Context, exc: Exception) -> Handled | Propagate:
        if not isinstance(exc, HTTPError):
            return Propagate(exc)
        response = Response(
            body=exc.detail or f"Error {exc.status}",
            status=exc.status,
            headers=exc.headers,
        )
        apply_response(ctx, response)
        return Handled()

    def plugin(router: Router) -> None:
        router.resource_ok(on_ok)
        if errors:
            router.resource_err(on_err)
            router.middleware_err(on_err)

    return plugin
