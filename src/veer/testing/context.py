"""Context factory for driving ``Router.dispatch`` without ASGI."""

from urllib.parse import unquote

from veer.context import Context
from veer.http.headers import Headers
from veer.http.request import Request


def make_context(
    method: str,
    path: str,
    *,
    headers: dict[str, str] | None = None,
) -> Context:
    """Build a fresh ``Context`` for a request to *path*.

    Usage::

        ctx = make_context("GET", "/users/42")
        await router.dispatch(ctx)
        assert ctx.params == {"id": "42"}
    """
    path_part, _, query_string = path.partition("?")
    request = Request(
        method=method,
        path=unquote(path_part),
        raw_path=path_part,
        query_string=query_string,
        headers=Headers.from_dict(headers or {}),
    )
    return Context(request)
