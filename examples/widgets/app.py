"""Widgets: resource metadata driving shared middleware.

Each resource declares what it needs instead of doing the work itself:

- ``authenticate``: a logged-in user is required (401 otherwise)
- ``fetch``: loads the record the request is about (404 if missing)
- ``allow``: decides whether the user may touch it (403 otherwise)

The router runs the same middleware for every matched request; the
middleware reads those keys off ``ctx.resource.meta``. Errors are raised
as ``HTTPError`` and turned into responses by the ``response_hooks``
plugin.

Run:
    cd examples/widgets && python app.py

Try:
    curl -u steph:chefcurry http://127.0.0.1:8000/widget/1
"""

import base64
import binascii
import json

from veer import App, HTTPError, Router
from veer.middleware import response_hooks
from veer.routing.resource import Resource

# ---------------------------------------------------------------------------
# In-memory data
# ---------------------------------------------------------------------------


_PASSWORDS = {
    "steph": "chefcurry",
    "dray": "teedup",
    "kev": "theservant",
    "klay": "rocco",
}

_USERS = {
    "steph": {"username": "steph", "age": 29},
    "dray": {"username": "dray", "age": 26},
    "kev": {"username": "kev", "age": 29},
    "klay": {"username": "klay", "age": 27},
}

_WIDGETS = {
    "1": {"id": "1", "owner": "steph"},
    "2": {"id": "2", "owner": "steph"},
    "3": {"id": "3", "owner": "dray"},
    "4": {"id": "4", "owner": "klay"},
}


def find_user(username: str, password: str) -> dict | None:
    if _PASSWORDS.get(username) != password:
        return None
    return _USERS.get(username)


async def find_widget(widget_id: str) -> dict | None:
    return _WIDGETS.get(widget_id)


async def delete_widget(widget_id: str) -> None:
    _WIDGETS.pop(widget_id, None)


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


def login(ctx) -> None:
    """Resolve HTTP Basic credentials into ``ctx.state["user"]``."""
    header = ctx.request.headers.get("authorization", "")
    scheme, _, encoded = header.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return
    username, _, password = decoded.partition(":")
    ctx.state["user"] = find_user(username, password)


def authenticate(ctx) -> None:
    if ctx.resource.meta.get("authenticate") and ctx.state.get("user") is None:
        challenge = ("WWW-Authenticate", 'Basic realm="widgets"')
        raise HTTPError(401, "Unauthorized", headers=(challenge,))


async def fetch(ctx) -> None:
    loader = ctx.resource.meta.get("fetch")
    if loader is None:
        return
    fetched = await loader(ctx)
    if fetched is None:
        raise HTTPError(404, "Not Found")
    ctx.state["fetched"] = fetched


def allow(ctx) -> None:
    check = ctx.resource.meta.get("allow")
    if check is not None and not check(ctx):
        raise HTTPError(403, "Forbidden")


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


async def show_widget(ctx) -> None:
    ctx.content_type = "application/json"
    ctx.body = json.dumps(ctx.state["fetched"])


async def remove_widget(ctx) -> None:
    await delete_widget(ctx.state["fetched"]["id"])
    ctx.status = 204


widget = Resource(
    {"GET": show_widget, "DELETE": remove_widget},
    name="widget",
    meta={
        "authenticate": True,
        "fetch": lambda ctx: find_widget(ctx.params["id"]),
        "allow": lambda ctx: ctx.state["fetched"]["owner"] == ctx.state["user"]["username"],
    },
)


def list_widgets(ctx) -> None:
    ctx.content_type = "application/json"
    ctx.body = json.dumps(list(_WIDGETS.values()))


router = Router()
router.apply(response_hooks())
router.use(login)
router.use(authenticate)
router.use(fetch)
router.use(allow)
router.collection(
    "/widget/:id",
    collection={"GET": list_widgets, "name": "widgets"},
    member=widget,
)

app = App(router)


if __name__ == "__main__":
    app.run()
