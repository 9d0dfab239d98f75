"""Write a Response to an ASGI ``send`` channel."""

from veer._internal.asgi import Send
from veer.http.response import Response

# statuses that never carry a message body
_BODYLESS = frozenset({204, 304})


def _encode_headers(response: Response, length: int) -> list[tuple[bytes, bytes]]:
    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    )
    headers.append((b"content-length", str(length).encode("latin-1")))
    return headers


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Emit the start and body messages for *response*.

    1xx, 204 and 304 responses go out with an empty body. With *head* the
    content-length still describes the full body but no body bytes are
    written.
    """
    status = response.status
    if status < 200 or status in _BODYLESS:
        body = b""
    else:
        body = response.body_bytes

    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": _encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": b"" if head else body})
