"""Outgoing HTTP response.

A frozen value object. Handlers may return one (see
``veer.middleware.response_hooks``), the ASGI layer builds one from the
``Context`` otherwise, and ``veer.testing.TestClient`` hands one back.
Every ``with_*`` call produces a modified copy::

    Response("created", status=201).with_header("Location", "/widget/5")
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

_DEFAULT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, body, content type and extra headers of a response.

    ``headers`` keeps names as given and allows repeats; the
    content type travels separately.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = _DEFAULT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        return self.with_headers(((name, value),))

    def with_headers(
        self, headers: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> Response:
        """Copy with *headers* appended after the existing ones."""
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        return replace(self, headers=self.headers + tuple(pairs))

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        """The body encoded as UTF-8 if it was given as text."""
        body = self.body
        return body.encode("utf-8") if isinstance(body, str) else body

    @property
    def text(self) -> str:
        body = self.body
        return body.decode("utf-8") if isinstance(body, bytes) else body
