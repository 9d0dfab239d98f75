"""Veer exception hierarchy.

Shared across Router, Route, middleware, and the ASGI layer so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class VeerError(Exception):
    """Base for all veer-specific errors."""


class ConfigurationError(VeerError):
    """Raised when a registration call is invalid.

    Always raised synchronously from ``Router.route()``, ``collection()``,
    ``handle()`` and friends, before any state is changed.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(VeerError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. The ASGI handler
    turns it into a response carrying its status, detail and headers.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched and no continuation was supplied."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class ParamDecodeError(HTTPError):
    """400: a captured path parameter is not valid percent-encoding.

    ``value`` holds the raw, undecoded segment.
    """

    def __init__(self, value: str) -> None:
        super().__init__(status=400, detail=f"Failed to decode param '{value}'")
        object.__setattr__(self, "value", value)
