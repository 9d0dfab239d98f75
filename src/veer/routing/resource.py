"""Resources: per-route HTTP method tables.

A resource maps uppercase method names to handlers. Only names in
``HTTP_METHODS`` count as methods; everything else a plain mapping carries
is kept as metadata for middleware to read::

    router.route("/widget/:id", {
        "authenticate": True,
        "GET": show_widget,
        "DELETE": delete_widget,
    })
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from veer._internal.types import Handler
from veer.errors import ConfigurationError

# Methods a resource may implement (standard + WebDAV verbs)
HTTP_METHODS: tuple[str, ...] = (
    "ACL",
    "BIND",
    "CHECKOUT",
    "CONNECT",
    "COPY",
    "DELETE",
    "GET",
    "HEAD",
    "LINK",
    "LOCK",
    "M-SEARCH",
    "MERGE",
    "MKACTIVITY",
    "MKCALENDAR",
    "MKCOL",
    "MOVE",
    "NOTIFY",
    "OPTIONS",
    "PATCH",
    "POST",
    "PROPFIND",
    "PROPPATCH",
    "PURGE",
    "PUT",
    "REBIND",
    "REPORT",
    "SEARCH",
    "SOURCE",
    "SUBSCRIBE",
    "TRACE",
    "UNBIND",
    "UNLINK",
    "UNLOCK",
    "UNSUBSCRIBE",
)

_KNOWN_METHODS = frozenset(HTTP_METHODS)


class Resource:
    """An immutable HTTP method table with optional name and metadata.

    Handler order is declaration order; it drives the ``Allow`` header.
    """

    __slots__ = ("_handlers", "meta", "name")

    def __init__(
        self,
        handlers: Mapping[str, Handler],
        *,
        name: str | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        for method, handler in handlers.items():
            if method not in _KNOWN_METHODS:
                msg = f"{method!r} is not a recognized HTTP method"
                raise ConfigurationError(msg)
            if not callable(handler):
                msg = f"Handler for {method} must be callable, got {handler!r}"
                raise TypeError(msg)
        self._handlers: Mapping[str, Handler] = MappingProxyType(dict(handlers))
        self.name = name
        self.meta: Mapping[str, Any] = MappingProxyType(dict(meta or {}))

    def handler_for(self, method: str) -> Handler | None:
        """Return the handler for *method* (uppercase), or ``None``."""
        return self._handlers.get(method)

    def supported_methods(self) -> tuple[str, ...]:
        """Methods this resource implements, in declaration order."""
        return tuple(self._handlers)

    def __contains__(self, method: object) -> bool:
        return method in self._handlers

    def __repr__(self) -> str:
        methods = ",".join(self._handlers)
        if self.name:
            return f"<Resource {self.name!r} [{methods}]>"
        return f"<Resource [{methods}]>"

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Resource:
        """Split a plain mapping into handlers, ``name`` and metadata.

        A key counts as a handler only if it is exactly a recognized
        method name and its value is callable.
        """
        handlers: dict[str, Handler] = {}
        meta: dict[str, Any] = {}
        for key, value in mapping.items():
            if key in _KNOWN_METHODS and callable(value):
                handlers[key] = value
            elif key != "name":
                meta[key] = value
        name = mapping.get("name")
        return cls(handlers, name=name if isinstance(name, str) else None, meta=meta)

    @classmethod
    def from_object(cls, obj: object) -> Resource:
        """Build a resource from the method attributes an object's class defines.

        Only recognized method names are looked at, in class definition
        order (base classes first)::

            class Widget:
                def GET(self, ctx): ...
                def PUT(self, ctx): ...
        """
        handlers: dict[str, Handler] = {}
        for klass in reversed(type(obj).__mro__):
            for key in vars(klass):
                if key in _KNOWN_METHODS and key not in handlers:
                    handler = getattr(obj, key)
                    if callable(handler):
                        handlers[key] = handler
        name = getattr(obj, "name", None)
        return cls(handlers, name=name if isinstance(name, str) else type(obj).__name__)

    @classmethod
    def coerce(cls, value: object) -> Resource:
        """Return *value* as a ``Resource``."""
        if isinstance(value, Resource):
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        if value is None:
            msg = "Resource must not be None"
            raise ConfigurationError(msg)
        return cls.from_object(value)
