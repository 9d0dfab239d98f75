"""Routing: ordered path matching and per-resource method dispatch.

Routes are registered during setup, each compiled once against the
router's configuration, and matched in registration order.
"""

from veer.routing.outcome import Handled, Propagate
from veer.routing.pattern import Matcher, PathSegment, compile_pattern
from veer.routing.resource import HTTP_METHODS, Resource
from veer.routing.route import Route
from veer.routing.router import Router

__all__ = [
    "HTTP_METHODS",
    "Handled",
    "Matcher",
    "PathSegment",
    "Propagate",
    "Resource",
    "Route",
    "Router",
    "compile_pattern",
]
