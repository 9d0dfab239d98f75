"""Test utilities for veer routers and applications.

Provides an in-process ASGI test client and a context factory for
exercising ``Router.dispatch`` directly::

    from veer.testing import TestClient, make_context
"""

from veer.testing.client import TestClient, build_scope
from veer.testing.context import make_context

__all__ = [
    "TestClient",
    "build_scope",
    "make_context",
]
