"""Tests for veer.routing.resource — method tables, metadata, coercion."""

import pytest

from veer.errors import ConfigurationError
from veer.routing.resource import HTTP_METHODS, Resource


def _get(ctx):
    return "get"


def _put(ctx):
    return "put"


class TestHTTPMethods:
    def test_common_verbs(self) -> None:
        for method in ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"):
            assert method in HTTP_METHODS

    def test_webdav_verbs(self) -> None:
        assert "PROPFIND" in HTTP_METHODS
        assert "MKCOL" in HTTP_METHODS

    def test_uppercase_only(self) -> None:
        assert all(method == method.upper() for method in HTTP_METHODS)


class TestResource:
    def test_handler_for(self) -> None:
        resource = Resource({"GET": _get})
        assert resource.handler_for("GET") is _get
        assert resource.handler_for("POST") is None

    def test_supported_methods_in_declaration_order(self) -> None:
        resource = Resource({"PUT": _put, "GET": _get})
        assert resource.supported_methods() == ("PUT", "GET")

    def test_contains(self) -> None:
        resource = Resource({"GET": _get})
        assert "GET" in resource
        assert "PUT" not in resource

    def test_rejects_unknown_method(self) -> None:
        with pytest.raises(ConfigurationError, match="not a recognized HTTP method"):
            Resource({"FETCH": _get})

    def test_rejects_lowercase_method(self) -> None:
        with pytest.raises(ConfigurationError):
            Resource({"get": _get})

    def test_rejects_non_callable_handler(self) -> None:
        with pytest.raises(TypeError, match="must be callable"):
            Resource({"GET": "nope"})

    def test_handlers_are_read_only(self) -> None:
        handlers = {"GET": _get}
        resource = Resource(handlers)
        handlers["PUT"] = _put
        assert resource.supported_methods() == ("GET",)

    def test_meta_is_read_only(self) -> None:
        resource = Resource({"GET": _get}, meta={"authenticate": True})
        with pytest.raises(TypeError):
            resource.meta["authenticate"] = False  # type: ignore[index]

    def test_repr(self) -> None:
        assert repr(Resource({"GET": _get, "PUT": _put})) == "<Resource [GET,PUT]>"
        assert repr(Resource({"GET": _get}, name="widget")) == "<Resource 'widget' [GET]>"


class TestFromMapping:
    def test_splits_handlers_and_meta(self) -> None:
        resource = Resource.from_mapping(
            {"authenticate": True, "GET": _get, "fetch": "widget", "PUT": _put}
        )
        assert resource.supported_methods() == ("GET", "PUT")
        assert dict(resource.meta) == {"authenticate": True, "fetch": "widget"}

    def test_name_key(self) -> None:
        resource = Resource.from_mapping({"name": "widget", "GET": _get})
        assert resource.name == "widget"
        assert "name" not in resource.meta

    def test_non_string_name_is_ignored(self) -> None:
        resource = Resource.from_mapping({"name": 7, "GET": _get})
        assert resource.name is None

    def test_non_callable_method_value_is_meta(self) -> None:
        resource = Resource.from_mapping({"GET": _get, "POST": "not a handler"})
        assert resource.supported_methods() == ("GET",)
        assert resource.meta["POST"] == "not a handler"

    def test_lowercase_method_key_is_meta(self) -> None:
        resource = Resource.from_mapping({"get": _get})
        assert resource.supported_methods() == ()
        assert resource.meta["get"] is _get


class TestFromObject:
    def test_methods_from_class(self) -> None:
        class Widget:
            def GET(self, ctx):
                return "widget"

            def DELETE(self, ctx):
                return None

            def helper(self):
                return None

        widget = Widget()
        resource = Resource.from_object(widget)
        assert resource.supported_methods() == ("GET", "DELETE")
        assert resource.handler_for("GET")(None) == "widget"
        assert resource.name == "Widget"

    def test_base_class_methods_come_first(self) -> None:
        class Base:
            def GET(self, ctx):
                return "base"

        class Child(Base):
            def PUT(self, ctx):
                return "child"

            def GET(self, ctx):
                return "child"

        resource = Resource.from_object(Child())
        assert resource.supported_methods() == ("GET", "PUT")
        assert resource.handler_for("GET")(None) == "child"

    def test_name_attribute(self) -> None:
        class Thing:
            name = "things"

            def GET(self, ctx):
                return None

        assert Resource.from_object(Thing()).name == "things"


class TestCoerce:
    def test_resource_passes_through(self) -> None:
        resource = Resource({"GET": _get})
        assert Resource.coerce(resource) is resource

    def test_mapping(self) -> None:
        assert Resource.coerce({"GET": _get}).supported_methods() == ("GET",)

    def test_object(self) -> None:
        class Thing:
            def POST(self, ctx):
                return None

        assert Resource.coerce(Thing()).supported_methods() == ("POST",)

    def test_none(self) -> None:
        with pytest.raises(ConfigurationError):
            Resource.coerce(None)
