"""Tests for describer.describe types and rendering."""

import dataclasses
import json

import pytest

from describer.describe.render import DEFAULT_DESCRIBE_CONFIG, DescribeConfig, render_json
from describer.describe.types import RouteInfo, Routes


class TestRouteInfo:
    def test_wire_shape_omits_missing_description(self) -> None:
        assert RouteInfo("GET", "/get").to_dict() == {"method": "GET", "uri": "/get"}

    def test_wire_shape_with_description(self) -> None:
        info = RouteInfo("GET", "/get", description="Fetch a thing")
        assert info.to_dict() == {"method": "GET", "uri": "/get", "description": "Fetch a thing"}

    def test_from_dict(self) -> None:
        info = RouteInfo.from_dict({"method": "POST", "uri": "/"})
        assert info == RouteInfo("POST", "/")

    def test_frozen(self) -> None:
        info = RouteInfo("GET", "/")
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.path = "/other"  # type: ignore[misc]


class TestRoutes:
    def test_sorted_by_path(self) -> None:
        routes = Routes([RouteInfo("GET", "/b"), RouteInfo("GET", "/a"), RouteInfo("GET", "/")])
        assert [info.path for info in routes.sorted()] == ["/", "/a", "/b"]

    def test_sorted_is_stable_for_equal_paths(self) -> None:
        routes = Routes([RouteInfo("POST", "/x"), RouteInfo("GET", "/x")])
        assert [info.method for info in routes.sorted()] == ["POST", "GET"]

    def test_sorted_returns_new_routes(self) -> None:
        routes = Routes([RouteInfo("GET", "/b"), RouteInfo("GET", "/a")])
        ordered = routes.sorted()
        assert isinstance(ordered, Routes)
        assert routes[0].path == "/b"

    def test_sorted_compares_code_points(self) -> None:
        routes = Routes([RouteInfo("GET", "/b"), RouteInfo("GET", "/B"), RouteInfo("GET", "/{id}")])
        assert [info.path for info in routes.sorted()] == ["/B", "/b", "/{id}"]


class TestRenderJson:
    def test_array_of_objects(self) -> None:
        routes = Routes([RouteInfo("GET", "/hello/{id}"), RouteInfo("POST", "/")])
        assert json.loads(render_json(routes)) == [
            {"method": "GET", "uri": "/hello/{id}"},
            {"method": "POST", "uri": "/"},
        ]

    def test_empty(self) -> None:
        assert render_json(Routes()) == b"[]"

    def test_returns_bytes(self) -> None:
        assert isinstance(render_json(Routes([RouteInfo("GET", "/")])), bytes)

    def test_non_ascii_written_as_utf8(self) -> None:
        raw = render_json(Routes([RouteInfo("GET", "/café")]))
        assert raw == '[{"method": "GET", "uri": "/café"}]'.encode()
        assert b"\\u" not in raw


class TestDescribeConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_DESCRIBE_CONFIG.content_type == "application/json"
        assert DEFAULT_DESCRIBE_CONFIG.render is render_json

    def test_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_DESCRIBE_CONFIG.content_type = "text/plain"  # type: ignore[misc]

    def test_render_is_not_bound(self) -> None:
        config = DescribeConfig()
        assert config.render(Routes()) == b"[]"
