"""Route self-description — route trees that explain themselves.

An ``OPTIONS`` request against any path returns the routes reachable
beneath that path, relative to it::

    from describer import App
    from describer.middleware import DescribeMiddleware

    app = App()
    app.add_middleware(DescribeMiddleware())

The pieces are usable on their own:

    resolve_routes -- filter and relativize a route tree for a path
    render_json    -- default wire encoding
    DescribeConfig -- content type and render function for the middleware
"""

from describer.describe.render import (
    DEFAULT_DESCRIBE_CONFIG,
    DescribeConfig,
    RenderFn,
    render_json,
)
from describer.describe.scope import normalize_pattern, path_segments, resolve_routes
from describer.describe.types import RouteInfo, Routes, RouteTree

__all__ = [
    "DEFAULT_DESCRIBE_CONFIG",
    "DescribeConfig",
    "RenderFn",
    "RouteInfo",
    "RouteTree",
    "Routes",
    "normalize_pattern",
    "path_segments",
    "render_json",
    "resolve_routes",
]
