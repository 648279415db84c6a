"""Routing — compiled route table with O(path-depth) matching.

Routes are registered on an ``App`` or a ``RouteGroup`` during setup and
compiled into immutable ``Router`` instances when the app freezes.
Route groups compile to sub-routers mounted under a path prefix.
"""

from describer.routing.group import RouteGroup
from describer.routing.route import PathSegment, Route, RouteMatch
from describer.routing.router import Router, parse_path

__all__ = [
    "PathSegment",
    "Route",
    "RouteGroup",
    "RouteMatch",
    "Router",
    "parse_path",
]
