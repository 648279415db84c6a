"""Compiled router with trie-based path matching and mounted sub-routers.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. A sub-router mounted under a
prefix owns every path below that prefix.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from describer.errors import ConfigurationError, MethodNotAllowed, NotFound
from describer.routing.params import param_regex
from describer.routing.route import PathSegment, Route, RouteMatch

# Marker inserted between a mount prefix and the sub-router's patterns
# in walk() output: "/route" + "/get" -> "/route/*/get".
MOUNT_MARKER = "/*"

_FLASK_PARAM = re.compile(r"<[^<>/]+>")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}"    -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [..., PathSegment("{path:path}", is_param=True, param_type="path")]
    """
    if _FLASK_PARAM.search(path):
        msg = (
            f"Route {path!r} uses <param> syntax. "
            "Path parameters are written as {param} or {param:type}."
        )
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def normalize_prefix(prefix: str) -> str:
    """Normalize a mount prefix to ``/a/b`` form (``""`` for the root).

    Raises ``ConfigurationError`` for prefixes that are not absolute or
    that contain path parameters.
    """
    if not prefix.startswith("/"):
        msg = f"Mount prefix {prefix!r} must start with '/'."
        raise ConfigurationError(msg)
    if "{" in prefix or "*" in prefix:
        msg = f"Mount prefix {prefix!r} must be a static path."
        raise ConfigurationError(msg)
    return prefix.rstrip("/")


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_all_route", "children", "param_child", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all route (path converter)
        self.catch_all_route: _CatchAllEdge | None = None
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge — consumes the remaining path."""

    param_name: str
    route_by_method: dict[str, Route]


@dataclass(frozen=True, slots=True)
class _Mount:
    """A sub-router attached under a static prefix."""

    prefix: str
    parts: tuple[str, ...]
    router: "Router"


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        api = Router()
        api.add(Route("/users/{id:int}", handler, frozenset({"GET"})))
        api.compile()

        root = Router()
        root.add(Route("/health", handler, frozenset({"GET"})))
        root.mount("/api", api)
        root.compile()

        match = root.match("GET", "/api/users/42")
        list(root.walk())  # [("GET", "/health"), ("GET", "/api/*/users/{id:int}")]
    """

    __slots__ = ("_compiled", "_mounts", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._mounts: list[_Mount] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        self._check_not_compiled()
        if not route.path.startswith("/"):
            msg = f"Route path {route.path!r} must start with '/'."
            raise ConfigurationError(msg)

        segments = parse_path(route.path)
        node = self._root

        for seg in segments:
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                if node.catch_all_route is None:
                    node.catch_all_route = _CatchAllEdge(
                        param_name=seg.param_name or "path",
                        route_by_method={},
                    )
                for method in route.methods:
                    node.catch_all_route.route_by_method[method] = route
                return

            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _ParamEdge(
                        param_name=seg.param_name or "",
                        param_type=seg.param_type,
                        regex=param_regex(seg.param_type),
                        node=_TrieNode(),
                    )
                elif node.param_child.param_name != seg.param_name:
                    msg = (
                        f"Route {route.path!r} names parameter {seg.param_name!r} where "
                        f"another route uses {node.param_child.param_name!r}."
                    )
                    raise ConfigurationError(msg)
                node = node.param_child.node
            else:
                if seg.value not in node.children:
                    node.children[seg.value] = _TrieNode()
                node = node.children[seg.value]

        for method in route.methods:
            node.routes_by_method[method] = route

    def mount(self, prefix: str, router: "Router") -> None:
        """Attach *router* under *prefix*. Must be called before compile().

        Every request path below the prefix is delegated to the
        sub-router with the prefix stripped.
        """
        self._check_not_compiled()
        normalized = normalize_prefix(prefix)
        parts = tuple(p for p in normalized.split("/") if p)
        self._mounts.append(_Mount(prefix=normalized, parts=parts, router=router))

    @property
    def routes(self) -> list[Route]:
        """Routes registered directly on this router, in trie order.

        Sub-router routes are reached through ``walk()``.
        """
        seen: set[int] = set()
        result: list[Route] = []
        self._collect_routes(self._root, seen, result)
        return result

    def _collect_routes(
        self,
        node: _TrieNode,
        seen: set[int],
        result: list[Route],
    ) -> None:
        for route in node.routes_by_method.values():
            if id(route) not in seen:
                seen.add(id(route))
                result.append(route)

        for child in node.children.values():
            self._collect_routes(child, seen, result)

        if node.param_child is not None:
            self._collect_routes(node.param_child.node, seen, result)

        if node.catch_all_route is not None:
            for route in node.catch_all_route.route_by_method.values():
                if id(route) not in seen:
                    seen.add(id(route))
                    result.append(route)

    def walk(self) -> Iterator[tuple[str, str]]:
        """Yield ``(method, pattern)`` for every route reachable from here.

        Own routes come first (methods sorted per route), then each mount
        in mount order. Mounted patterns carry the subtree marker, so a
        route ``/get`` mounted at ``/route`` is reported as ``/route/*/get``.
        """
        for route in self.routes:
            for method in sorted(route.methods):
                yield method, route.path
        for mount in self._mounts:
            for method, pattern in mount.router.walk():
                yield method, f"{mount.prefix}{MOUNT_MARKER}{pattern}"

    def compile(self) -> None:
        """Freeze the router. No more routes or mounts can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})

        if result is not None:
            node, params = result
            if method in node.routes_by_method:
                return RouteMatch(route=node.routes_by_method[method], path_params=params)
            raise MethodNotAllowed(frozenset(node.routes_by_method))

        for mount in self._mounts:
            depth = len(mount.parts)
            if tuple(parts[:depth]) == mount.parts:
                return mount.router.match(method, "/" + "/".join(parts[depth:]))

        raise NotFound(f"No route matches {method} {path!r}")

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[_TrieNode, dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        if index == len(parts):
            if node.routes_by_method:
                return node, params
            return None

        part = parts[index]

        # 1. Static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter child
        if node.param_child is not None:
            edge = node.param_child
            if edge.regex.match(part):
                new_params = {**params, edge.param_name: part}
                result = self._match_node(edge.node, parts, index + 1, new_params)
                if result is not None:
                    return result

        # 3. Catch-all
        if node.catch_all_route is not None:
            remaining = "/".join(parts[index:])
            new_params = {**params, node.catch_all_route.param_name: remaining}
            synthetic = _TrieNode()
            synthetic.routes_by_method = node.catch_all_route.route_by_method
            return synthetic, new_params

        return None

    def _check_not_compiled(self) -> None:
        if self._compiled:
            msg = "Cannot add routes or mounts after compilation."
            raise RuntimeError(msg)
