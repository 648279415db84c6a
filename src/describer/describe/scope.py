"""Scope resolution — which routes live under a request path.

Paths are compared as segment lists, never as strings, so ``/route/test``
is not a prefix of ``/route/test2/inner``.
"""

from describer.describe.types import RouteInfo, Routes, RouteTree
from describer.routing.router import MOUNT_MARKER

_MOUNT_SEPARATOR = MOUNT_MARKER + "/"


def normalize_pattern(pattern: str) -> str:
    """Collapse mount markers so mounted sub-routers are transparent.

    ``/route/*/test/*/`` -> ``/route/test/``
    """
    return pattern.replace(_MOUNT_SEPARATOR, "/")


def path_segments(path: str) -> list[str]:
    """Split a path on ``/`` after dropping its leading slash.

    The root path is the empty list. A trailing slash is significant and
    shows up as a trailing empty segment::

        path_segments("/")             -> []
        path_segments("/route/test")   -> ["route", "test"]
        path_segments("/route/test/")  -> ["route", "test", ""]
    """
    if path in ("", "/"):
        return []
    return path.removeprefix("/").split("/")


def resolve_routes(tree: RouteTree, path: str) -> Routes:
    """Return the routes at or below *path*, relative to it.

    A route equal to *path* is reported as ``/``. Routes are returned in
    walk order and are not deduplicated.
    """
    scope = path_segments(path)
    depth = len(scope)
    routes = Routes()

    for method, pattern in tree.walk():
        segments = path_segments(normalize_pattern(pattern))
        # Shorter than the requested scope: cannot be a sub-route.
        if len(segments) < depth:
            continue
        if segments[:depth] != scope:
            continue
        routes.append(RouteInfo(method=method, path="/" + "/".join(segments[depth:])))

    return routes
