"""Route description types and the route tree protocol."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol


class RouteTree(Protocol):
    """Anything that can enumerate its registered routes.

    ``walk()`` yields one ``(method, pattern)`` pair per registered
    route, mounted sub-trees included, in a stable order. Patterns are
    absolute from the tree root and may contain the ``/*`` mount marker
    and ``{param}`` placeholders. ``Router`` satisfies this protocol.
    """

    def walk(self) -> Iterator[tuple[str, str]]: ...


@dataclass(frozen=True, slots=True)
class RouteInfo:
    """One described route: a method and a path relative to the request."""

    method: str
    path: str
    description: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Wire shape: ``method``, ``uri`` and ``description`` when present."""
        data = {"method": self.method, "uri": self.path}
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RouteInfo:
        return cls(
            method=data["method"],
            path=data["uri"],
            description=data.get("description"),
        )


class Routes(list[RouteInfo]):
    """An ordered list of described routes.

    Order is walk order. ``sorted()`` gives the deterministic order
    (by path, stable for equal paths) used when comparing results.
    """

    __slots__ = ()

    def sorted(self) -> Routes:
        return Routes(sorted(self, key=lambda info: info.path))

    def to_dicts(self) -> list[dict[str, str]]:
        return [info.to_dict() for info in self]
