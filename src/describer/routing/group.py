"""Route groups — setup-time route collections compiled into sub-routers.

A ``RouteGroup`` collects routes and nested mounts while the app is
being set up. When the app freezes, each group compiles into its own
``Router``, mounted under the group's prefix in its parent.
"""

from collections.abc import Callable
from dataclasses import dataclass

from describer._internal.types import Handler
from describer.routing.route import Route
from describer.routing.router import Router, normalize_prefix


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


class RouteGroup:
    """A mountable collection of routes.

    Usage::

        users = RouteGroup()

        @users.route("/")
        def list_users(): ...

        @users.route("/{id:int}", methods=["GET", "DELETE"])
        def user(id: int): ...

        app.mount("/users", users)

    Groups nest: ``group.route_group("/admin")`` creates and mounts a
    child group in one step.
    """

    __slots__ = ("_built", "_mounts", "_pending_routes")

    def __init__(self) -> None:
        self._pending_routes: list[_PendingRoute] = []
        self._mounts: list[tuple[str, RouteGroup]] = []
        self._built = False

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path pattern relative to the group. Use ``{param}``
                for path parameters.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name.
        """

        def decorator(func: Handler) -> Handler:
            self.add_route(path, func, methods=methods, name=name)
            return func

        return decorator

    def add_route(
        self,
        path: str,
        handler: Handler,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> None:
        """Register a route handler directly (non-decorator form)."""
        self._check_not_built()
        self._pending_routes.append(_PendingRoute(path, handler, methods, name))

    def mount(self, prefix: str, group: "RouteGroup") -> "RouteGroup":
        """Mount *group* under *prefix* and return it."""
        self._check_not_built()
        normalize_prefix(prefix)
        self._mounts.append((prefix, group))
        return group

    def route_group(self, prefix: str) -> "RouteGroup":
        """Create a new group, mount it under *prefix*, and return it."""
        return self.mount(prefix, RouteGroup())

    def build(self) -> Router:
        """Compile this group and its mounts into a frozen ``Router``."""
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=methods,
                    name=pending.name,
                )
            )
        for prefix, group in self._mounts:
            router.mount(prefix, group.build())
        router.compile()
        self._built = True
        return router

    def _check_not_built(self) -> None:
        if self._built:
            msg = (
                "Cannot modify a route group after the app has started serving requests. "
                "Register routes and mounts before the first request."
            )
            raise RuntimeError(msg)
