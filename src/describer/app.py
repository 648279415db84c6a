"""describer application class.

Mutable during setup (route registration, mounts, middleware).
Frozen at runtime when the first ASGI call arrives.
"""

import threading
from collections.abc import Callable
from typing import Any

from describer._internal.asgi import Receive, Scope, Send
from describer._internal.invoke import invoke
from describer._internal.types import ErrorHandler, Handler
from describer.config import AppConfig
from describer.middleware.protocol import Middleware
from describer.routing.group import RouteGroup
from describer.routing.router import Router
from describer.server.handler import handle_request


class App:
    """The describer application.

    Mutable during setup (routes, mounts, middleware, error handlers).
    Frozen at runtime when ``__call__()`` is first invoked.

    Usage::

        app = App(AppConfig(describe_routes=True))

        @app.route("/get")
        def get():
            return "Hello world!"

        api = app.route_group("/route")

        @api.route("/test/hello/{id}")
        def hello(id: str):
            return {"id": id}

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app, even when several workers receive their
        first request concurrently.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        # Compiled state (populated by _freeze)
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._routes: RouteGroup = RouteGroup()
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path pattern. Use ``{param}`` for path parameters.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name.
        """
        self._check_not_frozen()
        return self._routes.route(path, methods=methods, name=name)

    def mount(self, prefix: str, group: RouteGroup) -> RouteGroup:
        """Mount a route group under *prefix* and return it.

        Every path below the prefix is served by the group::

            users = RouteGroup()
            ...
            app.mount("/users", users)
        """
        self._check_not_frozen()
        return self._routes.mount(prefix, group)

    def route_group(self, prefix: str) -> RouteGroup:
        """Create a route group mounted under *prefix* and return it."""
        self._check_not_frozen()
        return self._routes.route_group(prefix)

    @property
    def router(self) -> Router:
        """The compiled root router. Freezes the app if needed."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline. First added runs outermost."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs startup/shutdown hooks and reports completion to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks in registration order."""
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Compile the route tree (mounted groups become sub-routers)
        self._router = self._routes.build()

        # 2. Capture middleware as an immutable tuple. The auto-installed
        #    describer goes last so user middleware (auth, CORS) sees
        #    OPTIONS requests first.
        middleware_list = list(self._middleware_list)
        if self.config.describe_routes:
            from describer.middleware.describe import DescribeMiddleware

            middleware_list.append(DescribeMiddleware())
        self._middleware = tuple(middleware_list)

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, mounts, and middleware before the first request."
            )
            raise RuntimeError(msg)
