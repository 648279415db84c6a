"""describer — ASGI routing with self-describing route trees.

An ``OPTIONS`` request against any path returns the routes reachable
beneath that path, relative to it.

Basic usage::

    from describer import App, AppConfig

    app = App(AppConfig(describe_routes=True))

    @app.route("/get")
    def get():
        return "Hello world!"

    test = app.route_group("/route/test")

    @test.route("/hello/{id}")
    def hello(id: str):
        return {"id": id}

    # OPTIONS /route -> [{"method": "GET", "uri": "/test/hello/{id}"}]
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "DescribeConfig",
    "DescribeMiddleware",
    "DescriberError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Redirect",
    "RenderError",
    "Request",
    "Response",
    "RouteGroup",
    "RouteInfo",
    "Routes",
    "get_request",
    "get_router",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import describer`` fast while providing a clean top-level API.
    """
    if name == "App":
        from describer.app import App

        return App

    if name == "AppConfig":
        from describer.config import AppConfig

        return AppConfig

    if name == "Request":
        from describer.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from describer.http import response as _resp

        return getattr(_resp, name)

    if name == "RouteGroup":
        from describer.routing.group import RouteGroup

        return RouteGroup

    if name in ("DescribeConfig", "RouteInfo", "Routes"):
        from describer import describe as _describe

        return getattr(_describe, name)

    if name in ("DescribeMiddleware", "Middleware", "Next"):
        from describer import middleware as _mw

        return getattr(_mw, name)

    if name in ("get_request", "get_router"):
        from describer import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "ConfigurationError",
        "DescriberError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "RenderError",
    ):
        from describer import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
