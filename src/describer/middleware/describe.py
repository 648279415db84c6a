"""Route self-description middleware.

Hijacks ``OPTIONS`` requests and answers with the routes reachable
beneath the request path, relative to it. Every other request passes
through untouched.
"""

import logging

from describer.context import router_var
from describer.describe.render import DEFAULT_DESCRIBE_CONFIG, DescribeConfig
from describer.describe.scope import resolve_routes
from describer.http.request import Request
from describer.http.response import Response
from describer.middleware.protocol import Next

logger = logging.getLogger("describer.describe")


class DescribeMiddleware:
    """Answer ``OPTIONS`` requests with a description of the route tree.

    ``OPTIONS /route`` on an app serving ``GET /route/get`` and
    ``GET /route/test/hello/{id}`` returns (default JSON encoding)::

        [{"method": "GET", "uri": "/get"},
         {"method": "GET", "uri": "/test/hello/{id}"}]

    Only the first config passed is used; without one the JSON default
    applies. Routes are listed in walk order and are not deduplicated.

    Usage::

        app.add_middleware(DescribeMiddleware())
        app.add_middleware(DescribeMiddleware(DescribeConfig(
            content_type="application/x-ndjson",
            render=render_ndjson,
        )))
    """

    __slots__ = ("config",)

    def __init__(self, *configs: DescribeConfig) -> None:
        self.config = configs[0] if configs else DEFAULT_DESCRIBE_CONFIG

    async def __call__(self, request: Request, next: Next) -> Response:
        tree = router_var.get(None)
        if tree is None or request.method != "OPTIONS":
            return await next(request)

        routes = resolve_routes(tree, request.path)
        try:
            raw = self.config.render(routes)
        except Exception as exc:
            logger.critical(
                "rendering OPTIONS description failed: %s",
                exc,
                extra={
                    "describe_method": request.method,
                    "describe_path": request.path,
                    "describe_routes": len(routes),
                },
            )
            return Response(body=b"", status=500, content_type="")

        return Response(body=raw, status=200, content_type=self.config.content_type)
