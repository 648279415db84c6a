"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    DescribeMiddleware -- answers OPTIONS with the routes under the request path
"""

from describer.middleware.describe import DescribeMiddleware
from describer.middleware.protocol import Middleware, Next

__all__ = [
    "DescribeMiddleware",
    "Middleware",
    "Next",
]
