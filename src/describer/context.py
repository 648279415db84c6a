"""Request-scoped context via ContextVar.

Provides:
- ``request_var``: the current ``Request`` for this task.
- ``router_var``: the compiled route tree serving the current request.

Both are set by the request handler before dispatch and reset after.
Outside a request, ``get_request()`` and ``get_router()`` raise
``LookupError``.
"""

from contextvars import ContextVar

from describer.http.request import Request
from describer.routing.router import Router

request_var: ContextVar[Request] = ContextVar("describer_request")
"""The current request. Set by the ASGI handler before dispatch."""

router_var: ContextVar[Router] = ContextVar("describer_router")
"""The root router of the app handling the current request."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


def get_router() -> Router:
    """Return the route tree serving the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return router_var.get()
