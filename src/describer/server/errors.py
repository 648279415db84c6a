"""Error handling pipeline for describer requests.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error handlers or plain-text defaults.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from describer.errors import HTTPError
from describer.http.request import Request
from describer.http.response import Response
from describer.server.negotiation import negotiate

logger = logging.getLogger("describer.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    return negotiate(result)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Keep the exception's status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    response = Response(body=detail, content_type="text/plain; charset=utf-8").with_status(
        exc.status
    )
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        return (await call_error_handler(handler, request, exc)).with_status(500)

    body = f"Internal Server Error: {type(exc).__name__}: {exc}" if debug else "Internal Server Error"
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")
