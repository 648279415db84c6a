"""ASGI handler — translates ASGI scope/messages to describer types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through middleware and routing,
and sends the Response back through ASGI send().
"""

import inspect
from collections.abc import Callable
from contextvars import Token
from typing import Any

from describer._internal.asgi import Receive, Scope, Send
from describer._internal.invoke import invoke
from describer.context import request_var, router_var
from describer.errors import HTTPError
from describer.http.request import Request
from describer.http.response import Response
from describer.middleware.protocol import Next
from describer.routing.route import RouteMatch
from describer.routing.router import Router
from describer.server.errors import handle_http_error, handle_internal_error
from describer.server.negotiation import negotiate
from describer.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    # Request and route tree are visible to middleware for this request only
    token: Token[Request] = request_var.set(request)
    router_token: Token[Router] = router_var.set(router)

    try:

        async def dispatch(req: Request) -> Response:
            match = router.match(req.method, req.path)
            return await _invoke_handler(match, req)

        # Wrap middleware around the dispatch, first-added outermost
        handler = dispatch
        for mw in reversed(middleware):
            outer = handler

            async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
                return await _mw(req, _next)

            handler = make_next

        response = await handler(request)

    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)
    finally:
        router_var.reset(router_token)
        request_var.reset(token)

    await send_response(response, send)


async def _invoke_handler(match: RouteMatch, request: Request) -> Response:
    """Call the matched route handler, converting path params and return value."""
    handler = match.route.handler
    request = request.with_path_params(match.path_params)
    kwargs = _build_handler_kwargs(handler, request, match.path_params)
    result = await invoke(handler, **kwargs)
    return negotiate(result)


def _build_handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    path_params: dict[str, str],
) -> dict[str, Any]:
    """Inspect handler signature and build kwargs from request + path params.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, converted to the annotated type if possible)
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in path_params:
            value = path_params[name]
            if param.annotation is not inspect.Parameter.empty:
                try:
                    kwargs[name] = param.annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value

    return kwargs
