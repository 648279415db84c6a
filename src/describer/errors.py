"""describer exception hierarchy.

Shared across Router, App, the request handler, and middleware so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class DescriberError(Exception):
    """Base for all describer-specific errors."""


class ConfigurationError(DescriberError):
    """Raised when app or route configuration is invalid.

    Typically raised while routes are registered or when the app freezes.
    """


class RenderError(DescriberError):
    """Raised by a render function that cannot serialize a route list."""


@dataclass(frozen=True, slots=True)
class HTTPError(DescriberError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by handlers. The request handler catches
    these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Carries an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
