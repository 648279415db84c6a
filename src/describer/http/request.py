"""Immutable HTTP request.

Frozen metadata with async body access.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import Any

from describer._internal.asgi import Receive, Scope
from describer.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` never includes the query string.
    The body is read lazily through ``body()``, ``json()`` or ``text()``.
    """

    method: str
    path: str
    headers: Headers
    path_params: dict[str, str]
    http_version: str
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: body cache (dict contents are mutable even though the field is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy carrying the params captured by the router.

        The body cache is shared so a body read by middleware is not lost.
        """
        return replace(self, path_params=path_params)

    async def body(self) -> bytes:
        """Read the full request body (cached after the first call)."""
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        raw = await self.body()
        return json_module.loads(raw)

    async def text(self) -> str:
        raw = await self.body()
        return raw.decode("utf-8")

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            path_params={},
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
