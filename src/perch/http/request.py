"""Immutable HTTP request.

Built once from the ASGI scope. Vue pages read the host (dev
detection), the router's path parameters and the query string; the
body is never consumed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from perch._internal.asgi import Scope
from perch.http.headers import Headers
from perch.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: dict[str, str] = field(default_factory=dict)
    server: tuple[str, int] | None = None

    @property
    def host(self) -> str:
        """Host the client asked for: Host header, else the server address."""
        host = self.headers.get("host")
        if host:
            return host
        if self.server is not None:
            name, port = self.server
            return f"{name}:{port}"
        return ""

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy carrying the router's captured path parameters."""
        return replace(self, path_params=path_params)

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        server: Any = scope.get("server")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            server=tuple(server) if server else None,
        )
