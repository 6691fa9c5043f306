"""Perch exception hierarchy.

Shared across the Vue pipeline, the router and the ASGI handler so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when the Vue setup is invalid.

    Missing root directory, missing layout file, asset paths outside the
    ``/vue/`` root.
    """


class MalformedTemplateError(PerchError):
    """An ``@inlineFile`` directive references a file that was not discovered.

    A deployment defect, never retried. The offending template line is kept
    on ``line`` for diagnostics.
    """

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Invalid path found: {line}")


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or handlers. The ASGI handler turns these into
    a response carrying the status and detail.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class ComponentNotFoundError(HTTPError):
    """500 — the resolved dependency bundle lacks the requested component.

    The detail names the route component tag exactly as it would have
    been mounted, e.g. ``<my-comp></my-comp>``.
    """

    def __init__(self, route_component: str) -> None:
        super().__init__(status=500, detail=f"Route component not found: {route_component}")
