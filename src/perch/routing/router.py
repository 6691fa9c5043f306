"""Path-template router.

Routes are registered during setup and compiled into regexes when the app
freezes. Templates use ``{name}`` segments with optional converters::

    /users/{id}          any single segment
    /users/{id:int}      digits only
    /files/{rest:path}   the remainder of the path, slashes included

Captured values stay strings; Vue pages hand them to the client as-is.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from perch.errors import ConfigurationError, MethodNotAllowed, NotFound

# converter name -> regex for one captured value
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

_PARAM_RE = re.compile(r"^\{(\w+)(?::(\w+))?\}$")


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]


def compile_path(path: str) -> re.Pattern[str]:
    """Compile a path template to an anchored regex with named groups.

    Raises:
        ConfigurationError: Unknown converter name.
    """
    parts: list[str] = []
    for segment in path.strip("/").split("/"):
        if not segment:
            continue
        param = _PARAM_RE.match(segment)
        if param is None:
            parts.append(re.escape(segment))
            continue
        name, converter = param.group(1), param.group(2) or "str"
        if converter not in CONVERTERS:
            msg = f"Unknown path converter {converter!r} in route {path!r}"
            raise ConfigurationError(msg)
        parts.append(f"(?P<{name}>{CONVERTERS[converter]})")
    return re.compile("^/" + "/".join(parts) + "$")


class Router:
    """Matches request paths against compiled routes, in registration order.

    Usage::

        router = Router()
        router.add(Route("/users/{id:int}", handler, frozenset({"GET"})))
        match = router.match("GET", "/users/42")
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[tuple[re.Pattern[str], Route]] = []

    def add(self, route: Route) -> None:
        self._routes.append((compile_path(route.path), route))

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route for *method* and *path*.

        ``HEAD`` falls back to ``GET`` routes.

        Raises:
            NotFound: No template matches *path*.
            MethodNotAllowed: Templates match, but none for *method*.
        """
        allowed: set[str] = set()
        for pattern, route in self._routes:
            found = pattern.match(path)
            if found is None:
                continue
            if method in route.methods or (method == "HEAD" and "GET" in route.methods):
                return RouteMatch(route=route, path_params=found.groupdict())
            allowed.update(route.methods)
        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound()
