"""Perch — server-rendered Vue component pages for ASGI.

Serves a layout that mounts one Vue route component, inlining only the
component files it needs plus a JSON snapshot of the request for
client-side hydration.

Basic usage::

    from perch import App, VueConfig

    app = App(VueConfig(root_directory="src/myapp/vue"))
    app.vue("/", "hello-world")
    app.vue("/users/{id}", "user-profile")

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ComponentNotFoundError",
    "ConfigurationError",
    "HTTPError",
    "MalformedTemplateError",
    "PerchError",
    "Request",
    "Response",
    "VueComponent",
    "VueConfig",
    "VueRuntime",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "VueConfig":
        from perch.config import VueConfig

        return VueConfig

    if name in ("VueComponent", "VueRuntime"):
        from perch import vue as _vue

        return getattr(_vue, name)

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name in (
        "ComponentNotFoundError",
        "ConfigurationError",
        "HTTPError",
        "MalformedTemplateError",
        "PerchError",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
