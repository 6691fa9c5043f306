"""Vue page handler — renders the layout around one route component.

Per request:

1. Resolve dev/production (first request only) and pick the file set and
   resolver for that mode.
2. Resolve the route component's dependency bundle and fail fast if the
   component is not in it.
3. Inline ``@inlineFile`` directives into ``vue/layout.html``. Only then
   is the page state computed.
4. Fill the remaining placeholders in order: ``@componentRegistration`` (the
   bundle, immediately followed by the ``@serverState`` scripts),
   ``@routeComponent`` and ``@cdnWebjar/``.
"""

from __future__ import annotations

import logging
from typing import Any

from perch.errors import ComponentNotFoundError, ConfigurationError
from perch.http.request import Request
from perch.http.response import Response
from perch.vue.inliner import inline_files
from perch.vue.resolver import join_vue_files
from perch.vue.runtime import VueRuntime
from perch.vue.state import render_state

logger = logging.getLogger("perch.vue")


def route_tag(component: str) -> str:
    """``"my-comp"`` -> ``"<my-comp></my-comp>"``; literal tags pass through."""
    if component.startswith("<"):
        return component
    return f"<{component}></{component}>"


def component_id(route_component: str) -> str:
    """Local tag name of a route component: ``<my-comp :id="1">`` -> ``my-comp``."""
    name = route_component.removeprefix("<")
    for i, ch in enumerate(name):
        if ch in "> ":
            return name[:i]
    return name


class VueComponent:
    """Route handler serving a full page that mounts *component*.

    Usage::

        app.vue("/users/{id}", "user-profile")
        app.vue("/", '<hello-world greeting="hi"></hello-world>', state={"motd": "..."})

    Args:
        component: Component id, or a literal tag string starting with ``<``.
        state: Explicit page state. When ``None`` the runtime's state
            function is called with the request.
        runtime: Shared mode/cache holder. Defaults to the process-wide
            ``VueRuntime.shared()``.
    """

    __slots__ = ("_runtime", "component", "state")

    def __init__(
        self,
        component: str,
        state: Any = None,
        *,
        runtime: VueRuntime | None = None,
    ) -> None:
        self.component = component
        self.state = state
        self._runtime = runtime

    def __repr__(self) -> str:
        return f"VueComponent({self.component!r})"

    @property
    def runtime(self) -> VueRuntime:
        return self._runtime or VueRuntime.shared()

    def __call__(self, request: Request) -> Response:
        html = self.render(request)
        return Response(body=html).with_header("Cache-Control", self.runtime.config.cache_control)

    def render(self, request: Request) -> str:
        """Render the page HTML for *request*.

        Raises:
            ComponentNotFoundError: The component is not among the resolved
                dependencies.
            MalformedTemplateError: The layout inlines an unknown file.
            ConfigurationError: No layout file under the Vue root.
        """
        runtime = self.runtime
        config = runtime.config
        is_dev = runtime.resolve_mode(request)

        route_component = route_tag(self.component)
        cid = component_id(route_component)
        files = runtime.file_set()
        if config.optimize_dependencies:
            dependencies = runtime.resolver(files).resolve(cid)
        else:
            dependencies = join_vue_files(files)
        if cid not in dependencies:
            raise ComponentNotFoundError(route_component)

        layout = files.find(config.layout_file)
        if layout is None:
            msg = f"No {config.layout_file} under {runtime.root_directory}"
            raise ConfigurationError(msg)

        logger.debug("Rendering %s with %d component files", route_component, len(files))
        page = inline_files(layout.read_text(), files.auxiliary_files(), is_dev=is_dev)

        state = self.state if self.state is not None else runtime.state_function(request)
        server_state = render_state(
            request.path_params,
            request.query.to_dict(),
            state,
            namespace=config.state_namespace,
            encode=runtime.json_encoder,
        )
        webjars = config.dev_webjar_path if is_dev else config.cdn_webjar_url
        return (
            page.replace("@componentRegistration", "@componentRegistration@serverState")
            .replace("@componentRegistration", dependencies)
            .replace("@serverState", server_state)
            .replace("@routeComponent", route_component)
            .replace("@cdnWebjar/", webjars)
        )
