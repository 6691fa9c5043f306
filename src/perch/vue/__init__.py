"""Server-rendered Vue pages.

A ``VueComponent`` serves ``vue/layout.html`` with the route component,
the component files it depends on, and a JSON snapshot of the request
(path params, query params, state) for the client to hydrate from.

Layout placeholders::

    @inlineFile("/vue/...")        inline an auxiliary file
    @inlineFileDev("/vue/...")     ... in development only
    @inlineFileNotDev("/vue/...")  ... in production only
    @componentRegistration         component files + server state
    @routeComponent                the route component tag
    @cdnWebjar/                    /webjars/ in dev, the jsDelivr CDN otherwise
"""

from perch.vue.component import VueComponent, component_id, route_tag
from perch.vue.inliner import Directive, inline_files
from perch.vue.paths import AssetFile, FileSet, is_vue_file, normalize_key, walk_paths
from perch.vue.resolver import VueDependencyResolver, join_vue_files
from perch.vue.runtime import Mode, VueRuntime
from perch.vue.state import html_escape, render_state

__all__ = [
    "AssetFile",
    "Directive",
    "FileSet",
    "Mode",
    "VueComponent",
    "VueDependencyResolver",
    "VueRuntime",
    "component_id",
    "html_escape",
    "inline_files",
    "is_vue_file",
    "join_vue_files",
    "normalize_key",
    "render_state",
    "route_tag",
    "walk_paths",
]
