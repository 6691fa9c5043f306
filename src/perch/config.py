"""Vue rendering configuration.

VueConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. Values derived at runtime (dev mode, root
directory, cached files) live on :class:`perch.vue.runtime.VueRuntime`.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class VueConfig:
    """Vue page configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = VueConfig(root_directory="frontend/vue", optimize_dependencies=False)
    """

    # Where the .vue / .js / .css files live. None = resolved from the mode
    # on the first request (see perch.vue.paths.default_location).
    root_directory: str | Path | None = None
    resource_package: str | None = None  # Installed package holding a vue/ directory

    # Force the mode instead of detecting it from the first request
    is_dev: bool | None = None

    # Only ship the components the route component needs
    optimize_dependencies: bool = True

    cache_control: str = "no-cache, no-store, must-revalidate"

    # File conventions
    key_marker: str = "/vue/"
    component_suffix: str = ".vue"
    layout_file: str = "vue/layout.html"
    max_walk_depth: int = 20

    # Client-side object that receives pathParams / queryParams / state
    state_namespace: str = "Vue.prototype.$perch"

    # @cdnWebjar/ placeholder targets
    dev_webjar_path: str = "/webjars/"
    cdn_webjar_url: str = "https://cdn.jsdelivr.net/webjars/org.webjars.npm/"
