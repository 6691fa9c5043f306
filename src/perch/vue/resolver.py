"""Component dependency resolution.

A component file registers one or more components::

    Vue.component("user-card", { template: "#user-card", ... })

and depends on every other registered component whose tag appears in it
(``<user-avatar ...>``). ``resolve`` returns the transitive closure for a
route component as one bundle, dependencies before dependents, so a page
only ships the components it can actually mount.
"""

from __future__ import annotations

import logging
import re

from perch.vue.paths import AssetFile, FileSet

logger = logging.getLogger("perch.vue")

_COMPONENT_RE = re.compile(r"""(?:Vue|app)\.component\s*\(\s*["']([\w-]+)["']""")
_TAG_RE = re.compile(r"<\s*([a-zA-Z][\w-]*)")


def bundle_chunk(file: AssetFile, text: str) -> str:
    """One file's contribution to a bundle, preceded by a marker comment."""
    return f"\n<!-- {file.name} -->\n{text}"


def join_vue_files(files: FileSet) -> str:
    """Concatenate every component file — the unoptimized bundle."""
    return "".join(bundle_chunk(f, f.read_text()) for f in files.component_files())


class VueDependencyResolver:
    """Maps component ids to the component files they need.

    Built once per FileSet. Bundles are memoized per id; concurrent
    first calls may both compute a bundle, the results are identical.
    """

    __slots__ = ("_bundles", "_direct", "_owners", "_texts")

    def __init__(self, files: FileSet) -> None:
        self._owners: dict[str, AssetFile] = {}
        self._texts: dict[AssetFile, str] = {}
        for file in files.component_files():
            text = file.read_text()
            self._texts[file] = text
            for match in _COMPONENT_RE.finditer(text):
                self._owners.setdefault(match.group(1), file)

        self._direct: dict[str, tuple[str, ...]] = {}
        for component_id, file in self._owners.items():
            deps = dict.fromkeys(
                tag
                for tag in _TAG_RE.findall(self._texts[file])
                if tag in self._owners and tag != component_id
            )
            self._direct[component_id] = tuple(deps)

        self._bundles: dict[str, str] = {}
        logger.debug(
            "Resolved %d components from %d component files",
            len(self._owners),
            len(self._texts),
        )

    @property
    def components(self) -> tuple[str, ...]:
        """Every registered component id, in discovery order."""
        return tuple(self._owners)

    def dependencies(self, component_id: str) -> list[AssetFile]:
        """Files needed by *component_id*, dependencies first. Empty if unknown."""
        if component_id not in self._owners:
            return []
        ordered: list[AssetFile] = []
        visited: set[str] = set()

        def visit(cid: str) -> None:
            if cid in visited:
                return
            visited.add(cid)
            for dep in self._direct[cid]:
                visit(dep)
            owner = self._owners[cid]
            if owner not in ordered:
                ordered.append(owner)

        visit(component_id)
        return ordered

    def resolve(self, component_id: str) -> str:
        """The bundle for *component_id*, or ``""`` if it is not registered."""
        bundle = self._bundles.get(component_id)
        if bundle is None:
            bundle = "".join(
                bundle_chunk(f, self._texts[f]) for f in self.dependencies(component_id)
            )
            bundle = self._bundles.setdefault(component_id, bundle)
        return bundle
