"""Vue asset discovery — path classification, dependency keys, directory walking.

Every file under the Vue root is either a *component file* (``.vue``,
concatenated into the page as component registrations) or an *auxiliary
file* (scripts, styles) that the layout pulls in with ``@inlineFile``.
Files are addressed by a platform-independent dependency key such as
``/vue/components/app.js``.
"""

from __future__ import annotations

import importlib.resources
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from perch.errors import ConfigurationError

DEFAULT_MARKER = "/vue/"
DEFAULT_SUFFIX = ".vue"


def is_vue_file(path: str | Path, suffix: str = DEFAULT_SUFFIX) -> bool:
    """True if *path* names a component definition file."""
    return str(path).endswith(suffix)


def normalize_key(path: str | Path, marker: str = DEFAULT_MARKER) -> str:
    """Rewrite *path* to its dependency key.

    Separators are forward-slashed and everything before the first
    *marker* segment is dropped::

        normalize_key(r"C:\\app\\vue\\js\\x.js")  # "/vue/js/x.js"

    Raises:
        ConfigurationError: If *marker* does not occur in the path.
    """
    text = str(path).replace("\\", "/")
    _, found, rest = text.partition(marker)
    if not found:
        msg = f"Asset path {text!r} is not under a {marker!r} directory"
        raise ConfigurationError(msg)
    return marker + rest


@dataclass(frozen=True, slots=True)
class AssetFile:
    """A discovered file under the Vue root. Content is read on demand."""

    path: Path
    key: str
    is_component: bool

    @classmethod
    def from_path(
        cls,
        path: Path,
        *,
        root: Path | None = None,
        marker: str = DEFAULT_MARKER,
        suffix: str = DEFAULT_SUFFIX,
    ) -> AssetFile:
        """Classify *path*.

        With *root*, only the part of the path from the root's own name
        down is searched for *marker*, so directories named like the
        marker above the root never leak into the key.
        """
        source: str | Path = path
        if root is not None:
            source = f"/{root.name}/{path.relative_to(root).as_posix()}"
        return cls(
            path=path,
            key=normalize_key(source, marker),
            is_component=is_vue_file(path, suffix),
        )

    @property
    def name(self) -> str:
        return self.path.name

    def read_text(self) -> str:
        """Read the file as UTF-8. Not cached; callers memoize per render."""
        return self.path.read_text(encoding="utf-8")


class FileSet:
    """Immutable snapshot of the files under a Vue root.

    Iteration order is the discovery order (sorted by path), so anything
    derived from a FileSet is deterministic.
    """

    __slots__ = ("_files",)

    def __init__(self, files: tuple[AssetFile, ...] = ()) -> None:
        self._files = files

    def __iter__(self) -> Iterator[AssetFile]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"FileSet({len(self._files)} files)"

    def component_files(self) -> list[AssetFile]:
        return [f for f in self._files if f.is_component]

    def auxiliary_files(self) -> list[AssetFile]:
        return [f for f in self._files if not f.is_component]

    def find(self, key_suffix: str) -> AssetFile | None:
        """First file whose dependency key ends with *key_suffix*."""
        for f in self._files:
            if f.key.endswith(key_suffix):
                return f
        return None


def walk_paths(
    root: str | Path,
    *,
    max_depth: int = 20,
    marker: str = DEFAULT_MARKER,
    suffix: str = DEFAULT_SUFFIX,
) -> FileSet:
    """Enumerate every regular file under *root*, at most *max_depth* levels deep.

    Raises:
        ConfigurationError: If *root* is not a directory, or a file's path
            from the root's name down does not contain *marker*.
    """
    root_path = Path(root).resolve()
    if not root_path.is_dir():
        msg = f"Vue root directory not found: {root_path}"
        raise ConfigurationError(msg)

    found: list[Path] = []
    base_depth = len(root_path.parts)
    for dirpath, dirnames, filenames in os.walk(root_path):
        current = Path(dirpath)
        depth = len(current.parts) - base_depth
        if depth >= max_depth - 1:
            dirnames.clear()
        found.extend(current / name for name in filenames if (current / name).is_file())

    return FileSet(
        tuple(
            AssetFile.from_path(p, root=root_path, marker=marker, suffix=suffix)
            for p in sorted(found)
        )
    )


def default_location(is_dev: bool, *, resource_package: str | None = None) -> Path:
    """Resolve the Vue root when none is configured.

    With a *resource_package*, production reads the installed package's
    ``vue`` directory while development prefers the source checkout
    (``src/<package>/vue``) so edits show up without reinstalling.
    Without one, both modes use ``./vue``.
    """
    if resource_package is None:
        return Path.cwd() / "vue"
    if is_dev:
        source = Path.cwd() / "src" / Path(*resource_package.split(".")) / "vue"
        if source.is_dir():
            return source
    return Path(str(importlib.resources.files(resource_package).joinpath("vue")))
