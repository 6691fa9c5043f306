"""Process-lifetime Vue state: mode, root directory, cached files and resolver.

Every value here is written at most once, from unset to a concrete value,
on the first request that needs it. Development re-walks the root and
rebuilds the resolver per request; production computes both once.

Thread safety:
    Each write-once field sits behind a ``_Once`` guard (Lock +
    double-check), the same freeze pattern ``App`` uses. After the first
    write, reads are lock-free. An initializer that raises leaves its
    field unset, so a failed render never poisons later requests.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Generic, TypeVar

from perch.config import VueConfig
from perch.errors import ConfigurationError
from perch.http.request import Request
from perch.vue.paths import FileSet, default_location, walk_paths
from perch.vue.resolver import VueDependencyResolver
from perch.vue.state import JsonEncoder

logger = logging.getLogger("perch.vue")

T = TypeVar("T")

IsDevFunction = Callable[[Request], bool]
StateFunction = Callable[[Request], Any]
WalkFunction = Callable[[Path, VueConfig], FileSet]


class Mode(Enum):
    UNINITIALIZED = "uninitialized"
    DEV = "dev"
    PRODUCTION = "production"


class _Once(Generic[T]):
    """A value computed by the first caller and frozen afterwards."""

    __slots__ = ("_lock", "_set", "_value")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._set = False
        self._value: T | None = None

    @property
    def is_set(self) -> bool:
        return self._set

    def peek(self) -> T | None:
        return self._value

    def get(self, factory: Callable[[], T]) -> T:
        if self._set:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._set:
                self._value = factory()
                self._set = True
        return self._value  # type: ignore[return-value]


def is_localhost(request: Request) -> bool:
    """Default dev detection: the request was addressed to ``localhost``."""
    return "localhost" in request.host


def empty_state(request: Request) -> dict[str, Any]:  # noqa: ARG001
    """Default state function: no state."""
    return {}


def walk_config_root(root: str | Path, config: VueConfig) -> FileSet:
    """Default walker: every file under *root*, classified with *config*."""
    return walk_paths(
        root,
        max_depth=config.max_walk_depth,
        marker=config.key_marker,
        suffix=config.component_suffix,
    )


class VueRuntime:
    """Explicit context object shared by every ``VueComponent`` of an app.

    Usage::

        runtime = VueRuntime(VueConfig(root_directory="vue"), state_function=load_user)
        page = VueComponent("user-page", runtime=runtime)
    """

    _shared: ClassVar[VueRuntime | None] = None
    _shared_lock: ClassVar[threading.Lock] = threading.Lock()

    __slots__ = (
        "_files",
        "_is_dev",
        "_resolver",
        "_root",
        "config",
        "is_dev_function",
        "json_encoder",
        "state_function",
        "walk_function",
    )

    def __init__(
        self,
        config: VueConfig | None = None,
        *,
        is_dev_function: IsDevFunction | None = None,
        state_function: StateFunction | None = None,
        walk_function: WalkFunction | None = None,
        json_encoder: JsonEncoder = json.dumps,
    ) -> None:
        self.config: VueConfig = config or VueConfig()
        self.is_dev_function: IsDevFunction = is_dev_function or is_localhost
        self.state_function: StateFunction = state_function or empty_state
        self.walk_function: WalkFunction = walk_function or walk_config_root
        self.json_encoder: JsonEncoder = json_encoder
        self._is_dev: _Once[bool] = _Once()
        self._root: _Once[Path] = _Once()
        self._files: _Once[FileSet] = _Once()
        self._resolver: _Once[VueDependencyResolver] = _Once()

    @classmethod
    def shared(cls) -> VueRuntime:
        """The process-wide runtime used by components created without one."""
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
        return cls._shared

    # -- Mode --

    @property
    def mode(self) -> Mode:
        if not self._is_dev.is_set:
            return Mode.UNINITIALIZED
        return Mode.DEV if self._is_dev.peek() else Mode.PRODUCTION

    @property
    def is_dev(self) -> bool | None:
        """Resolved mode, ``None`` before the first request."""
        return self._is_dev.peek()

    def resolve_mode(self, request: Request) -> bool:
        """Fix dev/production from the first request; later calls reuse it."""
        return self._is_dev.get(lambda: self._detect_mode(request))

    def _detect_mode(self, request: Request) -> bool:
        if self.config.is_dev is not None:
            is_dev = self.config.is_dev
        else:
            is_dev = bool(self.is_dev_function(request))
        logger.info("Vue pages running in %s mode", "dev" if is_dev else "production")
        return is_dev

    def _mode_required(self, what: str) -> bool:
        is_dev = self._is_dev.peek()
        if is_dev is None:
            msg = f"VueRuntime.{what} needs the mode; call resolve_mode(request) first"
            raise ConfigurationError(msg)
        return is_dev

    # -- Files --

    @property
    def root_directory(self) -> Path:
        """The Vue root.

        Raises:
            ConfigurationError: No root is configured and the mode is not
                resolved yet.
        """
        return self._root.get(self._locate_root)

    def _locate_root(self) -> Path:
        if self.config.root_directory is not None:
            return Path(self.config.root_directory)
        return default_location(
            self._mode_required("root_directory"),
            resource_package=self.config.resource_package,
        )

    def walk(self) -> FileSet:
        """Walk the root now, bypassing the cache."""
        return self.walk_function(self.root_directory, self.config)

    def file_set(self) -> FileSet:
        """Fresh walk in dev, the cached snapshot in production.

        Raises:
            ConfigurationError: The mode is not resolved yet.
        """
        if self._mode_required("file_set()"):
            return self.walk()
        return self._files.get(self._cache_files)

    def _cache_files(self) -> FileSet:
        files = self.walk()
        logger.info("Cached %d Vue files from %s", len(files), self.root_directory)
        return files

    def resolver(self, files: FileSet) -> VueDependencyResolver:
        """A resolver for *files* in dev, the cached one in production.

        Raises:
            ConfigurationError: The mode is not resolved yet.
        """
        if self._mode_required("resolver()"):
            return VueDependencyResolver(files)
        return self._resolver.get(lambda: VueDependencyResolver(self.file_set()))
