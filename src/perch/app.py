"""Perch application class.

Mutable during setup (route registration). Frozen at runtime when
``app.run()`` or ``__call__()`` is first invoked.
"""

import threading
from collections.abc import Callable
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch.config import VueConfig
from perch.errors import ConfigurationError
from perch.routing.router import Route, Router
from perch.server.handler import handle_request
from perch.vue.component import VueComponent
from perch.vue.runtime import IsDevFunction, StateFunction, VueRuntime, WalkFunction


class App:
    """The perch application: an ASGI app serving Vue pages.

    Usage::

        app = App(VueConfig(root_directory="vue"))
        app.vue("/", "hello-world")
        app.vue("/users/{id}", "user-profile")

    Every page shares one ``VueRuntime``, so dev/production is detected
    once and production caches are built once for the whole app.

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the router, even when several workers hit the
        app concurrently on its first request.
    """

    __slots__ = ("_freeze_lock", "_frozen", "_pending", "_router", "debug", "runtime")

    def __init__(
        self,
        config: VueConfig | None = None,
        *,
        is_dev_function: IsDevFunction | None = None,
        state_function: StateFunction | None = None,
        walk_function: WalkFunction | None = None,
        debug: bool = False,
    ) -> None:
        self.runtime = VueRuntime(
            config,
            is_dev_function=is_dev_function,
            state_function=state_function,
            walk_function=walk_function,
        )
        self.debug = debug
        self._pending: list[Route] = []
        self._router: Router | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

    @property
    def config(self) -> VueConfig:
        return self.runtime.config

    # -- Setup --

    def vue(self, path: str, component: str, state: Any = None) -> VueComponent:
        """Serve a Vue page mounting *component* at *path*."""
        page = VueComponent(component, state, runtime=self.runtime)
        self._add(Route(path=path, handler=page, methods=frozenset({"GET"})))
        return page

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a plain handler taking the request, returning ``Response`` or ``str``."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            allowed = frozenset(m.upper() for m in (methods or ["GET"]))
            self._add(Route(path=path, handler=func, methods=allowed))
            return func

        return decorator

    def _add(self, route: Route) -> None:
        if self._frozen:
            msg = f"Cannot add route {route.path!r}: the app is already serving requests."
            raise ConfigurationError(msg)
        self._pending.append(route)

    # -- Runtime --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            router = Router()
            for route in self._pending:
                router.add(route)
            self._router = router
            self._frozen = True

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None
        await handle_request(scope, receive, send, router=self._router, debug=self.debug)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge lifespan startup (freezing the app) and shutdown."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def run(self, host: str = "127.0.0.1", port: int = 8000, *, reload: bool = False) -> None:
        """Start the pounce development server."""
        from perch.server.dev import run_dev_server

        self._ensure_frozen()
        run_dev_server(self, host, port, reload=reload)
