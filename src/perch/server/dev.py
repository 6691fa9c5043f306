"""Development server.

Starts a pounce ASGI server with the live perch App object.
"""


def run_dev_server(app: object, host: str, port: int, *, reload: bool = False) -> None:
    """Start a single-worker pounce server for *app*.

    Pounce's ``run()`` takes an import string, but perch has a live
    ``App`` object, so ``pounce.Server`` is used directly.

    Args:
        app: ASGI callable (perch App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on code changes. Vue files never need it: in dev
            mode they are re-read on every request.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    Server(config, app).run()
