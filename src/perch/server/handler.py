"""ASGI handler — translates ASGI scope/messages to perch types.

The only component that touches raw HTTP scopes. Builds the Request,
dispatches through the router, maps errors to responses and sends the
result. A failing render never produces a partial page: either the full
document or an error response is sent.
"""

import logging

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.routing.router import Router
from perch.server.sender import send_response

logger = logging.getLogger("perch.server")


def to_response(result: object) -> Response:
    """Coerce a handler's return value into a Response."""
    if isinstance(result, Response):
        return result
    if isinstance(result, str):
        return Response(body=result)
    msg = f"Handler returned {type(result).__name__}, expected Response or str"
    raise TypeError(msg)


def http_error_response(exc: HTTPError, request: Request, *, debug: bool) -> Response:
    """Map an HTTPError to a plain-text response with its status."""
    if exc.status >= 500:
        logger.error("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    else:
        logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"
    response = Response(body=detail, content_type="text/plain; charset=utf-8")
    response = response.with_status(exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def internal_error_response(request: Request) -> Response:
    """Log the active exception and return a generic 500."""
    logger.exception("500 %s %s", request.method, request.path)
    return Response(
        body="Internal Server Error",
        status=500,
        content_type="text/plain; charset=utf-8",
    )


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    router: Router,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    try:
        match = router.match(request.method, request.path)
        result = await invoke(match.route.handler, request.with_path_params(match.path_params))
        response = to_response(result)
    except HTTPError as exc:
        response = http_error_response(exc, request, debug=debug)
    except Exception:
        response = internal_error_response(request)

    await send_response(response, send, head=request.method == "HEAD")
