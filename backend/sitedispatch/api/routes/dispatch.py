"""Dispatch Endpoint: every method, every path -> RequestDispatcher -> one response.

Invariants:
    - Exactly one Starlette Response is built per request, from exactly one Reply
    - No method is rejected before the dispatcher runs: TRACE, PROPFIND or any
      custom verb reaches NOT_FOUND like everything else
    - Request.path comes from scope["path"], which the ASGI server has URL-decoded
    - Rendering is a pure mapping on Reply.kind; no routing decisions here

Design Decisions:
    - Plain ASGI endpoint under a Starlette Route with methods=None: function
      endpoints are pinned to a method list and answer 405 for the rest
    - Dispatch runs in Starlette's threadpool, so the blocking filesystem
      probes never stall the event loop
    - FILE replies stream via FileResponse; fallback documents are already bytes
"""

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.types import Receive, Scope, Send

from sitedispatch.core.domain_types import BodyKind, Reply
from sitedispatch.core.domain_types import Request as SiteRequest
from sitedispatch.services.dispatcher import RequestDispatcher

DISPATCH_PATH = "/{full_path:path}"


class DispatchEndpoint:
    """ASGI app answering every request through the app's RequestDispatcher."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        response = await run_in_threadpool(dispatch_request, request)
        await response(scope, receive, send)


def dispatch_request(request: Request) -> Response:
    dispatcher: RequestDispatcher = request.app.state.dispatcher
    site_request = SiteRequest.from_raw(request.method, request.scope["path"])
    return render(dispatcher.dispatch(site_request))


def register_dispatch_route(app: FastAPI) -> None:
    """Install the catch-all for all methods; must be the app's only route."""
    app.add_route(
        DISPATCH_PATH, DispatchEndpoint(), methods=None,
        name="dispatch", include_in_schema=False,
    )


def render(reply: Reply) -> Response:
    """Convert a core Reply to the matching Starlette response class."""
    if reply.kind is BodyKind.FILE:
        return FileResponse(
            reply.body, status_code=reply.status_code, media_type=reply.media_type,
        )
    if reply.kind is BodyKind.JSON:
        return JSONResponse(reply.body, status_code=reply.status_code)
    if reply.kind is BodyKind.DOCUMENT:
        return Response(
            content=reply.body, status_code=reply.status_code,
            media_type=reply.media_type,
        )
    return PlainTextResponse(reply.body, status_code=reply.status_code)
