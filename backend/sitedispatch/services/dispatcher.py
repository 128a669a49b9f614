"""Request Dispatcher: the ordered static -> routes -> not-found -> fault pipeline.

Invariants:
    - Exactly one Reply per dispatch; no handler runs after a Reply is chosen
    - TRY_STATIC precedes TRY_ROUTES and only runs for safe methods (GET, HEAD)
    - FAULT is reachable only from a Faulted handler outcome, never from a miss
    - Each fault reaches the sink exactly once
    - dispatch() NEVER raises: sink and fallback failures degrade, not propagate
    - Stateless per call: concurrent dispatches share only frozen SiteConfig

Design Decisions:
    - Explicit stage results (Reply | None, HandlerOutcome) over next()-style
      continuation: every transition is visible in dispatch_traced()
    - The catch-all route defers rather than replying itself, so a custom
      404 document is produced in one place (FallbackResponder)
"""

import logging

from sitedispatch.core.domain_types import DispatchState, Reply, Request
from sitedispatch.core.outcomes import (
    Deferred, Faulted, FaultDetail, HandlerOutcome, Served, invoke_handler,
)
from sitedispatch.core.protocols import FaultSink
from sitedispatch.services.static_assets import StaticAssetResolver
from sitedispatch.services.fallbacks import FallbackResponder
from sitedispatch.services.site import SiteConfig

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Routes one Request to exactly one Reply."""

    def __init__(self, site: SiteConfig, fault_sink: FaultSink):
        self._site = site
        self._resolver: StaticAssetResolver = site.resolver
        self._fallbacks = FallbackResponder(site.resolver, site.documents)
        self._fault_sink = fault_sink

    @property
    def site(self) -> SiteConfig:
        return self._site

    def dispatch(self, request: Request) -> Reply:
        reply, _ = self.dispatch_traced(request)
        return reply

    def dispatch_traced(
        self, request: Request,
    ) -> tuple[Reply, list[DispatchState]]:
        """Dispatch and also return the states visited, in order."""
        trace = [DispatchState.START, DispatchState.TRY_STATIC]
        reply = self._try_static(request)
        if reply is None:
            trace.append(DispatchState.TRY_ROUTES)
            outcome = self._try_routes(request)
            if isinstance(outcome, Served):
                reply = outcome.reply
            elif isinstance(outcome, Faulted):
                trace.append(DispatchState.FAULT)
                reply = self._fault(outcome.fault)
            else:
                trace.append(DispatchState.NOT_FOUND)
                reply = self._fallbacks.not_found()
        trace += [DispatchState.RESPOND, DispatchState.TERMINAL]
        logger.debug(
            f"{request.method} {request.path} -> {reply.status_code}",
            extra={
                "method": request.method,
                "path": request.path,
                "status_code": reply.status_code,
                "dispatch_state": trace[-3].value,
            },
        )
        return reply, trace

    # ─── Stages ──────────────────────────────────────────────────

    def _try_static(self, request: Request) -> Reply | None:
        if not request.is_safe:
            return None
        path = self._resolver.resolve(request.path)
        if path is None:
            return None
        return Reply.file(path)

    def _try_routes(self, request: Request) -> HandlerOutcome:
        handler = self._site.routes.match(request.method, request.path)
        if handler is None:
            return Deferred()
        return invoke_handler(handler, request)

    def _fault(self, fault: FaultDetail) -> Reply:
        try:
            self._fault_sink.record(fault)
        except Exception:
            logger.critical(
                f"Fault sink failed while recording {fault.error_type}",
                exc_info=True,
                extra={"path": fault.request.path, "error_type": fault.error_type},
            )
        return self._fallbacks.server_error()
