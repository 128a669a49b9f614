"""Handler Outcomes: tagged result at the handler boundary.

Invariants:
    - invoke_handler NEVER raises: every exception becomes Faulted
    - Exactly one of Served / Deferred / Faulted per invocation
    - FaultDetail carries the full traceback for the sink; clients never see it

Design Decisions:
    - Tagged result over exceptions past the boundary: the dispatcher matches on
      outcome type, so control flow stays explicit (no implicit fallthrough)
    - A handler returning a non-Reply value is a fault, not a miss
"""

import traceback
from dataclasses import dataclass

from sitedispatch.core.domain_types import DEFER, Handler, Reply, Request


@dataclass(frozen=True)
class FaultDetail:
    """What went wrong while a handler ran."""
    request: Request
    handler_name: str
    error_type: str
    message: str
    traceback: str


@dataclass(frozen=True)
class Served:
    reply: Reply


@dataclass(frozen=True)
class Deferred:
    pass


@dataclass(frozen=True)
class Faulted:
    fault: FaultDetail


HandlerOutcome = Served | Deferred | Faulted


def invoke_handler(handler: Handler, request: Request) -> HandlerOutcome:
    """Run handler and convert its result (or exception) into an outcome."""
    name = getattr(handler, "__name__", repr(handler))
    try:
        result = handler(request)
    except Exception as exc:
        return Faulted(_fault_from_exception(request, name, exc))
    if result is DEFER:
        return Deferred()
    if isinstance(result, Reply):
        return Served(result)
    return Faulted(FaultDetail(
        request=request,
        handler_name=name,
        error_type="TypeError",
        message=f"handler returned {type(result).__name__}, expected Reply or DEFER",
        traceback="",
    ))


def _fault_from_exception(
    request: Request, name: str, exc: Exception,
) -> FaultDetail:
    return FaultDetail(
        request=request,
        handler_name=name,
        error_type=type(exc).__name__,
        message=str(exc),
        traceback="".join(traceback.format_exception(exc)),
    )
