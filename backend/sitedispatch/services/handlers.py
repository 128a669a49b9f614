"""Route Handlers: named pages, the time endpoint and the catch-all.

Invariants:
    - Page handlers are thin aliases over StaticAssetResolver for one filename
    - A missing page document is a resolution miss (DEFER), not a fault
    - The time handler samples its clock exactly once per call
    - The catch-all always defers, landing the request in NOT_FOUND
"""

from datetime import datetime
from typing import Callable

from sitedispatch.core.domain_types import DEFER, Handler, Reply, Request
from sitedispatch.services.static_assets import StaticAssetResolver
from sitedispatch.core.time_service import build_time_payload, utc_now

Clock = Callable[[], datetime]


def page_handler(resolver: StaticAssetResolver, document: str) -> Handler:
    """Build a handler serving one fixed document from the static root."""

    def serve_page(request: Request):
        path = resolver.resolve_document(document)
        if path is None:
            return DEFER
        return Reply.file(path)

    serve_page.__name__ = f"serve_{document.rsplit('.', 1)[0]}"
    return serve_page


def time_handler(clock: Clock = utc_now) -> Handler:
    def current_time(request: Request) -> Reply:
        return Reply.json(build_time_payload(clock()))

    return current_time


def not_found(request: Request):
    return DEFER
