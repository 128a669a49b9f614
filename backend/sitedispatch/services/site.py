"""Site Assembly: the immutable SiteConfig built once at startup.

Invariants:
    - SiteConfig is frozen and its RouteTable is frozen on construction
    - Route order: GET / , /about, /contact, then the /api group, then catch-all
    - Static root that exists but is not a directory fails startup
    - A missing static root is allowed: every resolution is then a miss

Design Decisions:
    - Replaces process-global route/root state: the dispatcher receives this
      object by reference and never mutates it
    - Document filenames are constants, not settings: they are part of the
      site layout contract, not deployment configuration
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sitedispatch.core.errors import StaticRootError
from sitedispatch.core.route_table import RouteTable
from sitedispatch.services.static_assets import StaticAssetResolver
from sitedispatch.core.time_service import utc_now
from sitedispatch.services.fallbacks import FallbackDocuments
from sitedispatch.services.handlers import (
    Clock, not_found, page_handler, time_handler,
)

logger = logging.getLogger(__name__)

HOME_DOCUMENT = "index.html"
ABOUT_DOCUMENT = "about.html"
CONTACT_DOCUMENT = "contact.html"
API_PREFIX = "/api"


@dataclass(frozen=True)
class SiteConfig:
    resolver: StaticAssetResolver
    routes: RouteTable
    documents: FallbackDocuments = field(default_factory=FallbackDocuments)

    def __post_init__(self):
        self.routes.freeze()

    @property
    def static_root(self) -> Path:
        return self.resolver.root


def check_static_root(root: Path) -> Path:
    root = Path(root)
    if root.exists() and not root.is_dir():
        raise StaticRootError(str(root))
    if not root.exists():
        logger.warning(f"Static root {root} does not exist; all assets will 404")
    return root


def build_api_group(clock: Clock = utc_now) -> RouteTable:
    api = RouteTable()
    api.register("GET", "/time", time_handler(clock))
    return api


def build_route_table(
    resolver: StaticAssetResolver, clock: Clock = utc_now,
) -> RouteTable:
    routes = RouteTable()
    routes.register("GET", "/", page_handler(resolver, HOME_DOCUMENT))
    routes.register("GET", "/about", page_handler(resolver, ABOUT_DOCUMENT))
    routes.register("GET", "/contact", page_handler(resolver, CONTACT_DOCUMENT))
    routes.include(API_PREFIX, build_api_group(clock))
    routes.register_catch_all(not_found)
    return routes


def build_site(static_root: Path, clock: Clock = utc_now) -> SiteConfig:
    resolver = StaticAssetResolver(check_static_root(static_root))
    return SiteConfig(resolver=resolver, routes=build_route_table(resolver, clock))


def startup_notice(site: SiteConfig, host: str, port: int) -> str:
    """Human-readable listing of what the server answers, for the startup log."""
    lines = [
        f"Server listening on http://{host}:{port}",
        f"  static root: {site.static_root}",
        "  routes:",
    ]
    for method, pattern in site.routes.describe():
        lines.append(f"    {method:<4} {pattern}")
    return "\n".join(lines)
