"""Root conftest: static roots on disk, a recording fault sink, site builders.

Invariants:
    - Every test gets its own static root under tmp_path (never the real ./public)
    - Document contents are distinct so responses can be told apart byte-for-byte
"""

from datetime import datetime, timezone

import pytest

from sitedispatch.services.static_assets import StaticAssetResolver
from sitedispatch.services.site import SiteConfig, build_route_table

FIXED_NOW = datetime(2026, 1, 28, 12, 0, 0, 123456, tzinfo=timezone.utc)

DOCUMENTS = {
    "index.html": "<h1>Home</h1>",
    "about.html": "<h1>About us</h1>",
    "contact.html": "<h1>Contact</h1>",
    "styles/site.css": "body { color: #333; }",
    "404.html": "<h1>Nothing here</h1>",
    "500.html": "<h1>Something broke</h1>",
}


class RecordingSink:
    """FaultSink that keeps every recorded fault in memory."""

    def __init__(self):
        self.faults = []

    def record(self, fault):
        self.faults.append(fault)


def _write_tree(root, files):
    for name, content in files.items():
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return root


@pytest.fixture
def site_root(tmp_path):
    """Static root with every page and both fallback documents."""
    return _write_tree(tmp_path / "public", DOCUMENTS)


@pytest.fixture
def bare_root(tmp_path):
    """Static root with pages and assets but no 404/500 documents."""
    files = {k: v for k, v in DOCUMENTS.items() if k not in ("404.html", "500.html")}
    return _write_tree(tmp_path / "bare", files)


@pytest.fixture
def fault_sink():
    return RecordingSink()


@pytest.fixture
def make_site():
    """Build a SiteConfig over root, with the default routes unless given some."""

    def _make(root, routes=None):
        resolver = StaticAssetResolver(root)
        if routes is None:
            routes = build_route_table(resolver, clock=lambda: FIXED_NOW)
        return SiteConfig(resolver=resolver, routes=routes)

    return _make
