"""API test fixtures: httpx AsyncClient over ASGITransport against create_app.

Invariants:
    - Each test gets an app built over its own tmp static root
    - The fault sink is the recording sink from the root conftest
    - Lifespan is not run by ASGITransport; logging stays as pytest configured it
"""

import pytest
from httpx import ASGITransport, AsyncClient

from sitedispatch.config import Settings
from sitedispatch.core.route_table import RouteTable
from sitedispatch.services.static_assets import StaticAssetResolver
from sitedispatch.main import create_app
from sitedispatch.services.handlers import not_found, page_handler
from sitedispatch.services.site import SiteConfig


def _explode(request):
    raise RuntimeError("database password is hunter2")


@pytest.fixture
async def make_client(fault_sink):
    """Factory for clients over any root, optionally with a custom site."""
    clients = []

    def _make(root, site=None):
        app = create_app(
            Settings(_env_file=None, static_root=root),
            site=site, fault_sink=fault_sink,
        )
        client = AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()


@pytest.fixture
def client(make_client, site_root):
    return make_client(site_root)


@pytest.fixture
def bare_client(make_client, bare_root):
    return make_client(bare_root)


@pytest.fixture
def faulty_site():
    """Site over root with GET /explode raising before any explicit page route."""

    def _make(root):
        resolver = StaticAssetResolver(root)
        routes = RouteTable()
        routes.register("GET", "/explode", _explode)
        routes.register("GET", "/about", page_handler(resolver, "about.html"))
        routes.register_catch_all(not_found)
        return SiteConfig(resolver=resolver, routes=routes)

    return _make
