"""Fallback Responders: document when readable, fixed text otherwise."""

from sitedispatch.core.domain_types import BodyKind, Reply
from sitedispatch.services.static_assets import StaticAssetResolver
from sitedispatch.services.fallbacks import (
    NOT_FOUND_TEXT, SERVER_ERROR_TEXT, FallbackDocuments, FallbackResponder,
)


def test_documents_served_when_present(site_root):
    responder = FallbackResponder(StaticAssetResolver(site_root))
    not_found = responder.not_found()
    server_error = responder.server_error()
    assert (not_found.status_code, not_found.kind) == (404, BodyKind.DOCUMENT)
    assert server_error.body == b"<h1>Something broke</h1>"


def test_fixed_text_when_documents_missing(bare_root):
    responder = FallbackResponder(StaticAssetResolver(bare_root))
    assert responder.not_found() == Reply.text("404 - Page Not Found", 404)
    assert responder.server_error() == Reply.text("500 - Internal Server Error", 500)


def test_document_that_is_a_directory_degrades_to_text(bare_root):
    (bare_root / "404.html").mkdir()
    responder = FallbackResponder(StaticAssetResolver(bare_root))
    assert responder.not_found() == Reply.text(NOT_FOUND_TEXT, 404)


def test_custom_document_names(site_root):
    (site_root / "gone.html").write_text("gone")
    responder = FallbackResponder(
        StaticAssetResolver(site_root),
        FallbackDocuments(not_found="gone.html", server_error="missing.html"),
    )
    assert responder.not_found().body == b"gone"
    assert responder.server_error() == Reply.text(SERVER_ERROR_TEXT, 500)


def test_resolver_failure_degrades_to_text(site_root, caplog):
    class ExplodingResolver:
        def resolve_document(self, name):
            raise OSError("stale NFS handle")

    responder = FallbackResponder(ExplodingResolver())
    assert responder.server_error() == Reply.text(SERVER_ERROR_TEXT, 500)
    assert "unreadable" in caplog.text
