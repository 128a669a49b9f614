"""Fallback Responders: 404/500 replies with a guaranteed plain-text floor.

Invariants:
    - not_found() / server_error() NEVER raise
    - The document is read eagerly into memory: a read failure is caught here,
      before any byte is sent, and degrades to the fixed text body
    - Plain-text bodies are exact: "404 - Page Not Found", "500 - Internal Server Error"
"""

import logging
from dataclasses import dataclass

from sitedispatch.core.domain_types import Reply
from sitedispatch.services.static_assets import StaticAssetResolver

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "404 - Page Not Found"
SERVER_ERROR_TEXT = "500 - Internal Server Error"


@dataclass(frozen=True)
class FallbackDocuments:
    """Document filenames looked up under the static root for terminal replies."""
    not_found: str = "404.html"
    server_error: str = "500.html"


class FallbackResponder:
    """Produces the terminal NOT_FOUND and FAULT replies."""

    def __init__(
        self,
        resolver: StaticAssetResolver,
        documents: FallbackDocuments = FallbackDocuments(),
    ):
        self._resolver = resolver
        self._documents = documents

    def not_found(self) -> Reply:
        return self._document_or_text(404, self._documents.not_found, NOT_FOUND_TEXT)

    def server_error(self) -> Reply:
        return self._document_or_text(
            500, self._documents.server_error, SERVER_ERROR_TEXT,
        )

    def _document_or_text(self, status_code: int, name: str, text: str) -> Reply:
        try:
            path = self._resolver.resolve_document(name)
            if path is not None:
                return Reply.document(path.read_bytes(), path, status_code)
        except Exception:
            logger.warning(
                f"Fallback document {name} unreadable, using plain text",
                exc_info=True,
                extra={"status_code": status_code},
            )
        return Reply.text(text, status_code)
