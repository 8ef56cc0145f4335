"""Shared dependencies for API routes."""

from folio.config import settings
from folio.models.document import Document
from folio.services.document_loader import load_document

_document: Document | None = None


def get_document() -> Document:
    """Load the portfolio once per process."""
    global _document
    if _document is None:
        _document = load_document(settings.document_path)
    return _document
