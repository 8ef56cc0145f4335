"""Load the portfolio document from YAML.

A load failure is fatal for the session or build: the error is surfaced
verbatim and never retried.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from folio.models.document import Document

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """The source document is missing, malformed or structurally invalid."""


def parse_document(data: object) -> Document:
    """Validate already-parsed YAML/JSON data.

    Accepts both ``{"cv": {...}}`` and the bare cv mapping.
    """
    if not isinstance(data, dict):
        raise DocumentLoadError("Invalid portfolio data: expected a mapping at the top level")
    cv = data.get("cv", data)
    if not isinstance(cv, dict):
        raise DocumentLoadError("Invalid portfolio data: 'cv' must be a mapping")
    try:
        return Document.model_validate(cv)
    except ValidationError as e:
        raise DocumentLoadError(f"Invalid portfolio data: {e}") from e


def load_document_text(text: str) -> Document:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Failed to parse portfolio YAML: {e}") from e
    return parse_document(data)


def load_document(path: str | Path) -> Document:
    """Read and validate the document at ``path``."""
    path = Path(path)
    if not path.exists():
        raise DocumentLoadError(f"Portfolio file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"Could not read portfolio file {path}: {e}") from e
    document = load_document_text(text)
    logger.info(
        "Loaded portfolio for %s: %d section(s) from %s",
        document.name, len(document.sections), path,
    )
    return document
