"""Full-text search with match highlighting across every collection.

A linear scan per query: the document holds tens of entries per collection,
so there is no index. Matching is a case-insensitive substring test OR'd over
every textual field of an entry; each entry yields at most one result that
lists every field that matched.
"""

import logging
import re
from collections.abc import Iterator, Mapping
from typing import Any

from folio.config import Settings, settings as default_settings
from folio.models.document import (
    Document,
    EducationEntry,
    ExperienceEntry,
    NormalEntry,
    OneLineEntry,
    PublicationEntry,
    TextEntry,
)
from folio.models.views import SearchOutcome, SearchResult, Snippet
from folio.services.classifier import parse_entry
from folio.services.sections import collection_label

logger = logging.getLogger(__name__)

SEARCH_USAGE = "Usage: search [term]\nExample: search python"

_TITLE_PREVIEW = 100


def iter_text_fields(entry: Any, prefix: str = "") -> Iterator[tuple[str, str]]:
    """Yield (field_path, text) for every string reachable in an entry."""
    if isinstance(entry, str):
        yield prefix or "text", entry
    elif isinstance(entry, Mapping):
        for key, value in entry.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            yield from iter_text_fields(value, path)
    elif isinstance(entry, (list, tuple)):
        for item in entry:
            yield from iter_text_fields(item, prefix)


def entry_title(entry: Any, collection: str, index: int) -> str:
    """Short human title for a search hit."""
    parsed = parse_entry(entry)
    if isinstance(parsed, ExperienceEntry):
        return f"{parsed.position} at {parsed.company}"
    if isinstance(parsed, EducationEntry):
        degree = f"{parsed.degree} in {parsed.area}" if parsed.degree else parsed.area
        return f"{degree} at {parsed.institution}"
    if isinstance(parsed, PublicationEntry):
        return parsed.title
    if isinstance(parsed, OneLineEntry):
        return parsed.label
    if isinstance(parsed, NormalEntry):
        return parsed.name
    if isinstance(parsed, TextEntry):
        text = parsed.text
        return text if len(text) <= _TITLE_PREVIEW else text[:_TITLE_PREVIEW] + "..."
    return f"{collection_label(collection)} #{index + 1}"


def highlight(text: str, pattern: re.Pattern, open_mark: str, close_mark: str) -> str:
    """Wrap every match in markers, keeping the original casing."""
    return pattern.sub(lambda m: f"{open_mark}{m.group(0)}{close_mark}", text)


def make_snippet(text: str, pattern: re.Pattern, settings: Settings) -> str:
    """Window of context around the first match, with all matches highlighted."""
    match = pattern.search(text)
    if match is None:
        return text
    context = settings.snippet_context
    start = max(0, match.start() - context)
    end = min(len(text), match.end() + context)
    window = highlight(text[start:end], pattern, settings.highlight_open, settings.highlight_close)
    if start > 0:
        window = "..." + window
    if end < len(text):
        window = window + "..."
    return window


def search(document: Document, term: str, settings: Settings | None = None) -> SearchOutcome:
    """Find entries matching ``term`` in any collection.

    A blank term returns usage guidance rather than an empty result list.
    """
    settings = settings or default_settings
    term = (term or "").strip()
    if not term:
        return SearchOutcome(term="", usage=SEARCH_USAGE)

    pattern = re.compile(re.escape(term), re.IGNORECASE)
    results: list[SearchResult] = []
    for collection, entries in document.sections.items():
        category = collection_label(collection)
        for index, entry in enumerate(entries):
            snippets = [
                Snippet(field=field, text=make_snippet(text, pattern, settings))
                for field, text in iter_text_fields(entry)
                if pattern.search(text)
            ]
            if snippets:
                results.append(SearchResult(
                    category=category,
                    title=entry_title(entry, collection, index),
                    matched_snippets=snippets,
                ))

    logger.debug("search %r: %d result(s)", term, len(results))
    return SearchOutcome(term=term, results=results)
