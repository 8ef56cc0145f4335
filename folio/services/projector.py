"""Generator-facing projection of entries and of the whole document.

The external layout generator is schema-strict: it rejects unknown fields and
empty collections. Each entry is reduced to the canonical fields of its tag;
author-defined extension fields are dropped here and survive only in the
interactive view.

ALLOWED_FIELDS must track the generator's accepted schema. A stale table
loses fields silently in the exported output; it does not fail the build.
"""

import logging
from collections.abc import Mapping
from typing import Any

from folio.config import Settings, settings as default_settings
from folio.models.document import Document, EntryType
from folio.services.classifier import classify

logger = logging.getLogger(__name__)

ALLOWED_FIELDS: dict[EntryType, tuple[str, ...]] = {
    EntryType.EXPERIENCE: (
        "company", "position", "location", "start_date", "end_date",
        "date", "summary", "highlights",
    ),
    EntryType.EDUCATION: (
        "institution", "area", "degree", "location", "start_date",
        "end_date", "date", "summary", "highlights",
    ),
    EntryType.NORMAL: (
        "name", "location", "start_date", "end_date", "date", "summary",
        "highlights",
    ),
    EntryType.ONE_LINE: ("label", "details"),
    EntryType.PUBLICATION: ("title", "authors", "doi", "url", "journal", "date"),
}

# Per-entry visibility flags; an entry is hidden only when one is literally False
_SHOW_FLAGS = ("show",)


def project(entry: Any, entry_type: EntryType) -> Any:
    """Reduce an entry to the canonical fields of its tag.

    Absent canonical fields are omitted, never defaulted. Text and Unknown
    entries pass through unchanged.
    """
    allowed = ALLOWED_FIELDS.get(entry_type)
    if allowed is None or not isinstance(entry, Mapping):
        return entry
    return {key: entry[key] for key in allowed if key in entry}


def project_entry(entry: Any) -> Any:
    """Classify and project in one step."""
    return project(entry, classify(entry))


def is_hidden(entry: Any, filter_field: str | None = None) -> bool:
    """True when the entry opts out of the generator-facing view."""
    if not isinstance(entry, Mapping):
        return False
    flags = _SHOW_FLAGS + ((filter_field,) if filter_field else ())
    return any(entry.get(flag) is False for flag in flags)


def project_document(document: Document, settings: Settings | None = None) -> dict:
    """Build the generator-facing ``{"cv": ...}`` structure.

    Hidden entries are excluded, every remaining entry is projected, and
    collections left without entries are removed entirely.
    """
    settings = settings or default_settings
    identity = document.model_dump(mode="json", exclude={"sections"}, exclude_none=True)
    for field in (*settings.remove_from_resume, *settings.exclude_cv_fields):
        identity.pop(field, None)
    if not identity.get("social_networks"):
        identity.pop("social_networks", None)

    sections: dict[str, list[Any]] = {}
    for name, entries in document.sections.items():
        kept = [
            project_entry(e) for e in entries
            if not is_hidden(e, settings.filter_field)
        ]
        if not kept:
            logger.info("Removed empty section from resume: %s", name)
            continue
        if len(kept) != len(entries):
            logger.info("%s: %d/%d entries kept for resume", name, len(kept), len(entries))
        sections[name] = kept

    cv = dict(identity)
    cv["sections"] = sections
    return {"cv": cv}


def section_counts(document: Document, settings: Settings | None = None) -> list[tuple[str, int, int]]:
    """(collection, kept, total) for every collection in the generator view."""
    settings = settings or default_settings
    counts = []
    for name, entries in document.sections.items():
        kept = sum(1 for e in entries if not is_hidden(e, settings.filter_field))
        counts.append((name, kept, len(entries)))
    return counts
