"""Structural entry classification.

Collections carry no declared schema, so every entry is assigned one of a
closed set of shapes by probing for discriminator fields. Discriminators are
not exclusive (a project may carry an incidental ``company`` field), so the
checks run as an ordered chain and the first match wins: multi-field
signatures before the single-field ``name`` check.

Both the generator export (``projector``) and the interactive renderers use
this module, so the taxonomy exists in exactly one place.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from folio.models.document import (
    EducationEntry,
    EntryType,
    ExperienceEntry,
    NormalEntry,
    OneLineEntry,
    PublicationEntry,
    TextEntry,
    UnknownEntry,
)

logger = logging.getLogger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


# Ordered predicate chain over mapping entries. Strings are handled before it.
_RULES: list[tuple[EntryType, Callable[[Mapping], bool]]] = [
    (EntryType.EXPERIENCE, lambda e: "company" in e and "position" in e),
    (EntryType.EDUCATION, lambda e: "institution" in e and "area" in e),
    (EntryType.PUBLICATION, lambda e: "title" in e and _is_sequence(e.get("authors"))),
    (EntryType.ONE_LINE, lambda e: "label" in e and "details" in e),
    (EntryType.NORMAL, lambda e: "name" in e),
]

_MODELS: dict[EntryType, type[BaseModel]] = {
    EntryType.EXPERIENCE: ExperienceEntry,
    EntryType.EDUCATION: EducationEntry,
    EntryType.PUBLICATION: PublicationEntry,
    EntryType.ONE_LINE: OneLineEntry,
    EntryType.NORMAL: NormalEntry,
}

Entry = (
    TextEntry
    | ExperienceEntry
    | EducationEntry
    | PublicationEntry
    | OneLineEntry
    | NormalEntry
    | UnknownEntry
)


def classify(entry: Any) -> EntryType:
    """Assign a canonical tag to a raw entry. Total and deterministic."""
    if isinstance(entry, str):
        return EntryType.TEXT
    if not isinstance(entry, Mapping):
        return EntryType.UNKNOWN
    for entry_type, matches in _RULES:
        if matches(entry):
            return entry_type
    return EntryType.UNKNOWN


def parse_entry(entry: Any) -> Entry:
    """Parse a raw entry into its typed model.

    An entry whose discriminators match a shape but whose canonical fields
    fail validation (e.g. ``highlights`` is not a list of strings) becomes an
    ``UnknownEntry``; rendering never aborts on a malformed entry.
    """
    entry_type = classify(entry)
    if entry_type == EntryType.TEXT:
        return TextEntry(text=entry)
    if entry_type == EntryType.UNKNOWN:
        return UnknownEntry(raw=entry)
    try:
        return _MODELS[entry_type].model_validate(dict(entry))
    except ValidationError as e:
        logger.warning(
            "Entry looks like %s but failed validation, treating as unknown: %s",
            entry_type.value, e.errors()[0].get("msg", e),
        )
        return UnknownEntry(raw=entry)


def entry_type_of(entry: Entry) -> EntryType:
    """Tag of an already-parsed entry."""
    if isinstance(entry, TextEntry):
        return EntryType.TEXT
    if isinstance(entry, UnknownEntry):
        return EntryType.UNKNOWN
    for entry_type, model in _MODELS.items():
        if isinstance(entry, model):
            return entry_type
    return EntryType.UNKNOWN


def classify_collection(entries: Sequence[Any]) -> list[tuple[EntryType, Any]]:
    """Tag every entry of a collection, keeping order."""
    return [(classify(e), e) for e in entries]
