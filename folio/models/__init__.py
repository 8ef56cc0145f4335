"""Pydantic models for the portfolio document and its derived views."""

from folio.models.document import (
    Document,
    EducationEntry,
    EntryType,
    ExperienceEntry,
    NormalEntry,
    OneLineEntry,
    PublicationEntry,
    SocialNetwork,
    TextEntry,
    UnknownEntry,
)
from folio.models.views import (
    CommandInfo,
    CommandOutput,
    ParsedDate,
    SearchOutcome,
    SearchResult,
    Timeline,
    TimelineEvent,
)

__all__ = [
    "Document",
    "EducationEntry",
    "EntryType",
    "ExperienceEntry",
    "NormalEntry",
    "OneLineEntry",
    "PublicationEntry",
    "SocialNetwork",
    "TextEntry",
    "UnknownEntry",
    "CommandInfo",
    "CommandOutput",
    "ParsedDate",
    "SearchOutcome",
    "SearchResult",
    "Timeline",
    "TimelineEvent",
]
