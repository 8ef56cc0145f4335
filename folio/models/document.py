"""Portfolio document and the canonical entry shapes it is classified into."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class EntryType(str, Enum):
    """Closed set of entry shapes. Every entry maps to exactly one."""
    TEXT = "text"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    PUBLICATION = "publication"
    ONE_LINE = "one_line"
    NORMAL = "normal"
    UNKNOWN = "unknown"


_DATE_FIELDS = ("start_date", "end_date", "date")


def _date_to_str(value: Any) -> Any:
    # YAML turns unquoted 2023-03-28 into a date and 2023 into an int
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class _Entry(BaseModel):
    model_config = ConfigDict(extra="allow")

    @field_validator(*_DATE_FIELDS, mode="before", check_fields=False)
    @classmethod
    def _normalise_dates(cls, value: Any) -> Any:
        return _date_to_str(value)

    @property
    def extras(self) -> dict[str, Any]:
        """Fields beyond the canonical set of this entry shape."""
        return dict(self.model_extra or {})


class TextEntry(BaseModel):
    """A bare string entry (intro paragraphs, free-text collections)."""
    text: str


class ExperienceEntry(_Entry):
    company: str
    position: str
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    date: str | None = None
    summary: str | None = None
    highlights: list[str] = []


class EducationEntry(_Entry):
    institution: str
    area: str
    degree: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    date: str | None = None
    summary: str | None = None
    highlights: list[str] = []


class NormalEntry(_Entry):
    """Generic named item: projects, certifications, awards..."""
    name: str
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    date: str | None = None
    summary: str | None = None
    highlights: list[str] = []
    show: bool | None = None


class OneLineEntry(_Entry):
    label: str
    details: str


class PublicationEntry(_Entry):
    title: str
    authors: list[str]
    date: str | None = None
    journal: str | None = None
    doi: str | None = None
    url: str | None = None


class UnknownEntry(BaseModel):
    """Fallback for entries with no recognised shape. Rendered as a raw dump."""
    raw: Any


class SocialNetwork(BaseModel):
    network: str
    username: str


class Document(BaseModel):
    """The personal document: identity fields plus named collections.

    Collections keep their raw entries (strings or mappings) untouched so the
    interactive view retains every author-defined field. Typed views are
    derived on demand via ``services.classifier.parse_entry``.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    resume_url: str | None = None
    social_networks: list[SocialNetwork] = []
    sections: dict[str, list[Any]] = {}

    @field_validator("sections", mode="before")
    @classmethod
    def _empty_sections_to_lists(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {k: ([] if v is None else v) for k, v in value.items()}
        return value

    def section(self, name: str) -> list[Any]:
        """Entries of a collection, or an empty list when absent."""
        return self.sections.get(name) or []

    def has_entries(self, name: str) -> bool:
        return bool(self.sections.get(name))
