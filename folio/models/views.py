"""Derived, read-only views computed from a Document."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class DateStatus(str, Enum):
    ONGOING = "ongoing"  # "present" / "current" / "ongoing" marker
    PARSED = "parsed"  # matched one of the known formats
    YEAR_ONLY = "year_only"  # bare year extracted from free text
    UNPARSEABLE = "unparseable"  # fell back to now


class ParsedDate(BaseModel):
    instant: datetime
    status: DateStatus
    source: str = ""
    diagnostic: str | None = None

    @property
    def is_ongoing(self) -> bool:
        return self.status == DateStatus.ONGOING


class EventKind(str, Enum):
    EMPLOYMENT = "employment"
    EDUCATION = "education"
    PROJECT = "project"
    PUBLICATION = "publication"


class TimelineEvent(BaseModel):
    kind: EventKind
    title: str
    collection: str
    start: str = ""
    end: str | None = None
    start_at: datetime
    end_at: datetime | None = None
    ongoing: bool = False


class TimelineStats(BaseModel):
    employment: int = 0
    education: int = 0
    projects: int = 0
    publications: int = 0


class Timeline(BaseModel):
    events: list[TimelineEvent] = []  # oldest first
    stats: TimelineStats = TimelineStats()
    diagnostics: list[str] = []


class Snippet(BaseModel):
    field: str
    text: str  # original casing, term wrapped in highlight markers


class SearchResult(BaseModel):
    category: str
    title: str
    matched_snippets: list[Snippet] = []


class SearchOutcome(BaseModel):
    """Result of a search query.

    A blank term yields ``usage`` guidance and ``results`` of None, never an
    empty match list.
    """
    term: str
    results: list[SearchResult] | None = None
    usage: str | None = None

    @property
    def is_usage(self) -> bool:
        return self.results is None


class CommandInfo(BaseModel):
    name: str
    category: str
    description: str = ""
    aliases: list[str] = []
    collection: str | None = None  # set for commands backed by a collection
    dynamic: bool = False


class OutputLine(BaseModel):
    text: str = ""
    style: str = ""  # presentation hint: heading, accent, muted, error, warning


class CommandOutput(BaseModel):
    command: str = ""
    status: str = "ok"  # ok | not_found | unavailable | empty
    lines: list[OutputLine] = []
    clear: bool = False

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)


class SectionReport(BaseModel):
    name: str
    kept: int
    total: int


class BuildReport(BaseModel):
    resume_yaml: str
    portfolio_json: str
    sections: list[SectionReport] = []
    removed_sections: list[str] = []
    artifacts: list[str] = []
