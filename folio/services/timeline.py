"""Cross-collection career timeline.

Merges education, employment, a bounded slice of projects and publications
into one sequence with normalised dates and ongoing/completed status.

Ordering:
    1. ongoing events before completed ones
    2. ongoing: most recently started first
    3. completed: most recently ended first (start date when there is no end)
    4. ties keep insertion order: education, employment, projects,
       publications, then entry order within each collection
The sequence is then reversed once so consumers read oldest to newest.
"""

import logging
from datetime import datetime
from typing import Any

from folio.config import Settings, settings as default_settings
from folio.models.document import (
    Document,
    EducationEntry,
    ExperienceEntry,
    NormalEntry,
    PublicationEntry,
)
from folio.models.views import EventKind, Timeline, TimelineEvent, TimelineStats
from folio.services.classifier import parse_entry
from folio.services.date_parser import is_ongoing_marker, parse_date, split_range

logger = logging.getLogger(__name__)

EXPERIENCE_SECTION = "experience"
EDUCATION_SECTION = "education"
PUBLICATION_SECTION = "publication"


class _Collector:
    """Accumulates events and parse diagnostics for one build."""

    def __init__(self, now: datetime) -> None:
        self.now = now
        self.events: list[tuple[int, TimelineEvent]] = []
        self.diagnostics: list[str] = []

    def _parse(self, text: str):
        parsed = parse_date(text, now=self.now)
        if parsed.diagnostic:
            self.diagnostics.append(parsed.diagnostic)
        return parsed

    def add(
        self,
        kind: EventKind,
        title: str,
        collection: str,
        start: str | None,
        end: str | None,
        point: bool = False,
    ) -> None:
        start = (start or "").strip()
        end = (end or "").strip() or None
        if end is None and start:
            # "Feb 2025 – Jun 2025" style single field
            start, end = split_range(start)
        if not start and end:
            # graduation-style entries carry only an end date
            start = end
        if point and end is None and start:
            # Publications and single-date projects are concluded on their date
            end = start

        start_parsed = self._parse(start)
        ongoing = start_parsed.is_ongoing
        end_at = None
        if end is None or is_ongoing_marker(end):
            ongoing = True
        else:
            end_at = self._parse(end).instant

        event = TimelineEvent(
            kind=kind,
            title=title,
            collection=collection,
            start=start,
            end=end,
            start_at=start_parsed.instant,
            end_at=end_at,
            ongoing=ongoing,
        )
        self.events.append((len(self.events), event))


def _typed(entries: list[Any], model: type) -> list:
    return [e for e in (parse_entry(raw) for raw in entries) if isinstance(e, model)]


def _education_title(edu: EducationEntry) -> str:
    degree = f"{edu.degree} in {edu.area}" if edu.degree else edu.area
    return f"{degree} at {edu.institution}"


def order_events(events: list[tuple[int, TimelineEvent]]) -> list[TimelineEvent]:
    """Apply the ordering policy to (insertion_index, event) pairs."""

    def sort_instant(event: TimelineEvent) -> datetime:
        if event.ongoing:
            return event.start_at
        return event.end_at or event.start_at

    # Newest first with ties in reverse insertion order, so the single
    # reversal below leaves ties in insertion order.
    newest_first = sorted(
        events,
        key=lambda pair: (pair[1].ongoing, sort_instant(pair[1]), pair[0]),
        reverse=True,
    )
    return [event for _, event in reversed(newest_first)]


def timeline_sections(settings: Settings | None = None) -> list[str]:
    """Collections the timeline draws events from."""
    settings = settings or default_settings
    sections = [EDUCATION_SECTION, EXPERIENCE_SECTION]
    if settings.project_sections and settings.timeline_project_limit > 0:
        sections.append(settings.project_sections[0])
    return [*sections, PUBLICATION_SECTION]


def count_stats(document: Document, settings: Settings | None = None) -> TimelineStats:
    settings = settings or default_settings
    return TimelineStats(
        employment=len(document.section(EXPERIENCE_SECTION)),
        education=len(document.section(EDUCATION_SECTION)),
        projects=sum(len(document.section(name)) for name in settings.project_sections),
        publications=len(document.section(PUBLICATION_SECTION)),
    )


def build_timeline(
    document: Document,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> Timeline:
    """Build the ordered timeline plus its counters. Never raises on bad dates."""
    settings = settings or default_settings
    collector = _Collector(now or datetime.now())

    for edu in _typed(document.section(EDUCATION_SECTION), EducationEntry):
        collector.add(
            EventKind.EDUCATION, _education_title(edu), EDUCATION_SECTION,
            edu.start_date or edu.date, edu.end_date,
        )

    for job in _typed(document.section(EXPERIENCE_SECTION), ExperienceEntry):
        collector.add(
            EventKind.EMPLOYMENT, f"{job.position} at {job.company}", EXPERIENCE_SECTION,
            job.start_date or job.date, job.end_date,
        )

    # Only the leading projects of the first project collection
    if settings.project_sections and settings.timeline_project_limit > 0:
        name = settings.project_sections[0]
        projects = _typed(document.section(name), NormalEntry)
        for project in projects[: settings.timeline_project_limit]:
            collector.add(
                EventKind.PROJECT, project.name, name,
                project.start_date or project.date, project.end_date,
                point=True,
            )

    for pub in _typed(document.section(PUBLICATION_SECTION), PublicationEntry):
        collector.add(
            EventKind.PUBLICATION, pub.title, PUBLICATION_SECTION,
            pub.date, None, point=True,
        )

    if collector.diagnostics:
        logger.warning("Timeline built with %d date fallback(s)", len(collector.diagnostics))

    return Timeline(
        events=order_events(collector.events),
        stats=count_stats(document, settings),
        diagnostics=collector.diagnostics,
    )
