"""Plain-text render templates, one per entry shape.

Each template turns a parsed entry into OutputLines carrying a style hint; the
interactive surface decides how a hint looks. Fields outside an entry's
canonical set are listed under "Additional Info".
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

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
from folio.models.views import OutputLine
from folio.services.classifier import Entry, entry_type_of, parse_entry
from folio.services.sections import format_field_name

HEADING = "heading"
ACCENT = "accent"
MUTED = "muted"
ERROR = "error"
WARNING = "warning"

BULLET = "•"

# Visibility flags are control data, not content
_HIDDEN_EXTRAS = frozenset({"show", "show_on_resume"})


def line(text: str = "", style: str = "") -> OutputLine:
    return OutputLine(text=text, style=style)


def format_period(start: str | None, end: str | None) -> str:
    if not start:
        return end or ""
    return f"{start} - {end}" if end else f"{start} - Present"


def format_value(value: Any) -> str | None:
    """Type-aware one-line rendering of an extension field value."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        if not value:
            return "None"
        if all(isinstance(item, str) for item in value):
            return ", ".join(value)
        return f"[{len(value)} items]"
    if isinstance(value, Mapping):
        shown = list(value.items())[:3]
        if not shown:
            return "[Complex data]"
        return ", ".join(f"{k}: {v}" for k, v in shown)
    return str(value)


def render_extras(extras: Mapping[str, Any], indent: str = "  ") -> list[OutputLine]:
    """Extension fields as "Field Name: value" lines."""
    rows = []
    for key, value in extras.items():
        if key in _HIDDEN_EXTRAS:
            continue
        rendered = format_value(value)
        if rendered is None:
            continue
        rows.append(line(f"{indent}  {format_field_name(key)}: {rendered}"))
    if not rows:
        return []
    return [line(f"{indent}Additional Info:", ACCENT), *rows]


def _highlights(items: Iterable[str], indent: str = "  ") -> list[OutputLine]:
    return [line(f"{indent}{BULLET} {item}") for item in items]


def render_experience(entry: ExperienceEntry) -> list[OutputLine]:
    lines = [line(f"{entry.position} @ {entry.company}", HEADING)]
    period = format_period(entry.start_date or entry.date, entry.end_date)
    meta = " | ".join(part for part in (entry.location, period) if part)
    if meta:
        lines.append(line(f"  {meta}", MUTED))
    if entry.summary:
        lines.append(line(f"  {entry.summary}"))
    lines.extend(_highlights(entry.highlights))
    lines.extend(render_extras(entry.extras))
    return lines


def render_education(entry: EducationEntry) -> list[OutputLine]:
    degree = f"{entry.degree} in {entry.area}" if entry.degree else entry.area
    lines = [line(f"{degree} from {entry.institution}", HEADING)]
    period = format_period(entry.start_date or entry.date, entry.end_date)
    meta = " | ".join(part for part in (entry.location, period) if part)
    if meta:
        lines.append(line(f"  {meta}", MUTED))
    if entry.summary:
        lines.append(line(f"  {entry.summary}"))
    lines.extend(_highlights(entry.highlights))
    lines.extend(render_extras(entry.extras))
    return lines


def render_normal(entry: NormalEntry) -> list[OutputLine]:
    date = entry.date or format_period(entry.start_date, entry.end_date)
    title = f"{entry.name} ({date})" if date else entry.name
    lines = [line(title, HEADING)]
    if entry.location:
        lines.append(line(f"  {entry.location}", MUTED))
    if entry.summary:
        lines.append(line(f"  {entry.summary}"))
    lines.extend(_highlights(entry.highlights))
    lines.extend(render_extras(entry.extras))
    return lines


def render_one_line(entry: OneLineEntry) -> list[OutputLine]:
    return [line(f"{BULLET} {entry.label}: {entry.details}"), *render_extras(entry.extras)]


def render_publication(entry: PublicationEntry) -> list[OutputLine]:
    lines = [line(entry.title, HEADING), line(f"  Authors: {', '.join(entry.authors)}", MUTED)]
    if entry.journal:
        lines.append(line(f"  Journal: {entry.journal}", MUTED))
    if entry.date:
        lines.append(line(f"  Date: {entry.date}", MUTED))
    if entry.doi:
        lines.append(line(f"  DOI: https://doi.org/{entry.doi}", MUTED))
    elif entry.url:
        lines.append(line(f"  URL: {entry.url}", MUTED))
    lines.extend(render_extras(entry.extras))
    return lines


def render_text(entry: TextEntry) -> list[OutputLine]:
    return [line(entry.text)]


def render_unknown(entry: UnknownEntry) -> list[OutputLine]:
    """Raw key/value dump for entries with no recognised shape."""
    raw = entry.raw
    if not isinstance(raw, Mapping):
        return [line(str(raw))]
    rows = []
    for key, value in raw.items():
        rendered = format_value(value)
        if rendered is not None:
            rows.append(line(f"{format_field_name(str(key))}: {rendered}"))
    return rows or [line("(empty entry)", MUTED)]


TEMPLATES: dict[EntryType, Callable[[Any], list[OutputLine]]] = {
    EntryType.TEXT: render_text,
    EntryType.EXPERIENCE: render_experience,
    EntryType.EDUCATION: render_education,
    EntryType.PUBLICATION: render_publication,
    EntryType.ONE_LINE: render_one_line,
    EntryType.NORMAL: render_normal,
    EntryType.UNKNOWN: render_unknown,
}


def render_entry(entry: Entry) -> list[OutputLine]:
    return TEMPLATES[entry_type_of(entry)](entry)


def render_collection(entries: Iterable[Any]) -> list[OutputLine]:
    """Classify and render every raw entry.

    Block-shaped entries are separated by blank lines; single-line shapes
    (text, label/details) are stacked.
    """
    lines: list[OutputLine] = []
    for raw in entries:
        entry = parse_entry(raw)
        entry_type = entry_type_of(entry)
        if lines and entry_type not in (EntryType.TEXT, EntryType.ONE_LINE):
            lines.append(line())
        lines.extend(TEMPLATES[entry_type](entry))
    return lines
