"""Lenient date parsing for timeline ordering.

Dates in the document are free text: "2022-06", "Jun 2022", "Feb 2025 – Jun
2025", "Present". parse_date never raises; anything unparseable falls back to
"now" with a diagnostic so timeline construction cannot abort.
"""

import logging
import re
from datetime import date, datetime

from folio.models.views import DateStatus, ParsedDate

logger = logging.getLogger(__name__)

ONGOING_MARKERS = ("present", "current", "ongoing")

# en-dash, em-dash, spaced hyphen, " to "
RANGE_SEPARATORS_RE = re.compile(r"\s*[–—]\s*|\s+-\s+|\s+to\s+", re.IGNORECASE)

# Tried in order, first successful parse wins
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m",
    "%Y",
    "%b %Y",   # Jun 2022
    "%B %Y",   # June 2022
    "%b. %Y",  # Jun. 2022
)

YEAR_RE = re.compile(r"\b(\d{4})\b")


def split_range(text: str) -> tuple[str, str | None]:
    """Split "start – end" into its parts. Returns (text, None) if not a range."""
    parts = RANGE_SEPARATORS_RE.split(text.strip(), maxsplit=1)
    if len(parts) == 2 and parts[0].strip():
        return parts[0].strip(), parts[1].strip() or None
    return text.strip(), None


def is_ongoing_marker(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in ONGOING_MARKERS)


def parse_date(value: str | date | int | None, now: datetime | None = None) -> ParsedDate:
    """Normalise a date string into a comparable instant plus status."""
    now = now or datetime.now()
    if isinstance(value, datetime):
        return ParsedDate(instant=value, status=DateStatus.PARSED, source=value.isoformat())
    if isinstance(value, date):
        return ParsedDate(
            instant=datetime(value.year, value.month, value.day),
            status=DateStatus.PARSED,
            source=value.isoformat(),
        )
    text = "" if value is None else str(value).strip()

    # 1. Ongoing markers
    if is_ongoing_marker(text):
        return ParsedDate(instant=now, status=DateStatus.ONGOING, source=text)

    # 2. Ranges compare by their start
    start, end = split_range(text)
    if end is not None:
        result = parse_date(start, now=now)
        return result.model_copy(update={"source": text})

    # 3. Known formats
    for fmt in DATE_FORMATS:
        try:
            instant = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return ParsedDate(instant=instant, status=DateStatus.PARSED, source=text)

    # 4. Bare year anywhere in the text
    match = YEAR_RE.search(text)
    # 0000 placeholders are not a year
    if match and int(match.group(1)) >= datetime.min.year:
        return ParsedDate(
            instant=datetime(int(match.group(1)), 1, 1),
            status=DateStatus.YEAR_ONLY,
            source=text,
        )

    # 5. Give up: now, plus a diagnostic for later audit
    diagnostic = f"Unparseable date {text!r}, using current date"
    logger.warning(diagnostic)
    return ParsedDate(
        instant=now,
        status=DateStatus.UNPARSEABLE,
        source=text,
        diagnostic=diagnostic,
    )
