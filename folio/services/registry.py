"""Command registry: the document's collections as an invocable command surface.

A fixed catalog of built-in commands is merged with one command per
non-empty extension collection. Completion, ``ls``/``help`` listings and
dispatch all derive from the same ``_index`` so the names offered and the
names accepted cannot drift apart.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from rapidfuzz import process

from folio.models.document import Document
from folio.models.views import CommandInfo
from folio.services.sections import BASELINE_SECTIONS, format_field_name
from folio.services.timeline import timeline_sections

logger = logging.getLogger(__name__)

INFORMATION = "information"
PROFESSIONAL = "professional"
CONTACT = "contact"
TOOLS = "tools"
TERMINAL = "terminal"
CUSTOM = "custom"

CATEGORY_ORDER = (INFORMATION, PROFESSIONAL, CONTACT, TOOLS, TERMINAL, CUSTOM)

# Minimum rapidfuzz score for a "did you mean" hint
SUGGESTION_CUTOFF = 70


@dataclass(frozen=True)
class Command:
    name: str
    category: str
    description: str = ""
    aliases: tuple[str, ...] = ()
    is_available: Callable[[Document], bool] | None = None
    collection: str | None = None
    usage: str = ""
    dynamic: bool = False

    def available(self, document: Document) -> bool:
        """No predicate means always available."""
        return self.is_available is None or bool(self.is_available(document))

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    def info(self) -> CommandInfo:
        return CommandInfo(
            name=self.name,
            category=self.category,
            description=self.description,
            aliases=list(self.aliases),
            collection=self.collection,
            dynamic=self.dynamic,
        )


class ResolutionStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"  # name unknown
    UNAVAILABLE = "unavailable"  # name known, its data is absent


@dataclass(frozen=True)
class Resolution:
    status: ResolutionStatus
    token: str
    command: Command | None = None

    @property
    def found(self) -> bool:
        return self.status == ResolutionStatus.FOUND


def _has(*sections: str) -> Callable[[Document], bool]:
    def predicate(document: Document) -> bool:
        return any(document.has_entries(name) for name in sections)
    return predicate


def _has_contact(document: Document) -> bool:
    return bool(document.email or document.social_networks)


def _has_timeline(document: Document) -> bool:
    return _has(*timeline_sections())(document)


BUILTIN_COMMANDS: tuple[Command, ...] = (
    Command("help", INFORMATION, "Show this help message", aliases=("man",)),
    Command("about", INFORMATION, "Display introduction and background",
            is_available=_has("intro"), collection="intro"),
    Command("whoami", INFORMATION, "Show current user information"),
    Command("neofetch", INFORMATION, "Display system information (portfolio stats)"),
    Command("skills", PROFESSIONAL, "List technical skills and technologies",
            aliases=("technologies",), is_available=_has("technologies"),
            collection="technologies"),
    Command("experience", PROFESSIONAL, "Show work experience and roles",
            aliases=("work",), is_available=_has("experience"), collection="experience"),
    Command("education", PROFESSIONAL, "Display educational background",
            is_available=_has("education"), collection="education"),
    Command("projects", PROFESSIONAL, "Show professional projects",
            is_available=_has("selected_projects", "professional_projects"),
            collection="selected_projects"),
    Command("personal", PROFESSIONAL, "Show personal projects and open source work",
            is_available=_has("personal_projects"), collection="personal_projects"),
    Command("publications", PROFESSIONAL, "Show research publications and papers",
            aliases=("papers",), is_available=_has("publication"), collection="publication"),
    Command("timeline", PROFESSIONAL, "Display career timeline and milestones",
            is_available=_has_timeline),
    Command("contact", CONTACT, "Display contact information and social links",
            is_available=_has_contact),
    Command("search", TOOLS, "Search across all content", usage="[term]"),
    Command("clear", TERMINAL, "Clear the terminal screen", aliases=("cls",)),
    Command("ls", TERMINAL, "List available commands"),
    Command("pwd", TERMINAL, "Show current directory"),
    Command("cat", TERMINAL, "Display file contents (try: cat resume.txt)", usage="[file]"),
)


def command_name_for(collection: str) -> str:
    return collection.strip().lower().replace(" ", "_")


class CommandRegistry:
    """Built-in catalog plus commands discovered from extension collections."""

    def __init__(self, catalog: Sequence[Command] = BUILTIN_COMMANDS) -> None:
        self._catalog = tuple(catalog)

    def discover(self, document: Document) -> list[Command]:
        """One command per non-empty extension collection."""
        taken = {name for cmd in self._catalog for name in cmd.names}
        discovered: list[Command] = []
        for collection, entries in document.sections.items():
            if collection in BASELINE_SECTIONS or not entries:
                continue
            name = command_name_for(collection)
            if not name or name in taken:
                logger.debug("Collection %r shadowed by an existing command", collection)
                continue
            taken.add(name)
            discovered.append(Command(
                name=name,
                category=CUSTOM,
                description=f"Show {format_field_name(collection)}",
                collection=collection,
                dynamic=True,
            ))
        return discovered

    def commands(self, document: Document) -> list[Command]:
        """Every known command, available or not, in display order."""
        return [*self._catalog, *self.discover(document)]

    def _index(self, document: Document) -> dict[str, Command]:
        index: dict[str, Command] = {}
        for cmd in self.commands(document):
            for name in cmd.names:
                index.setdefault(name, cmd)
        return index

    def list_available(self, document: Document) -> list[Command]:
        return [cmd for cmd in self.commands(document) if cmd.available(document)]

    def available_names(self, document: Document) -> list[str]:
        """Every token (names and aliases) that resolve() accepts."""
        return [name for name, cmd in self._index(document).items() if cmd.available(document)]

    def resolve(self, token: str, document: Document) -> Resolution:
        token = token.strip().lower()
        cmd = self._index(document).get(token)
        if cmd is None:
            return Resolution(ResolutionStatus.NOT_FOUND, token)
        if not cmd.available(document):
            return Resolution(ResolutionStatus.UNAVAILABLE, token, cmd)
        return Resolution(ResolutionStatus.FOUND, token, cmd)

    def suggest(self, prefix: str, document: Document) -> list[str]:
        """Tab-completion candidates for a partial command name."""
        prefix = prefix.strip().lower()
        if not prefix:
            return []
        return [name for name in self.available_names(document) if name.startswith(prefix)]

    def closest(self, token: str, document: Document) -> str | None:
        """Best fuzzy match among available names, for "did you mean" hints."""
        choices = self.available_names(document)
        if not token or not choices:
            return None
        match = process.extractOne(token.lower(), choices, score_cutoff=SUGGESTION_CUTOFF)
        return match[0] if match else None

    def grouped(self, document: Document) -> list[tuple[str, list[Command]]]:
        """Available commands grouped by category, in display order."""
        available = self.list_available(document)
        return [
            (category, [cmd for cmd in available if cmd.category == category])
            for category in CATEGORY_ORDER
            if any(cmd.category == category for cmd in available)
        ]


registry = CommandRegistry()
