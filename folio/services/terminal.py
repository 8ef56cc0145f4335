"""Line-command surface over a loaded document.

A command line is split into a verb and argument tokens, the verb is resolved
through the command registry, and the matching handler produces OutputLines.
Not-found and unavailable verbs get distinct messages so a missing section is
not mistaken for a typo.
"""

import logging
import re
from collections.abc import Callable
from datetime import datetime

from folio.config import Settings, settings as default_settings
from folio.models.document import Document, ExperienceEntry
from folio.models.views import CommandOutput, EventKind, OutputLine
from folio.services.classifier import parse_entry
from folio.services.registry import (
    Command,
    CommandRegistry,
    ResolutionStatus,
    registry as default_registry,
)
from folio.services.renderers import (
    ACCENT,
    BULLET,
    ERROR,
    HEADING,
    MUTED,
    WARNING,
    line,
    render_collection,
)
from folio.services.search import search
from folio.services.sections import format_field_name
from folio.services.social import social_network_url
from folio.services.timeline import build_timeline

logger = logging.getLogger(__name__)

RESUME_FILE = "resume.txt"

PROJECT_SECTIONS = ("selected_projects", "professional_projects")

TIMELINE_ICONS = {
    EventKind.EDUCATION: "🎓",
    EventKind.EMPLOYMENT: "💼",
    EventKind.PROJECT: "🚀",
    EventKind.PUBLICATION: "📄",
}

RESUME_HEADINGS = {
    "intro": "ABOUT",
    "selected_projects": "PROFESSIONAL PROJECTS",
    "professional_projects": "PROFESSIONAL PROJECTS",
    "publication": "PUBLICATIONS",
}

Handler = Callable[[Command, list[str]], list[OutputLine]]


def split_command(text: str) -> tuple[str, list[str]]:
    """Split free text into a lower-cased verb and its argument tokens."""
    tokens = text.split()
    if not tokens:
        return "", []
    return tokens[0].lower(), tokens[1:]


def _phone_digits(phone: str) -> str:
    return re.sub(r"[^\d+]", "", phone)


class TerminalSession:
    """One interactive session: dispatch plus a bounded command history."""

    def __init__(
        self,
        document: Document,
        settings: Settings | None = None,
        command_registry: CommandRegistry | None = None,
        now: datetime | None = None,
    ) -> None:
        self.document = document
        self.settings = settings or default_settings
        self.registry = command_registry or default_registry
        self.now = now
        self.history: list[str] = []  # most recent first
        self._handlers: dict[str, Handler] = {
            "help": self._help,
            "about": self._about,
            "whoami": self._whoami,
            "neofetch": self._neofetch,
            "skills": self._collection,
            "experience": self._collection,
            "education": self._collection,
            "projects": self._projects,
            "personal": self._collection,
            "publications": self._collection,
            "timeline": self._timeline,
            "contact": self._contact,
            "search": self._search,
            "ls": self._ls,
            "pwd": self._pwd,
            "cat": self._cat,
        }

    @property
    def prompt(self) -> str:
        return f"{self.settings.prompt_user}@{self.settings.prompt_host}:~$"

    def suggestions(self, partial: str) -> list[str]:
        return self.registry.suggest(partial, self.document)

    def _remember(self, text: str) -> None:
        self.history.insert(0, text)
        del self.history[self.settings.history_size:]

    def execute(self, text: str) -> CommandOutput:
        verb, args = split_command(text)
        if not verb:
            return CommandOutput(status="empty")
        self._remember(text.strip())

        resolution = self.registry.resolve(verb, self.document)
        if resolution.status == ResolutionStatus.NOT_FOUND:
            return CommandOutput(command=verb, status="not_found", lines=self._not_found(verb))
        if resolution.status == ResolutionStatus.UNAVAILABLE:
            return CommandOutput(
                command=verb,
                status="unavailable",
                lines=self._unavailable(resolution.command),
            )

        cmd = resolution.command
        logger.debug("Running command %s %s", cmd.name, args)
        if cmd.name == "clear":
            return CommandOutput(command=cmd.name, clear=True)
        handler = self._handlers.get(cmd.name, self._collection)
        return CommandOutput(command=cmd.name, lines=handler(cmd, args))

    # --- resolution failures ------------------------------------------------

    def _not_found(self, verb: str) -> list[OutputLine]:
        lines = [
            line(f"bash: {verb}: command not found", ERROR),
            line("Type 'help' to see available commands", WARNING),
        ]
        closest = self.registry.closest(verb, self.document)
        if closest:
            lines.append(line(f"Did you mean '{closest}'?", MUTED))
        return lines

    def _unavailable(self, cmd: Command) -> list[OutputLine]:
        if cmd.collection:
            reason = f"this portfolio has no {format_field_name(cmd.collection).lower()} entries"
        else:
            reason = "this portfolio has no data for it"
        return [line(f"{cmd.name}: command unavailable, {reason}", WARNING)]

    # --- information --------------------------------------------------------

    def _help(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        lines = [line("AVAILABLE COMMANDS", HEADING)]
        for category, commands in self.registry.grouped(self.document):
            lines.append(line())
            lines.append(line(category.upper(), ACCENT))
            for command in commands:
                usage = f"{command.name} {command.usage}".strip()
                lines.append(line(f"  {usage:<20} {command.description}"))
        lines.extend([
            line(),
            line("Use Tab for auto-completion and the arrow keys for history.", MUTED),
            line("Start with `about` to learn more, or try `neofetch` for a quick overview!", MUTED),
        ])
        return lines

    def _about(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        doc = self.document
        lines = [line("ABOUT ME", HEADING), *render_collection(doc.section("intro"))]
        links = []
        if doc.website:
            links.append(line(f"  Portfolio: {doc.website}"))
        if doc.email:
            links.append(line(f"  Email: {doc.email}"))
        for social in doc.social_networks:
            if social.network in ("GitHub", "LinkedIn"):
                links.append(line(f"  {social.network}: {social_network_url(social.network, social.username)}"))
        if links:
            lines.extend([line(), line("QUICK LINKS", ACCENT), *links])
        return lines

    def _current_role(self) -> str:
        for raw in self.document.section("experience"):
            entry = parse_entry(raw)
            if isinstance(entry, ExperienceEntry):
                return entry.position
        return "Professional"

    def _whoami(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        doc = self.document
        return [
            line(f"User: {doc.name}"),
            line(f"Location: {doc.location or 'Unknown'}"),
            line(f"Role: {self._current_role()}"),
        ]

    def _neofetch(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        doc = self.document
        stats = build_timeline(doc, self.settings, now=self.now).stats
        title = f"{self.settings.prompt_user}@{self.settings.prompt_host}"
        return [
            line(title, HEADING),
            line("-" * len(title), MUTED),
            line(f"Name: {doc.name}"),
            line(f"Location: {doc.location or 'Unknown'}"),
            line(f"Role: {self._current_role()}"),
            line(f"Experience: {stats.employment} role(s)"),
            line(f"Education: {stats.education} entr{'y' if stats.education == 1 else 'ies'}"),
            line(f"Projects: {stats.projects}"),
            line(f"Publications: {stats.publications}"),
            line(f"Skills: {len(doc.section('technologies'))} categories"),
            line(f"Sections: {len(doc.sections)}"),
            line(f"Commands: {len(self.registry.list_available(doc))} available"),
        ]

    # --- collections --------------------------------------------------------

    def _collection(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        collection = cmd.collection or cmd.name
        heading = format_field_name(collection).upper()
        return [line(heading, HEADING), line(), *render_collection(self.document.section(collection))]

    def _projects(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        collection = next(
            (name for name in PROJECT_SECTIONS if self.document.has_entries(name)),
            PROJECT_SECTIONS[0],
        )
        return [
            line("PROFESSIONAL PROJECTS", HEADING),
            line(),
            *render_collection(self.document.section(collection)),
        ]

    def _timeline(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        timeline = build_timeline(self.document, self.settings, now=self.now)
        lines = [line("Career Timeline:", HEADING), line()]
        for event in timeline.events:
            icon = TIMELINE_ICONS[event.kind]
            lines.append(line(f"{event.start} {icon} {event.title}", ACCENT))
            if event.ongoing:
                lines.append(line("  └─ Ongoing", MUTED))
            elif event.end and event.end != event.start:
                lines.append(line(f"  └─ Ended: {event.end}", MUTED))
        return lines

    # --- contact ------------------------------------------------------------

    def _contact(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        doc = self.document
        lines = [line("Contact Information", HEADING), line(), line(f"Name: {doc.name}")]
        if doc.location:
            lines.append(line(f"Location: {doc.location}"))
        if doc.email:
            lines.append(line(f"Email: {doc.email}"))
        if doc.phone:
            lines.append(line(f"Phone: {_phone_digits(doc.phone)}"))
        if doc.social_networks:
            lines.extend([line(), line("Social Networks & Links:", ACCENT)])
            for social in doc.social_networks:
                url = social_network_url(social.network, social.username)
                lines.append(line(f"  {BULLET} {social.network}: {social.username} ({url})"))
        return lines

    # --- tools --------------------------------------------------------------

    def _search(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        outcome = search(self.document, " ".join(args), self.settings)
        if outcome.is_usage:
            return [line(text, WARNING) for text in outcome.usage.splitlines()]
        lines = [line(f'Searching for: "{outcome.term}"', HEADING), line()]
        if not outcome.results:
            return [*lines, line("No results found", WARNING)]
        lines.append(line(f"Found {len(outcome.results)} result(s):", ACCENT))
        for result in outcome.results:
            lines.append(line(f"{BULLET} {result.category}: {result.title}"))
            for snippet in result.matched_snippets:
                lines.append(line(f"    {format_field_name(snippet.field)}: {snippet.text}", MUTED))
        return lines

    # --- terminal -----------------------------------------------------------

    def _ls(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        commands = self.registry.list_available(self.document)
        return [line("Available commands:", HEADING), *(line(c.name, ACCENT) for c in commands)]

    def _pwd(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        return [line(f"/home/{self.settings.prompt_user}/portfolio")]

    def _cat(self, cmd: Command, args: list[str]) -> list[OutputLine]:
        if not args:
            return [line("Usage: cat [filename]", WARNING), line(f"Available files: {RESUME_FILE}")]
        if args[0] != RESUME_FILE:
            return [line(f"cat: {args[0]}: No such file or directory", ERROR)]
        return self._resume_text()

    def _resume_text(self) -> list[OutputLine]:
        doc = self.document
        lines = [line("=== RESUME.TXT ===", HEADING), line(), line(doc.name, HEADING)]
        if doc.location:
            lines.append(line(doc.location, MUTED))
        contact = " | ".join(p for p in (doc.email, _phone_digits(doc.phone or "")) if p)
        if contact:
            lines.append(line(contact, MUTED))
        if doc.social_networks:
            socials = " | ".join(f"{s.network}: {s.username}" for s in doc.social_networks)
            lines.append(line(socials, MUTED))
        for name, entries in doc.sections.items():
            if not entries:
                continue
            heading = RESUME_HEADINGS.get(name) or format_field_name(name).upper()
            lines.extend([line(), line(f"{heading}:", ACCENT), *render_collection(entries)])
        return lines


def run_command(document: Document, text: str, settings: Settings | None = None) -> CommandOutput:
    """Execute one command line in a throwaway session."""
    return TerminalSession(document, settings).execute(text)


