from datetime import datetime

import pytest

from folio.models.document import Document
from folio.services.terminal import TerminalSession, run_command, split_command


NOW = datetime(2025, 5, 1)


@pytest.fixture
def session(document, settings):
    return TerminalSession(document, settings, now=NOW)


def test_split_command():
    assert split_command("  Search  Python tools ") == ("search", ["Python", "tools"])
    assert split_command("   ") == ("", [])


class TestDispatch:
    def test_not_found(self, session):
        output = session.execute("frobnicate")
        assert output.status == "not_found"
        assert output.lines[0].text == "bash: frobnicate: command not found"
        assert "Type 'help'" in output.text

    def test_not_found_with_hint(self, session):
        output = session.execute("experiance")
        assert "Did you mean 'experience'?" in output.text

    def test_unavailable_is_distinct(self, settings):
        document = Document(name="A", sections={"publication": []})
        output = TerminalSession(document, settings).execute("publications")
        assert output.status == "unavailable"
        assert "command unavailable" in output.text
        assert "not found" not in output.text

    def test_empty_line(self, session):
        output = session.execute("   ")
        assert output.status == "empty"
        assert session.history == []

    def test_clear(self, session):
        output = session.execute("cls")
        assert output.clear
        assert output.command == "clear"

    def test_run_command(self, document, settings):
        assert run_command(document, "whoami", settings).lines[0].text == "User: Jordan Rivera"


def test_history_bounded_most_recent_first(document, settings):
    settings.history_size = 2
    session = TerminalSession(document, settings)
    for text in ("help", "ls", "pwd"):
        session.execute(text)
    assert session.history == ["pwd", "ls"]


def test_prompt_and_suggestions(session):
    assert session.prompt == "guest@portfolio:~$"
    assert session.suggestions("cert") == ["certifications"]


class TestCommands:
    def test_help_lists_categories(self, session):
        text = session.execute("help").text
        assert "AVAILABLE COMMANDS" in text
        assert "CUSTOM" in text
        assert "certifications" in text

    def test_about(self, session):
        text = session.execute("about").text
        assert "Backend engineer focused on data pipelines" in text
        assert "GitHub: https://github.com/jrivera" in text

    def test_whoami_uses_first_role(self, session):
        text = session.execute("whoami").text
        assert "Role: Senior Backend Engineer" in text

    def test_neofetch_counts(self, session):
        text = session.execute("neofetch").text
        assert "Experience: 2 role(s)" in text
        assert "Projects: 3" in text
        assert "Publications: 1" in text

    def test_experience_shows_extension_fields(self, session):
        text = session.execute("experience").text
        assert "Senior Backend Engineer @ Streamline Analytics" in text
        assert "Lisbon | 2022-03 - present" in text
        assert "Additional Info:" in text
        assert "Team Size: 6" in text

    def test_skills(self, session):
        text = session.execute("skills").text
        assert "• Languages: Python, Go, SQL" in text

    def test_projects_keeps_hidden_entries(self, session):
        text = session.execute("projects").text
        assert "Tidewater (2023)" in text
        assert "Internal Dashboard (2021)" in text
        assert "Show On Resume" not in text

    def test_publications(self, session):
        text = session.execute("papers").text
        assert "Authors: Jordan Rivera, Ana Costa" in text
        assert "DOI: https://doi.org/10.1234/jde.2021.042" in text

    def test_dynamic_collection(self, session):
        output = session.execute("certifications")
        assert output.lines[0].text == "CERTIFICATIONS"
        assert "Certified Kubernetes Administrator (2022)" in output.text

    def test_unknown_entries_dumped(self, settings):
        document = Document(name="A", sections={"misc": [{"foo": "bar", "n": 2}]})
        text = TerminalSession(document, settings).execute("misc").text
        assert "Foo: bar" in text
        assert "N: 2" in text

    def test_timeline(self, session):
        output = session.execute("timeline")
        assert output.lines[0].text == "Career Timeline:"
        assert output.lines[-1].text == "  └─ Ongoing"
        assert "  └─ Ended: 2018-07" in output.text

    def test_contact(self, session):
        text = session.execute("contact").text
        assert "Phone: +351912345678" in text
        assert "LinkedIn: jordan-rivera (https://linkedin.com/in/jordan-rivera)" in text

    def test_search(self, session):
        text = session.execute("search python").text
        assert 'Searching for: "python"' in text
        assert "Found 3 result(s):" in text
        assert "<mark>Python</mark>" in text

    def test_search_without_term(self, session):
        output = session.execute("search")
        assert output.lines[0].text == "Usage: search [term]"

    def test_ls_and_pwd(self, session):
        assert "certifications" in session.execute("ls").text
        assert session.execute("pwd").text == "/home/guest/portfolio"

    def test_cat_resume(self, session):
        text = session.execute("cat resume.txt").text
        assert text.startswith("=== RESUME.TXT ===")
        assert "PROFESSIONAL PROJECTS:" in text
        assert "PUBLICATIONS:" in text
        assert "CERTIFICATIONS:" in text

    def test_cat_missing_file(self, session):
        assert session.execute("cat notes.md").text == "cat: notes.md: No such file or directory"
        assert "Usage: cat [filename]" in session.execute("cat").text
