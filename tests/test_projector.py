from folio.models.document import Document, EntryType
from folio.services.classifier import classify
from folio.services.projector import (
    ALLOWED_FIELDS,
    is_hidden,
    project,
    project_document,
    project_entry,
    section_counts,
)


ENTRIES = [
    {"company": "Acme", "position": "Dev", "start_date": "2020-01", "team_size": 6, "highlights": ["a"]},
    {"institution": "MIT", "area": "CS", "degree": "BS", "gpa": "3.9"},
    {"name": "Tidewater", "date": "2023", "url": "https://x", "tech": ["Go"]},
    {"label": "Languages", "details": "Python", "level": "expert"},
    {"title": "Paper", "authors": ["Ana"], "doi": "10.1/x", "pages": "1-9"},
]


def test_projection_keeps_only_allowed_fields():
    for entry in ENTRIES:
        tag = classify(entry)
        projected = project(entry, tag)
        allowed = set(ALLOWED_FIELDS[tag])
        assert set(projected) <= allowed
        for key in allowed & set(entry):
            assert projected[key] == entry[key]


def test_absent_fields_are_not_defaulted():
    projected = project({"company": "Acme", "position": "Dev"}, EntryType.EXPERIENCE)
    assert projected == {"company": "Acme", "position": "Dev"}


def test_extension_fields_dropped():
    projected = project_entry(ENTRIES[0])
    assert "team_size" not in projected
    assert projected["highlights"] == ["a"]


def test_unknown_and_text_pass_through():
    raw = {"foo": "bar", "baz": 1}
    assert project(raw, EntryType.UNKNOWN) is raw
    assert project("free text", EntryType.TEXT) == "free text"


def test_projection_does_not_mutate_entry():
    entry = dict(ENTRIES[2])
    project_entry(entry)
    assert entry == ENTRIES[2]


def test_is_hidden():
    assert is_hidden({"name": "x", "show": False})
    assert is_hidden({"name": "x", "show_on_resume": False}, "show_on_resume")
    assert not is_hidden({"name": "x", "show_on_resume": False})
    assert not is_hidden({"name": "x", "show": "false"})
    assert not is_hidden({"name": "x", "show": None})
    assert not is_hidden("plain text", "show_on_resume")


class TestProjectDocument:
    def test_identity_fields(self, document, settings):
        cv = project_document(document, settings)["cv"]
        assert cv["name"] == "Jordan Rivera"
        assert "resume_url" not in cv
        assert cv["social_networks"][0] == {"network": "GitHub", "username": "jrivera"}

    def test_hidden_entries_excluded(self, document, settings):
        sections = project_document(document, settings)["cv"]["sections"]
        names = [p["name"] for p in sections["selected_projects"]]
        assert names == ["Tidewater"]

    def test_entries_projected(self, document, settings):
        sections = project_document(document, settings)["cv"]["sections"]
        assert "team_size" not in sections["experience"][0]
        assert sections["intro"] == document.section("intro")
        assert sections["certifications"] == [{"name": "Certified Kubernetes Administrator", "date": "2022"}]

    def test_empty_collections_removed(self, settings):
        document = Document(
            name="A",
            sections={
                "experience": [],
                "awards": [{"name": "Prize", "show": False}],
                "intro": ["hi"],
            },
        )
        sections = project_document(document, settings)["cv"]["sections"]
        assert list(sections) == ["intro"]

    def test_excluded_cv_fields(self, document, settings):
        settings.exclude_cv_fields = ["phone", "email"]
        cv = project_document(document, settings)["cv"]
        assert "phone" not in cv
        assert "email" not in cv
        assert cv["location"] == "Lisbon, Portugal"

    def test_empty_social_networks_dropped(self, settings):
        cv = project_document(Document(name="A"), settings)["cv"]
        assert "social_networks" not in cv
        assert cv["sections"] == {}

    def test_source_document_untouched(self, document, settings):
        project_document(document, settings)
        assert document.resume_url == "https://jordanrivera.dev/resume.pdf"
        assert document.section("experience")[0]["team_size"] == 6
        assert len(document.section("selected_projects")) == 2


def test_section_counts(document, settings):
    counts = dict((name, (kept, total)) for name, kept, total in section_counts(document, settings))
    assert counts["selected_projects"] == (1, 2)
    assert counts["experience"] == (2, 2)
