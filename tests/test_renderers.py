from folio.models.document import OneLineEntry
from folio.services.renderers import (
    format_period,
    format_value,
    render_collection,
    render_extras,
)
from folio.services.sections import collection_label, format_field_name
from folio.services.social import social_network_url


def test_format_value():
    assert format_value(True) == "Yes"
    assert format_value(False) == "No"
    assert format_value(["Go", "Rust"]) == "Go, Rust"
    assert format_value([{"a": 1}, {"b": 2}]) == "[2 items]"
    assert format_value([]) == "None"
    assert format_value({"a": 1, "b": 2, "c": 3, "d": 4}) == "a: 1, b: 2, c: 3"
    assert format_value(None) is None
    assert format_value(3.5) == "3.5"


def test_format_period():
    assert format_period("2020", "2022") == "2020 - 2022"
    assert format_period("2020", None) == "2020 - Present"
    assert format_period(None, "2022") == "2022"


def test_render_extras_skips_flags_and_nulls():
    lines = render_extras({"tech_stack": ["Go"], "show_on_resume": False, "notes": None})
    assert [line.text for line in lines] == ["  Additional Info:", "    Tech Stack: Go"]
    assert render_extras({"show": True}) == []


def test_one_line_entry_extras():
    entry = OneLineEntry(label="Go", details="5 years", certified=True)
    assert entry.extras == {"certified": True}


def test_render_collection_spacing():
    lines = render_collection([
        {"label": "A", "details": "1"},
        {"label": "B", "details": "2"},
        {"name": "Project"},
        {"name": "Other"},
    ])
    assert [line.text for line in lines] == ["• A: 1", "• B: 2", "", "Project", "", "Other"]


def test_field_names_and_labels():
    assert format_field_name("tech_stack") == "Tech Stack"
    assert format_field_name("open-source") == "Open Source"
    assert collection_label("technologies") == "Skills"
    assert collection_label("volunteer_work") == "Volunteer Work"


def test_social_network_url():
    assert social_network_url("GitHub", "octo") == "https://github.com/octo"
    assert social_network_url("Mastodon", "me") == "https://mastodon.com/me"
