"""Collection names and display labels shared by the command surface and search."""

# Collections whose entry shape is documented and stable. Every other
# collection is an author-defined extension.
BASELINE_SECTIONS: frozenset[str] = frozenset({
    "intro",
    "technologies",
    "experience",
    "education",
    "selected_projects",
    "professional_projects",
    "personal_projects",
    "publication",
})

SECTION_LABELS: dict[str, str] = {
    "intro": "About",
    "technologies": "Skills",
    "experience": "Experience",
    "education": "Education",
    "selected_projects": "Project",
    "professional_projects": "Project",
    "personal_projects": "Personal Project",
    "publication": "Publication",
}


def format_field_name(name: str) -> str:
    """snake_case -> Title Case (tech_stack -> Tech Stack)."""
    return " ".join(word[:1].upper() + word[1:] for word in name.replace("-", "_").split("_") if word)


def collection_label(name: str) -> str:
    return SECTION_LABELS.get(name) or format_field_name(name)
