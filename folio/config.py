import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    document_path: str = "data/portfolio.yaml"
    output_dir: str = "dist"
    debug: bool = False

    # Collections counted as projects (timeline + counters)
    project_sections: list[str] = ["selected_projects", "personal_projects"]
    timeline_project_limit: int = 5

    # Generator-facing export
    filter_field: str = "show_on_resume"  # entries with this flag set to false are hidden
    remove_from_resume: list[str] = ["resume_url"]
    exclude_cv_fields: list[str] = []
    generator: str = "rendercv"  # "rendercv" | "none"
    generator_options: list[str] = []

    # Terminal session
    history_size: int = 50
    prompt_user: str = "guest"
    prompt_host: str = "portfolio"

    # Search
    highlight_open: str = "<mark>"
    highlight_close: str = "</mark>"
    snippet_context: int = 60

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "FOLIO_"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
