"""Build pipeline: projected YAML for the generator plus the full JSON view."""

import json
import logging
from pathlib import Path

import yaml

from folio.config import Settings, settings as default_settings
from folio.models.document import Document
from folio.models.views import BuildReport, SectionReport
from folio.services.generator import BaseGenerator, get_generator
from folio.services.projector import project_document, section_counts

logger = logging.getLogger(__name__)

RESUME_YAML = "resume.yaml"
PORTFOLIO_JSON = "portfolio.json"


def interactive_view(document: Document) -> dict:
    """The complete document, every extension field kept."""
    return {"cv": document.model_dump(mode="json", exclude_none=True)}


def write_outputs(document: Document, output_dir: Path, settings: Settings) -> tuple[Path, Path]:
    output_dir.mkdir(parents=True, exist_ok=True)

    resume_path = output_dir / RESUME_YAML
    with open(resume_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            project_document(document, settings), f,
            sort_keys=False, allow_unicode=True, default_flow_style=False,
        )
    logger.info("Wrote %s", resume_path)

    json_path = output_dir / PORTFOLIO_JSON
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(interactive_view(document), f, indent=2, ensure_ascii=False)
    logger.info("Wrote %s", json_path)

    return resume_path, json_path


def build(
    document: Document,
    settings: Settings | None = None,
    generator: BaseGenerator | None = None,
) -> BuildReport:
    """Write both views and hand the projected YAML to the generator.

    Outputs already written are kept when the generator fails; its
    GeneratorError propagates to the caller.
    """
    settings = settings or default_settings
    output_dir = Path(settings.output_dir)
    resume_path, json_path = write_outputs(document, output_dir, settings)

    counts = section_counts(document, settings)
    for name, kept, total in counts:
        logger.info("%-24s %d/%d entries", name, kept, total)
    removed = [name for name, kept, _ in counts if kept == 0]

    generator = generator or get_generator(settings.generator, settings.generator_options)
    artifacts = generator.generate(resume_path, output_dir)
    logger.info("Build complete: %d artifact(s)", len(artifacts))

    return BuildReport(
        resume_yaml=str(resume_path),
        portfolio_json=str(json_path),
        sections=[SectionReport(name=n, kept=k, total=t) for n, k, t in counts],
        removed_sections=removed,
        artifacts=[str(p) for p in artifacts],
    )
