import json
from pathlib import Path

import pytest
import yaml

from folio.models.document import Document
from folio.services.build import build
from folio.services.generator import (
    BaseGenerator,
    GeneratorError,
    NullGenerator,
    RenderCVGenerator,
    get_generator,
)


class RecordingGenerator(BaseGenerator):
    name = "recording"

    def __init__(self):
        self.calls = []

    def generate(self, source: Path, output_dir: Path) -> list[Path]:
        self.calls.append(source)
        artifact = output_dir / "resume.pdf"
        artifact.write_bytes(b"%PDF")
        return [artifact]


class FailingGenerator(BaseGenerator):
    name = "failing"

    def generate(self, source: Path, output_dir: Path) -> list[Path]:
        raise GeneratorError("layout failed")


@pytest.fixture
def out_settings(settings, tmp_path):
    settings.output_dir = str(tmp_path / "dist")
    return settings


def test_build_writes_both_views(document, out_settings):
    generator = RecordingGenerator()
    report = build(document, out_settings, generator=generator)

    resume = yaml.safe_load(Path(report.resume_yaml).read_text(encoding="utf-8"))["cv"]
    assert "resume_url" not in resume
    assert "team_size" not in resume["sections"]["experience"][0]
    assert [p["name"] for p in resume["sections"]["selected_projects"]] == ["Tidewater"]

    full = json.loads(Path(report.portfolio_json).read_text(encoding="utf-8"))["cv"]
    assert full["resume_url"] == "https://jordanrivera.dev/resume.pdf"
    assert full["sections"]["experience"][0]["team_size"] == 6
    assert len(full["sections"]["selected_projects"]) == 2

    assert generator.calls == [Path(report.resume_yaml)]
    assert report.artifacts == [str(Path(out_settings.output_dir) / "resume.pdf")]


def test_build_report_counts(document, out_settings):
    report = build(document, out_settings, generator=NullGenerator())
    counts = {s.name: (s.kept, s.total) for s in report.sections}
    assert counts["selected_projects"] == (1, 2)
    assert report.removed_sections == []
    assert report.artifacts == []


def test_fully_hidden_collection_removed(out_settings):
    document = Document(
        name="A",
        sections={"intro": ["hi"], "awards": [{"name": "Prize", "show": False}]},
    )
    report = build(document, out_settings, generator=NullGenerator())
    assert report.removed_sections == ["awards"]
    resume = yaml.safe_load(Path(report.resume_yaml).read_text(encoding="utf-8"))
    assert list(resume["cv"]["sections"]) == ["intro"]


def test_generator_failure_keeps_outputs(document, out_settings):
    with pytest.raises(GeneratorError):
        build(document, out_settings, generator=FailingGenerator())
    assert (Path(out_settings.output_dir) / "resume.yaml").exists()
    assert (Path(out_settings.output_dir) / "portfolio.json").exists()


class TestGenerators:
    def test_factory(self):
        assert isinstance(get_generator("none"), NullGenerator)
        generator = get_generator("rendercv", ["--pdf-path", "cv.pdf"])
        assert isinstance(generator, RenderCVGenerator)
        assert generator.options == ["--pdf-path", "cv.pdf"]

    def test_unknown_generator(self):
        with pytest.raises(ValueError):
            get_generator("latex")

    def test_missing_executable(self, monkeypatch, tmp_path):
        monkeypatch.setattr("folio.services.generator.shutil.which", lambda name: None)
        with pytest.raises(GeneratorError, match="not found"):
            RenderCVGenerator().generate(tmp_path / "resume.yaml", tmp_path)

    def test_invokes_rendercv(self, monkeypatch, tmp_path):
        calls = []

        def fake_run(command, check, cwd):
            calls.append((command, cwd))
            (tmp_path / "rendercv_output").mkdir()
            (tmp_path / "rendercv_output" / "A_CV.pdf").write_bytes(b"%PDF")

        monkeypatch.setattr("folio.services.generator.shutil.which", lambda name: "/usr/bin/rendercv")
        monkeypatch.setattr("folio.services.generator.subprocess.run", fake_run)
        source = tmp_path / "resume.yaml"
        artifacts = RenderCVGenerator(["--dont-generate-png"]).generate(source, tmp_path)

        assert calls == [(["rendercv", "render", str(source), "--dont-generate-png"], str(tmp_path))]
        assert artifacts == [tmp_path / "rendercv_output" / "A_CV.pdf"]
