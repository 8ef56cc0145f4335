"""External document-layout generators.

The generator consumes the projected (schema-strict) YAML and produces the
formatted artifact. Adapters are created by name through get_generator().
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class GeneratorError(Exception):
    """The external generator is missing or failed."""


class BaseGenerator(ABC):
    """Base class for layout generators.

    Subclasses must implement:
        - name: identifier used by get_generator()
        - generate(source, output_dir): render the projected YAML file
    """

    name: str = ""

    @abstractmethod
    def generate(self, source: Path, output_dir: Path) -> list[Path]:
        """Render ``source`` and return the produced artifact paths."""


class NullGenerator(BaseGenerator):
    """Writes nothing; the projected YAML is the final output."""

    name = "none"

    def generate(self, source: Path, output_dir: Path) -> list[Path]:
        logger.info("No generator configured, skipping render of %s", source)
        return []


class RenderCVGenerator(BaseGenerator):
    """Runs ``rendercv render <file>`` as a subprocess."""

    name = "rendercv"
    executable = "rendercv"

    def __init__(self, options: list[str] | None = None) -> None:
        self.options = list(options or [])

    def generate(self, source: Path, output_dir: Path) -> list[Path]:
        if shutil.which(self.executable) is None:
            raise GeneratorError(
                f"{self.executable} not found! Install it with: pip install rendercv"
            )
        command = [self.executable, "render", str(source), *self.options]
        logger.info("Running %s", " ".join(command))
        before = set(output_dir.rglob("*")) if output_dir.exists() else set()
        try:
            subprocess.run(command, check=True, cwd=str(source.parent))
        except subprocess.CalledProcessError as e:
            raise GeneratorError(f"{self.executable} exited with status {e.returncode}") from e
        after = set(output_dir.rglob("*")) if output_dir.exists() else set()
        return sorted(p for p in after - before if p.is_file())


def get_generator(name: str, options: list[str] | None = None) -> BaseGenerator:
    """Factory: create a generator adapter by name."""
    if name in ("", "none"):
        return NullGenerator()
    elif name == "rendercv":
        return RenderCVGenerator(options)
    else:
        raise ValueError(f"Unknown generator: {name}")
