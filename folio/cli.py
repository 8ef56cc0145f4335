"""Command line entry point.

Usage:
    folio build [--document data/portfolio.yaml] [--output dist] [--generator rendercv|none]
    folio run "search python"
    folio shell
"""

import argparse
import logging
import sys

from folio.config import settings
from folio.models.views import CommandOutput
from folio.services.build import build
from folio.services.document_loader import DocumentLoadError, load_document
from folio.services.generator import GeneratorError
from folio.services.terminal import TerminalSession

logger = logging.getLogger(__name__)

EXIT_WORDS = ("exit", "quit", "logout")
CLEAR_SCREEN = "\033[2J\033[H"


def _print_output(output: CommandOutput) -> None:
    if output.clear:
        print(CLEAR_SCREEN, end="")
    for row in output.lines:
        print(row.text)


def cmd_build(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    report = build(document, settings)
    print(f"Resume YAML:    {report.resume_yaml}")
    print(f"Portfolio JSON: {report.portfolio_json}")
    for section in report.sections:
        print(f"  {section.name:<24} {section.kept}/{section.total}")
    if report.removed_sections:
        print(f"Removed empty sections: {', '.join(report.removed_sections)}")
    for artifact in report.artifacts:
        print(f"Generated: {artifact}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    output = TerminalSession(document, settings).execute(" ".join(args.line))
    _print_output(output)
    return 0 if output.status in ("ok", "empty") else 1


def cmd_shell(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    session = TerminalSession(document, settings)
    print(f"Welcome to {document.name}'s portfolio. Type 'help' to get started.")
    while True:
        try:
            text = input(f"{session.prompt} ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if text.strip().lower() in EXIT_WORDS:
            return 0
        _print_output(session.execute(text))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="folio", description="Portfolio document toolkit")
    parser.add_argument("--document", default=settings.document_path, help="Source portfolio YAML")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    build_p = sub.add_parser("build", help="Write resume.yaml / portfolio.json and run the generator")
    build_p.add_argument("--output", help="Output directory")
    build_p.add_argument("--generator", choices=["rendercv", "none"], help="Layout generator")
    build_p.set_defaults(func=cmd_build)

    run_p = sub.add_parser("run", help="Execute a single terminal command")
    run_p.add_argument("line", nargs="+", help="Command line, e.g. 'search python'")
    run_p.set_defaults(func=cmd_run)

    shell_p = sub.add_parser("shell", help="Interactive terminal session")
    shell_p.set_defaults(func=cmd_shell)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose or settings.debug else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    if getattr(args, "output", None):
        settings.output_dir = args.output
    if getattr(args, "generator", None):
        settings.generator = args.generator

    try:
        return args.func(args)
    except (DocumentLoadError, GeneratorError) as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
