"""CLI entrypoints for readmegen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .config import ReadmeGenConfig, load_config
from .errors import ConfigError, ContractError
from .logging import configure_logging
from .models import Failure
from .orchestrator import Orchestrator
from .postproc.markdown import append_section, readme_filename, render_readme
from .schemas import EXPLANATION_LEVELS, CodeExplanation, CustomSection, Schema, StructuredDocument


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
        "default": argparse.SUPPRESS if suppress_default else False,
    }
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of Markdown.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the result to this file, or into this directory under a name derived from the project.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readmegen",
        description="Generate README content from a repository, code, or a project idea.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .readmegen.yml or the directory holding it (defaults to current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    repo_parser = subparsers.add_parser("repo", help="Generate a README for a GitHub repository URL.")
    _add_verbose_option(repo_parser, suppress_default=True)
    _add_output_options(repo_parser)
    repo_parser.add_argument("url", help="GitHub repository URL.")

    code_parser = subparsers.add_parser("code", help="Generate a README from a source file.")
    _add_verbose_option(code_parser, suppress_default=True)
    _add_output_options(code_parser)
    code_parser.add_argument("path", help="File whose contents are analysed ('-' reads stdin).")

    prompt_parser = subparsers.add_parser("prompt", help="Generate a README from a project idea.")
    _add_verbose_option(prompt_parser, suppress_default=True)
    _add_output_options(prompt_parser)
    prompt_parser.add_argument("text", help="Free-text description of the project.")

    expand_parser = subparsers.add_parser(
        "expand",
        help="Expand an existing README document (JSON) into a more detailed one.",
    )
    _add_verbose_option(expand_parser, suppress_default=True)
    _add_output_options(expand_parser)
    expand_parser.add_argument("path", help="JSON file holding the current document fields.")

    explain_parser = subparsers.add_parser("explain", help="Explain a code snippet.")
    _add_verbose_option(explain_parser, suppress_default=True)
    explain_parser.add_argument("path", help="File holding the snippet ('-' reads stdin).")
    explain_parser.add_argument(
        "--level",
        choices=EXPLANATION_LEVELS,
        default="beginner",
        help="Depth of the explanation.",
    )
    explain_parser.add_argument("--json", action="store_true", help="Print the result as JSON.")

    section_parser = subparsers.add_parser("section", help="Draft a custom README section.")
    _add_verbose_option(section_parser, suppress_default=True)
    section_parser.add_argument("text", help="Idea for the new section.")
    section_parser.add_argument(
        "--append-to",
        help="Append the section to this README file instead of printing it.",
    )
    section_parser.add_argument("--json", action="store_true", help="Print the result as JSON.")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", help="Bind address (defaults to the configured host).")
    serve_parser.add_argument("--port", type=int, help="Bind port (defaults to the configured port).")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for readmegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "serve":
        _serve(config, args)
        return

    try:
        orchestrator = Orchestrator(config=config)
    except ContractError as exc:
        parser.exit(1, f"readmegen templates are inconsistent: {exc}\n")

    if args.command == "repo":
        result: Any = orchestrator.generate_from_repository(repo_url=args.url)
    elif args.command == "code":
        result = orchestrator.generate_from_repository(code_content=_read_text(parser, args.path))
    elif args.command == "prompt":
        result = orchestrator.generate_from_prompt(args.text)
    elif args.command == "expand":
        result = orchestrator.expand_document(_read_json(parser, args.path))
    elif args.command == "explain":
        result = orchestrator.explain_code(_read_text(parser, args.path), args.level)
    elif args.command == "section":
        result = orchestrator.generate_custom_section(args.text)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    if isinstance(result, Failure):
        parser.exit(1, f"{result.message}\nRun with --verbose for more details.\n")

    if isinstance(result, CustomSection) and getattr(args, "append_to", None):
        target = Path(args.append_to)
        existing = target.read_text(encoding="utf-8") if target.exists() else ""
        target.write_text(append_section(existing, result), encoding="utf-8")
        print(f"Section appended to {_relativize(target)}")
        return

    text = _format(result, as_json=bool(getattr(args, "json", False)))
    output = getattr(args, "output", None)
    if output:
        path = _output_path(Path(output), result, as_json=bool(args.json))
        path.write_text(text, encoding="utf-8")
        print(f"README written to {_relativize(path)}")
    else:
        sys.stdout.write(text)


def _serve(config: ReadmeGenConfig, args: argparse.Namespace) -> None:
    from .service.app import run_service

    run_service(
        host=args.host or config.service.host,
        port=args.port or config.service.port,
        config=config,
    )


def _format(result: Schema, *, as_json: bool) -> str:
    if as_json:
        return json.dumps(result.to_wire(), indent=2, ensure_ascii=False) + "\n"
    if isinstance(result, StructuredDocument):
        return render_readme(result)
    if isinstance(result, CustomSection):
        return append_section("", result).lstrip()
    if isinstance(result, CodeExplanation):
        return result.explanation.strip() + "\n"
    return json.dumps(result.to_wire(), indent=2, ensure_ascii=False) + "\n"


def _output_path(path: Path, result: Schema, *, as_json: bool) -> Path:
    if not path.is_dir():
        return path
    if isinstance(result, StructuredDocument):
        name = readme_filename(result.project_name)
    else:
        name = "readme.md"
    if as_json:
        name = f"{name[:-3]}.json"
    return path / name


def _read_text(parser: argparse.ArgumentParser, path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        parser.exit(1, f"Cannot read {path}: {exc}\n")


def _read_json(parser: argparse.ArgumentParser, path: str) -> Any:
    text = _read_text(parser, path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        parser.exit(1, f"{path} is not valid JSON: {exc}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
