"""CLI entrypoints for umlgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import ConfigError
from .git.remote import RepositoryCloner, is_remote_reference
from .logging import configure_logging
from .models import Snapshot
from .orchestrator import RunOutcome, UmlGenerator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _split_patterns(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="umlgen",
        description="Generate UML JSON snapshots of JavaScript/TypeScript codebases for 3D visualization.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Analyze a local directory or Git URL and write the UML snapshot.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_log_file_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory or repository URL (defaults to current directory).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON file path (defaults to <project>-uml.json in the current directory).",
    )
    generate_parser.add_argument(
        "--include",
        type=_split_patterns,
        default=None,
        help="Comma-separated path prefixes to include.",
    )
    generate_parser.add_argument(
        "--exclude",
        type=_split_patterns,
        default=None,
        help="Comma-separated substrings to exclude.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing snapshot generation.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_log_file_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def _project_name_from_url(url: str) -> str:
    name = url.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    return name[:-4] if name.endswith(".git") else name


def _run_generate(args: argparse.Namespace, parser: argparse.ArgumentParser) -> RunOutcome:
    generator = UmlGenerator()
    target = str(args.path)
    cloner: RepositoryCloner | None = None
    working_path = Path(target)
    project_name = None
    try:
        if is_remote_reference(target):
            cloner = RepositoryCloner()
            working_path = cloner.clone(target)
            project_name = _project_name_from_url(target)
        return generator.run(
            working_path,
            args.output,
            include=args.include,
            exclude=args.exclude,
            project_name=project_name,
        )
    except (FileNotFoundError, NotADirectoryError, ConfigError) as exc:
        parser.exit(1, f"Error: {exc}\n")
    except (RuntimeError, OSError) as exc:
        parser.exit(1, f"umlgen generate failed: {exc}\nRun with --verbose for more details.\n")
    finally:
        if cloner is not None:
            cloner.cleanup(working_path)


def _print_summary(snapshot: Snapshot, output_path: Path, skipped: List[str]) -> None:
    print("UML generation complete")
    print(f"Classes analyzed: {len(snapshot.classes)}")
    print(f"Packages: {len(snapshot.packages)}")
    if skipped:
        print(f"Files skipped: {len(skipped)}")
    print(f"Output file: {_relativize(output_path)}")

    ranked = sorted(
        (record for record in snapshot.classes if not record.is_external),
        key=lambda record: record.complexity.cyclomatic_complexity,
        reverse=True,
    )[:5]
    if ranked:
        print("Most complex components:")
        for record in ranked:
            metrics = record.complexity
            print(
                f"  {record.name}: complexity {metrics.cyclomatic_complexity}, "
                f"{metrics.lines_of_code} lines ({metrics.threat_level})"
            )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for umlgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        outcome = _run_generate(args, parser)
        _print_summary(outcome.snapshot, outcome.output_path, outcome.skipped)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
