"""CLI entrypoints for secedit commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .errors import EditorError
from .logging import configure_logging
from .orchestrator import EditOutcome, Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_dry_run_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the resulting diff without writing any file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secedit",
        description="Parse, edit and merge text files containing SECTION-START/SECTION-END markers.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    edit_parser = subparsers.add_parser(
        "edit",
        help="Re-serialize a file through the section editor.",
    )
    _add_verbose_option(edit_parser, suppress_default=True)
    _add_dry_run_option(edit_parser)
    edit_parser.add_argument("path", help="File to edit in place.")
    edit_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Edit sections in parallel using this many threads.",
    )
    edit_parser.add_argument(
        "--strip-trailing-whitespace",
        action="store_true",
        default=None,
        help="Remove trailing whitespace from every line of the output.",
    )

    sections_parser = subparsers.add_parser(
        "sections",
        help="List the sections of a file as an indented outline.",
    )
    _add_verbose_option(sections_parser, suppress_default=True)
    sections_parser.add_argument("path", help="File to inspect.")

    merge_parser = subparsers.add_parser(
        "merge",
        help="Carry hand-edited sections of an existing file over into generated content.",
    )
    _add_verbose_option(merge_parser, suppress_default=True)
    _add_dry_run_option(merge_parser)
    merge_parser.add_argument("generated", help="Freshly generated file.")
    merge_parser.add_argument("existing", help="Previously generated, hand-edited file.")
    merge_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Where to write the merged result (defaults to EXISTING).",
    )
    merge_parser.add_argument(
        "--keep",
        action="append",
        default=None,
        metavar="NAME",
        help="Only carry over this section; may be repeated.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for secedit commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    orchestrator = Orchestrator()

    try:
        if args.command == "edit":
            outcome = orchestrator.run_edit(
                args.path,
                dry_run=bool(args.dry_run),
                workers=args.workers,
                strip_trailing_whitespace=args.strip_trailing_whitespace,
            )
            _report(outcome, verb="edited")
        elif args.command == "sections":
            for depth, name in orchestrator.run_sections(args.path):
                print(f"{'  ' * depth}{name}")
        elif args.command == "merge":
            outcome = orchestrator.run_merge(
                args.generated,
                args.existing,
                output=args.output,
                keep=args.keep,
                dry_run=bool(args.dry_run),
            )
            if outcome.sections:
                print(f"Kept sections: {', '.join(outcome.sections)}")
            _report(outcome, verb="merged")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, EditorError) as exc:
        parser.exit(1, f"secedit {args.command} failed: {exc}\n")


def _report(outcome: EditOutcome, *, verb: str) -> None:
    if not outcome.changed:
        message = f"{_relativize(outcome.path)} already up to date"
        if outcome.dry_run:
            message += " (dry-run)"
        print(message)
    elif outcome.dry_run:
        print("Changes (dry-run):")
        print(outcome.diff or "(no diff)")
    else:
        print(f"{_relativize(outcome.path)} {verb}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
