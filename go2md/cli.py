"""CLI entrypoint for go2md."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analyzers import GoParser
from .config import ConfigError, load_config, parse_variant
from .errors import NoInputError, OutputError, WalkError
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator
from .output import write_output
from .rendering import MarkdownRenderer, TemplateVariant
from .source_scanner import ScanRequest


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="go2md",
        description="Convert tagged Go doc comments into Markdown documentation.",
    )
    parser.add_argument(
        "-r",
        dest="directory",
        metavar="DIR",
        help="Directory to scan recursively for .go files.",
    )
    parser.add_argument(
        "-i",
        dest="input_file",
        metavar="FILE",
        help="Input .go file.",
    )
    parser.add_argument(
        "-o",
        dest="output",
        metavar="FILE",
        help="Output file name. Write to the file instead of stdout.",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Read Go source piped on stdin, falling back to -i.",
    )
    parser.add_argument(
        "--variant",
        choices=[variant.value for variant in TemplateVariant],
        help="Package doc layout: labelled fields or the raw comment lines.",
    )
    parser.add_argument(
        "--drop-untagged",
        action="store_true",
        help="Drop package doc lines that carry no recognised tag.",
    )
    parser.add_argument(
        "--single-spec-docs",
        action="store_true",
        help="Use the comment above an unparenthesized const, var, or type as its doc.",
    )
    parser.add_argument(
        "--ext",
        dest="extension",
        help="Source file extension picked up by -r (defaults to .go).",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Skip paths under -r matching this glob. May be repeated.",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .go2md.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write diagnostics to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for go2md."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    except OSError as exc:
        parser.exit(1, f"go2md failed: cannot open log file {args.log_file}: {exc.strerror or exc}\n")
    logger = get_logger("cli")

    try:
        config = load_config(Path(args.config))
        variant = parse_variant(args.variant) if args.variant else config.render.variant
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    go_parser = GoParser(
        single_spec_docs=config.parse.single_spec_docs or bool(args.single_spec_docs)
    )
    renderer = MarkdownRenderer(
        variant,
        passthrough_untagged=config.render.passthrough_untagged and not args.drop_untagged,
        templates_dir=config.render.templates_dir,
    )
    request = ScanRequest(
        directory=Path(args.directory) if args.directory else None,
        input_file=Path(args.input_file) if args.input_file else None,
        stream=bool(args.stream),
        stdin=sys.stdin,
        extension=args.extension or config.scan.extension,
        exclude_paths=tuple(config.scan.exclude_paths) + tuple(args.exclude),
    )

    try:
        document = Orchestrator(parser=go_parser, renderer=renderer).run(request)
    except NoInputError as exc:
        parser.exit(1, f"{exc}\n")
    except WalkError as exc:
        logger.error("Error walking the directory: %s", exc)
        parser.exit(1, f"go2md failed: {exc}\nRun with --verbose for more details.\n")

    destination = Path(args.output) if args.output else config.output.path
    try:
        written = write_output(document.render(), destination, stream=sys.stdout)
    except OutputError as exc:
        logger.error("Error writing to output file: %s", exc)
        parser.exit(1, f"go2md failed: {exc}\n")
    if written is not None:
        print(f"Documentation saved to {_relativize(written)}!")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
