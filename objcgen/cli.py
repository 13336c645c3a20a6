"""CLI entrypoints for objcgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, ObjcGenConfig, load_config
from .emitter import WrapperEmitter
from .logging import configure_logging
from .orchestrator import Orchestrator


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
        default=argparse.SUPPRESS if suppress_default else None,
        metavar="FILE",
        help="Also write debug logs to FILE.",
    )


def _add_index_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--xml",
        dest="xml_dirs",
        action="append",
        default=[],
        metavar="DIR",
        help="Folder with Doxygen XML files; repeat to merge several folders in order.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to {CONFIG_FILENAME} (defaults to the current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="objcgen",
        description="Generate Go bindings for Objective-C frameworks from Doxygen XML.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Emit Go wrappers for classes and protocols.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_log_file_option(generate_parser, suppress_default=True)
    _add_index_options(generate_parser)
    generate_parser.add_argument(
        "--class",
        dest="classes",
        action="append",
        default=[],
        metavar="NAME",
        help="Class or protocol to generate; repeatable (defaults to everything).",
    )
    generate_parser.add_argument(
        "--pkg",
        default=None,
        help="Go package name for the generated file.",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the generated file here instead of stdout.",
    )
    generate_parser.add_argument(
        "--summary",
        action="store_true",
        help="Print emitted, advisory and skipped members to stderr.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List entities found in the documentation indexes.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_log_file_option(list_parser, suppress_default=True)
    _add_index_options(list_parser)

    return parser


def _load_settings(parser: argparse.ArgumentParser, args: argparse.Namespace) -> ObjcGenConfig:
    config_path = Path(args.config) if args.config else Path.cwd()
    try:
        config = load_config(config_path)
    except RuntimeError as exc:
        parser.exit(1, f"objcgen: {exc}\n")
    if args.xml_dirs:
        config.index_dirs = [Path(path) for path in args.xml_dirs]
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for objcgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )
    config = _load_settings(parser, args)

    if args.command == "generate":
        orchestrator = Orchestrator(
            emitter=WrapperEmitter(
                runtime_import=config.imports.runtime,
                foundation_import=config.imports.foundation,
            )
        )
        output = Path(args.output) if args.output else config.output
        try:
            result = orchestrator.run_generate(
                config.index_dirs,
                package=args.pkg or config.package,
                classes=args.classes or config.classes,
                output=output,
            )
        except RuntimeError as exc:
            parser.exit(1, f"objcgen generate failed: {exc}\nRun with --verbose for more details.\n")
        if result.output is None:
            sys.stdout.write(result.text)
        if args.summary:
            for line in result.report.format_lines():
                print(line, file=sys.stderr)
    elif args.command == "list":
        orchestrator = Orchestrator()
        try:
            entities = orchestrator.run_list(config.index_dirs)
        except RuntimeError as exc:
            parser.exit(1, f"objcgen list failed: {exc}\n")
        for name, kind in entities:
            print(f"{name}\t{kind}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
