"""CLI entry point: python -m dsn_json"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from dsn_json import __version__
from dsn_json.config import DsnJsonConfig, LogLevel, SectionErrorPolicy
from dsn_json.diagnostics import Diagnostics
from dsn_json.logging_config import get_logger, setup_logging
from dsn_json.models.errors import DsnJsonError
from dsn_json.parser import parse_dsn
from dsn_json.utils.sexp_parser import load_dsn_file
from dsn_json.utils.validation import validate_dsn_path

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dsn-json",
        description="Convert a Specctra DSN board file to JSON",
    )
    parser.add_argument(
        "--version", action="version", version=f"dsn-json {__version__}",
    )
    parser.add_argument("file", help="Path to the .dsn file")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write JSON to this file instead of stdout",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    parser.add_argument(
        "--on-section-error",
        choices=["raise", "drop"],
        default=None,
        help="Abort on a malformed section, or drop it and continue (default: raise)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log messages to this file",
    )
    parser.add_argument(
        "--no-extension-check",
        action="store_true",
        help="Accept files without a .dsn suffix",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Build config from CLI args + env vars
    overrides = {}
    if args.on_section_error:
        overrides["on_section_error"] = SectionErrorPolicy(args.on_section_error)
    if args.log_level:
        overrides["log_level"] = LogLevel(args.log_level)
    if args.log_file:
        overrides["log_file"] = args.log_file

    config = DsnJsonConfig(**overrides)
    setup_logging(config)

    diagnostics = Diagnostics()
    try:
        path = validate_dsn_path(args.file, check_extension=not args.no_extension_check)
        design = parse_dsn(load_dsn_file(path), diagnostics=diagnostics, config=config)
    except DsnJsonError as e:
        logger.error("%s", e)
        return 1

    text = json.dumps(design.model_dump(mode="json", exclude_none=True), indent=args.indent)
    if args.output is None:
        print(text)
        return 0

    try:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        logger.error("Cannot write %s: %s", args.output, e)
        return 1
    logger.info("Wrote %s (%d warnings)", args.output, len(diagnostics))
    return 0


if __name__ == "__main__":
    sys.exit(main())
