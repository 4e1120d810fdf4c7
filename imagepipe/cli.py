"""Command-line entry point: run a program script against an image file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .errors import EngineError, ImageProcessingError, ScriptParseError
from .log import configure_logging
from .processor import ImageProcessor
from .script import parse_script

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="imagepipe",
        description="Apply a sequence of image operations to an image file",
    )
    g_io = p.add_argument_group("I/O")
    g_io.add_argument("input", type=str, help="Path to the input image")
    g_io.add_argument("output", type=str, help="Path of the image to write")

    g_ops = p.add_argument_group("Operations")
    src = g_ops.add_mutually_exclusive_group()
    src.add_argument(
        "--apply-operations", "-x", dest="script", type=str, default=None,
        help="Program script, e.g. 'set resize sampling_filter nearest; resize 80 100; blur 2'",
    )
    src.add_argument("--script-file", type=str, default=None, help="Read the program script from a file")

    g_log = p.add_argument_group("Logging")
    g_log.add_argument("--log-level", type=str, default="WARNING",
                       choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    g_log.add_argument("--log-file", type=str, default=None, help="Also log to a rotating file")

    return p


def _read_script(args: argparse.Namespace) -> str:
    if args.script_file:
        return Path(args.script_file).read_text(encoding="utf-8")
    return args.script or ""


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    logger = configure_logging(args.log_level, args.log_file)

    try:
        program = parse_script(_read_script(args))
    except (OSError, UnicodeDecodeError) as exc:
        print(f"imagepipe: cannot read script: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except ScriptParseError as exc:
        print(f"imagepipe: {exc}", file=sys.stderr)
        return EXIT_USAGE
    logger.debug("Parsed %d statement(s)", len(program))

    try:
        ImageProcessor().process_image(args.input, program, args.output)
    except (EngineError, ImageProcessingError) as exc:
        logger.debug("Processing failed", exc_info=True)
        print(f"imagepipe: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    logger.info("Wrote %s", args.output)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
