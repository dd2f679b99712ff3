#!/usr/bin/env python3
"""
Inkshade Text-to-PDF: CLI entry point.

Creates a PDF document from a plain-text file. Lines are word-wrapped to
the page width and a form feed character in the text forces a new page.

Usage::

    python text2pdf.py output.pdf input.txt
    python text2pdf.py notes.pdf notes.txt --page-size A4 --font-size 11
    python text2pdf.py wide.pdf log.txt --landscape --standard-font Courier
    python text2pdf.py book.pdf book.txt --ttf fonts/DejaVuSans.ttf
    python text2pdf.py out.pdf in.txt --preview debug/pages/ -v 2

Verbosity levels::

    -v 0   Quiet: warnings and errors only.
    -v 1   Normal: conversion summary and progress bar (default).
    -v 2   Debug: per-page and per-fragment detail.

Exit codes::

    0   Success.
    1   Invalid page geometry or font.
    2   Invalid command-line arguments.
    4   The text could not be read or the PDF could not be written.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from conversion.fonts import STANDARD_FONTS
from conversion.page_sizes import PAGE_SIZES, canonical_page_size
from conversion.pipeline import (
    DEFAULT_FONT_SIZE,
    ConversionConfig,
    TextToPDFConverter,
)
from typeset import LayoutInvariantError
from typeset.models import DEFAULT_MARGIN

logger = logging.getLogger("conversion")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_IO_ERROR = 4

# Mapping from --verbose integer to logging level
_VERBOSITY_MAP = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


# ------------------------------------------------------------------
# Argument parsing
# ------------------------------------------------------------------


def _parse_page_size(value: str) -> str:
    """
    Validate a page-size name (case-insensitive).

    Raises:
        argparse.ArgumentTypeError: If the name is not a known page size.
    """
    try:
        return canonical_page_size(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _parse_positive(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a number, got '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive number, got {value}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser with all converter options."""
    p = argparse.ArgumentParser(
        description="Create a PDF document from a text file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  python text2pdf.py notes.pdf notes.txt\n"
            "  python text2pdf.py notes.pdf notes.txt --page-size A4 --landscape\n"
            "  python text2pdf.py book.pdf book.txt --ttf DejaVuSans.ttf\n"
        ),
    )

    # -- Positional --------------------------------------------------------
    p.add_argument("output", nargs="?", help="The generated PDF file")
    p.add_argument("input", nargs="?", help="The text file to convert")

    # -- Page --------------------------------------------------------------
    page = p.add_argument_group("page")
    page.add_argument(
        "--page-size",
        type=_parse_page_size,
        default="Letter",
        metavar="NAME",
        help=f"Page size: {', '.join(PAGE_SIZES)} (default: Letter)",
    )
    page.add_argument(
        "--landscape",
        action="store_true",
        help="Set orientation to landscape",
    )
    page.add_argument(
        "--margin",
        type=float,
        default=DEFAULT_MARGIN,
        metavar="PT",
        help=f"Margin on every side in points (default: {DEFAULT_MARGIN:g})",
    )

    # -- Font --------------------------------------------------------------
    font = p.add_argument_group("font")
    font.add_argument(
        "--font-size",
        type=_parse_positive,
        default=DEFAULT_FONT_SIZE,
        metavar="PT",
        help=f"The size of the font to use (default: {DEFAULT_FONT_SIZE:g})",
    )
    source = font.add_mutually_exclusive_group()
    source.add_argument(
        "--standard-font",
        default=None,
        metavar="NAME",
        help="One of the 14 standard PDF fonts (default: Helvetica). "
        "Use --list-fonts to see all.",
    )
    source.add_argument(
        "--ttf",
        default=None,
        metavar="PATH",
        help="TrueType font file to embed",
    )
    font.add_argument(
        "--list-fonts",
        action="store_true",
        help="List the standard PDF fonts, then exit",
    )
    font.add_argument(
        "--encoding",
        default="utf-8",
        help="Encoding of the input text file (default: utf-8)",
    )

    # -- Debug / output control --------------------------------------------
    debug = p.add_argument_group("debug & output")
    debug.add_argument(
        "--preview",
        default=None,
        metavar="DIR",
        help="Save a PNG preview of every page to DIR",
    )
    debug.add_argument(
        "-v",
        "--verbose",
        type=int,
        choices=[0, 1, 2],
        default=1,
        help="Verbosity: 0=quiet, 1=normal (default), 2=debug",
    )
    debug.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars",
    )

    return p


# ------------------------------------------------------------------
# Logging setup
# ------------------------------------------------------------------


def _configure_logging(verbosity: int) -> None:
    """
    Set up the ``conversion`` and ``typeset`` loggers.

    At verbosity 0 (WARNING), uses a minimal format. At DEBUG, includes
    the module name and time for traceability.
    """
    level = _VERBOSITY_MAP.get(verbosity, logging.INFO)

    if level <= logging.DEBUG:
        fmt = "%(asctime)s %(name)s %(levelname)s: %(message)s"
        datefmt = "%H:%M:%S"
    elif level <= logging.INFO:
        fmt = "%(message)s"
        datefmt = None
    else:
        fmt = "%(levelname)s: %(message)s"
        datefmt = None

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    for name in ("conversion", "typeset"):
        root = logging.getLogger(name)
        root.setLevel(level)
        root.handlers.clear()
        root.addHandler(handler)

    # Suppress noisy third-party loggers regardless of verbosity
    logging.getLogger("PIL").setLevel(logging.WARNING)


# ------------------------------------------------------------------
# Sub-commands
# ------------------------------------------------------------------


def _cmd_list_fonts() -> None:
    """Print the standard PDF fonts, then exit."""
    logger.info("Standard PDF fonts (no embedding required):")
    logger.info("")
    for name in STANDARD_FONTS:
        logger.info("  %s", name)
    logger.info("")
    logger.info("Use --standard-font NAME to select. Default: Helvetica")


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging, and run the conversion."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Logging must be configured before any logger calls
    _configure_logging(args.verbose)

    # --list-fonts exits early
    if args.list_fonts:
        _cmd_list_fonts()
        return EXIT_OK

    if not args.output or not args.input:
        parser.error("Both an output PDF and an input text file are required.")

    input_path = Path(args.input)
    if not input_path.is_file():
        logger.error("Input file not found: %s", input_path)
        return EXIT_IO_ERROR

    config = ConversionConfig(
        font_size=args.font_size,
        page_size=args.page_size,
        landscape=args.landscape,
        standard_font=args.standard_font,
        ttf_path=args.ttf,
        margin=args.margin,
        encoding=args.encoding,
        preview_dir=args.preview,
        disable_tqdm=args.no_progress or args.verbose == 0,
    )

    # Log run header
    logger.info("Inkshade Text-to-PDF")
    logger.info("  Input:  %s", input_path)
    logger.info("  Output: %s", args.output)
    logger.info(
        "  Page:   %s%s, margin %gpt",
        config.page_size,
        " (landscape)" if config.landscape else "",
        config.margin,
    )
    if config.ttf_path:
        font_label = Path(config.ttf_path).name
    else:
        font_label = config.standard_font or "Helvetica"
    logger.info("  Font:   %s %gpt", font_label, config.font_size)

    try:
        converter = TextToPDFConverter(config)
        result = converter.convert(input_path, args.output)
    except UnicodeDecodeError as e:
        logger.error("Error reading %s: %s", input_path, e)
        return EXIT_IO_ERROR
    except OSError as e:
        logger.error("Error converting text to PDF: %s", e)
        return EXIT_IO_ERROR
    except LayoutInvariantError:
        raise
    except (ValueError, RuntimeError) as e:
        # ConfigurationError is a ValueError; unreadable fonts raise RuntimeError
        logger.error("Invalid configuration: %s", e)
        return EXIT_CONFIG_ERROR

    logger.info("\n%s", result.summary())
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
