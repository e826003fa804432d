"""
sprite-indexer
Convert an RGBA image to an indexed PNG using a fixed palette, and write a
grayscale alpha mask when the transparency is not simple on/off.

Usage:
  sprite-indexer palette source result [result_mask] [--debug]

Arguments:
  palette     : an indexed PNG or GIF with the target palette
  source      : the image to apply the palette to and generate the mask from
  result      : path to save the resulting indexed PNG
  result_mask : path to save the alpha mask as a grayscale PNG (optional)

Notes:
  If the source declares alpha, palette index 0 is treated as transparent.
  result and result_mask are overwritten if they already exist.
  Exit status is 0 on success and 1 on any failure.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, NoReturn, Optional

from .errors import ConversionError
from .pipeline import convert
from .utils import (
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    log,
    print_banner,
)

EXIT_OK = 0
EXIT_FAILURE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with the tool's failure status."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        palette: Path to the indexed palette image
        source: Path to the image to convert
        result: Path for the indexed PNG
        result_mask: optional Path for the grayscale mask
        debug: bool for alpha stats, palette usage and timings
    """
    parser = _ArgumentParser(
        prog="sprite-indexer",
        description="Apply a fixed palette to an RGBA image and emit an alpha mask if needed.",
        epilog=(
            "The result_mask parameter can be omitted to skip producing an alpha mask. "
            "Note that result and result_mask will be overwritten if the paths already exist."
        ),
    )
    parser.add_argument(
        "palette", type=Path, help="an indexed PNG or GIF with the target palette"
    )
    parser.add_argument(
        "source",
        type=Path,
        help="the RGBA image to apply the palette to and generate the mask from",
    )
    parser.add_argument(
        "result", type=Path, help="path to save the resulting image as an indexed PNG"
    )
    parser.add_argument(
        "result_mask",
        type=Path,
        nargs="?",
        default=None,
        help="path to save the resulting alpha mask as a grayscale PNG",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Alpha stats, palette usage and timings"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    t_start = time.perf_counter()
    print_banner(args.source.name)
    try:
        convert(
            args.palette,
            args.source,
            args.result,
            args.result_mask,
            debug=args.debug,
        )
    except ConversionError as e:
        error(str(e))
        return EXIT_FAILURE

    log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
