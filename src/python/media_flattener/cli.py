"""
Command-line interface for media-flattener.

Usage:
    media-flattener /path/to/photos [-o ./output] [--resize] [--width 1920]
                    [--quality 90] [--config config.yaml] [--manifest run.csv]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from media_flattener.config import FlattenConfig, load_settings
from media_flattener.errors import TraversalError
from media_flattener.flattener import flatten_directory
from media_flattener.progress import TqdmProgress
from media_flattener.utils import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FILE_ERRORS = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="media-flattener",
        description="Copy a tree of photos and videos into one folder with date-based names."
    )
    parser.add_argument(
        "input_root",
        type=Path,
        nargs="?",
        help="Directory to read from (overrides input_root in the config file)"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Flat output directory (default: ./output)"
    )
    parser.add_argument(
        "--resize",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Downsample JPEG output to a fixed width (--no-resize turns it off)"
    )
    parser.add_argument(
        "--width",
        type=int,
        help="Target width in pixels for --resize"
    )
    parser.add_argument(
        "--quality",
        type=int,
        help="JPEG quality for converted and resized files"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        help="Write a CSV listing every file and its outcome"
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def apply_arguments(config: FlattenConfig, args: argparse.Namespace) -> FlattenConfig:
    """Override config file values with the arguments given on the command line."""
    if args.input_root is not None:
        config.input_root = str(args.input_root)
    if args.output is not None:
        config.output_dir = str(args.output)
    if args.resize is not None:
        config.resize = args.resize
    if args.width is not None:
        config.resize_width = args.width
    if args.quality is not None:
        config.jpeg_quality = args.quality
    if args.manifest is not None:
        config.manifest = str(args.manifest)
    if args.no_progress:
        config.progress_bar = False
    if args.verbose:
        config.log_level = "DEBUG"
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = apply_arguments(load_settings(args.config), args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FATAL

    setup_logging(config.log_level)

    if not config.input_root:
        parser.print_usage(sys.stderr)
        print("Error: no input directory given", file=sys.stderr)
        return EXIT_FATAL

    try:
        result = flatten_directory(
            Path(config.input_root),
            Path(config.output_dir),
            resize=config.resize,
            resize_width=config.resize_width,
            jpeg_quality=config.jpeg_quality,
            progress=TqdmProgress(disable=not config.progress_bar),
        )
    except (TraversalError, FileNotFoundError, NotADirectoryError) as e:
        logger.error("Aborted: %s", e)
        return EXIT_FATAL

    print(result)

    if config.manifest:
        result.to_dataframe().to_csv(config.manifest, index=False)
        logger.info("Wrote manifest to %s", config.manifest)

    if result.errors:
        print("\nErrors encountered:")
        for path, error in result.errors:
            print(f"  {path}: {error}")
        return EXIT_FILE_ERRORS

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
