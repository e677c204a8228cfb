"""CLI for generating contact sheet thumbnails across a directory tree."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import (
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_TILE,
    DEFAULT_VIDEOS_DIR,
    DEFAULT_WINDOW_SECONDS,
    build_config_from_env,
    parse_tile,
)
from .service import process_directory

LOGGER = logging.getLogger("contact_sheet.cli")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _tile(value: str) -> str:
    try:
        parse_tile(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a contact sheet thumbnail for every video in a directory tree.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped files and the ffmpeg commands being run.",
    )
    parser.add_argument(
        "-d",
        "--videos-dir",
        type=Path,
        default=None,
        help=f"Root directory to scan (default: {DEFAULT_VIDEOS_DIR}).",
    )
    parser.add_argument(
        "--montage-interval-seconds",
        type=_positive_int,
        default=None,
        help=f"Seconds between sampled frames (default: {DEFAULT_INTERVAL_SECONDS}).",
    )
    parser.add_argument(
        "--montage-window-seconds",
        type=_positive_int,
        default=None,
        help=f"Only sample frames within this many leading seconds (default: {DEFAULT_WINDOW_SECONDS}).",
    )
    parser.add_argument(
        "--tile",
        type=_tile,
        default=None,
        help=f"Montage grid as <columns>x<rows> (default: {DEFAULT_TILE}).",
    )
    parser.add_argument(
        "--ffmpeg",
        dest="ffmpeg_bin",
        default=None,
        help="ffmpeg executable to invoke (default: ffmpeg on PATH).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)
    try:
        config = build_config_from_env(
            videos_dir=args.videos_dir,
            interval_seconds=args.montage_interval_seconds,
            window_seconds=args.montage_window_seconds,
            tile=args.tile,
            ffmpeg_bin=args.ffmpeg_bin,
            verbose=args.verbose,
        )
    except ValueError as exc:
        parser.error(f"invalid configuration: {exc}")

    if not config.videos_dir.is_dir():
        LOGGER.error("Target directory does not exist: %s", config.videos_dir)
        return 1

    LOGGER.info("Processing videos in: %s", config.videos_dir)
    report = process_directory(config.videos_dir, config)
    LOGGER.info(
        "Processing complete: created=%d skipped=%d failed=%d",
        report.created,
        report.skipped,
        report.failed,
    )
    for failed_path in report.failed_paths:
        LOGGER.debug("Failed: %s", failed_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
