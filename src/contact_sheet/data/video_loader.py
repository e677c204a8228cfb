"""Walk directory trees and locate video assets for processing."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

LOGGER = logging.getLogger(__name__)

VIDEO_EXTENSIONS: tuple[str, ...] = (".mp4", ".mkv")
SUMMARY_SUFFIX = "_summary.jpg"


def iter_files(root: Path | str) -> Iterator[Path]:
    """Yield regular files under ``root`` depth-first, in pre-order.

    Entries come in the order the filesystem lists them and subdirectories
    are descended as soon as they are seen. Symlinks are not followed. A
    directory that cannot be read is logged and skipped without affecting
    its siblings.
    """
    root_path = Path(root)
    try:
        with os.scandir(root_path) as entries:
            for entry in entries:
                entry_path = root_path / entry.name
                if entry.is_dir(follow_symlinks=False):
                    yield from iter_files(entry_path)
                elif entry.is_file(follow_symlinks=False):
                    yield entry_path
    except OSError as exc:
        LOGGER.error("Error processing directory %s: %s", root_path, exc)


def is_video_file(path: Path | str) -> bool:
    return Path(path).suffix.lower() in VIDEO_EXTENSIONS


def iter_video_files(root: Path | str) -> Iterator[Path]:
    """Yield video files from ``root`` filtering by known extensions."""
    for candidate in iter_files(root):
        if is_video_file(candidate):
            yield candidate


def summary_path_for(video_path: Path | str) -> Path:
    """Return ``{dir}/{stem}_summary.jpg`` for ``video_path``."""
    source = Path(video_path)
    return source.with_name(f"{source.stem}{SUMMARY_SUFFIX}")


__all__ = [
    "iter_files",
    "iter_video_files",
    "is_video_file",
    "summary_path_for",
    "VIDEO_EXTENSIONS",
    "SUMMARY_SUFFIX",
]
