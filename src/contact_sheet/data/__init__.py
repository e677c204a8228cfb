"""Directory walking and sampling helpers for contact sheet generation."""

from .sampling import montage_timestamps, probe_duration_seconds, sample_timestamps
from .video_loader import (
    VIDEO_EXTENSIONS,
    is_video_file,
    iter_files,
    iter_video_files,
    summary_path_for,
)

__all__ = [
    "iter_files",
    "iter_video_files",
    "is_video_file",
    "summary_path_for",
    "VIDEO_EXTENSIONS",
    "sample_timestamps",
    "montage_timestamps",
    "probe_duration_seconds",
]
