"""Frame sampling plan mirrored from the ffmpeg ``select``/``tile`` filters."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

LOGGER = logging.getLogger(__name__)


def sample_timestamps(
    duration_seconds: Optional[float],
    *,
    window_seconds: int,
    interval_seconds: int,
) -> List[float]:
    """Timestamps selected by ``lte(t,window)*not(mod(t,interval))``.

    ``duration_seconds`` of ``None`` means the length is unknown and only the
    window bounds the selection.
    """
    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be positive.")
    if window_seconds <= 0:
        raise ValueError("window_seconds must be positive.")

    candidates = np.arange(0, window_seconds + 1, interval_seconds, dtype=float)
    if duration_seconds is not None:
        candidates = candidates[candidates < duration_seconds]
    return [float(ts) for ts in candidates]


def montage_timestamps(
    duration_seconds: Optional[float],
    *,
    window_seconds: int,
    interval_seconds: int,
    tile_slots: int,
) -> List[float]:
    """Timestamps that end up in the montage; the tile keeps the earliest ones."""
    selected = sample_timestamps(
        duration_seconds,
        window_seconds=window_seconds,
        interval_seconds=interval_seconds,
    )
    return selected[:tile_slots]


def probe_duration_seconds(video_path: Path | str) -> Optional[float]:
    """Best-effort duration lookup through OpenCV, ``None`` when unavailable."""
    capture = cv2.VideoCapture(str(video_path))
    try:
        if not capture.isOpened():
            LOGGER.debug("CV2 failed to open video file: %s", video_path)
            return None
        fps = capture.get(cv2.CAP_PROP_FPS) or 0.0
        frame_count = capture.get(cv2.CAP_PROP_FRAME_COUNT) or 0.0
    finally:
        capture.release()

    if fps <= 0 or frame_count <= 0:
        return None
    return float(frame_count) / float(fps)


__all__ = ["sample_timestamps", "montage_timestamps", "probe_duration_seconds"]
