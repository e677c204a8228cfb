"""Dispatch ffmpeg to build one contact sheet per video."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from ..config import SummaryConfig
from ..data.sampling import montage_timestamps, probe_duration_seconds
from ..data.video_loader import is_video_file, iter_video_files, summary_path_for

LOGGER = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


class SummaryStatus(str, Enum):
    """Terminal state of a single file."""

    IGNORED = "ignored"
    SKIPPED = "skipped"
    CREATED = "created"
    FAILED = "failed"


@dataclass(slots=True)
class SummaryResult:
    video_path: Path
    output_path: Optional[Path]
    status: SummaryStatus
    error: Optional[str] = None


@dataclass(slots=True)
class RunReport:
    """Counts accumulated over one directory walk."""

    created: int = 0
    skipped: int = 0
    failed: int = 0
    failed_paths: List[Path] = field(default_factory=list)

    def record(self, result: SummaryResult) -> None:
        if result.status is SummaryStatus.CREATED:
            self.created += 1
        elif result.status is SummaryStatus.SKIPPED:
            self.skipped += 1
        elif result.status is SummaryStatus.FAILED:
            self.failed += 1
            self.failed_paths.append(result.video_path)


def build_ffmpeg_command(video_path: Path, output_path: Path, config: SummaryConfig) -> List[str]:
    """Argument vector sampling, scaling and tiling frames into one image."""
    video_filter = (
        f"select='lte(t,{config.window_seconds})*not(mod(t,{config.interval_seconds}))',"
        f"scale={config.scale_width}:-1,"
        f"tile={config.tile_columns}x{config.tile_rows}"
    )
    return [
        config.ffmpeg_bin,
        "-i",
        str(video_path),
        "-vf",
        video_filter,
        "-frames:v",
        "1",
        str(output_path),
    ]


def _stderr_tail(exc: subprocess.CalledProcessError, lines: int = 5) -> str:
    stderr = exc.stderr
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    if not stderr:
        return str(exc)
    return "\n".join(stderr.strip().splitlines()[-lines:])


def _entry_exists(path: Path) -> bool:
    """True for any entry at ``path``, dangling symlinks included."""
    try:
        os.lstat(path)
    except FileNotFoundError:
        return False
    return True


def _log_plan(video_path: Path, config: SummaryConfig) -> None:
    duration = probe_duration_seconds(video_path)
    planned = montage_timestamps(
        duration,
        window_seconds=config.window_seconds,
        interval_seconds=config.interval_seconds,
        tile_slots=config.tile_slots,
    )
    LOGGER.debug(
        "Planned %d of %d tiles for %s (duration=%s)",
        len(planned),
        config.tile_slots,
        video_path,
        f"{duration:.1f}s" if duration is not None else "unknown",
    )


def generate_summary(
    video_path: Path | str,
    config: SummaryConfig,
    *,
    runner: Optional[Runner] = None,
) -> SummaryResult:
    """Create the contact sheet for ``video_path`` unless it already exists.

    Failures of the external tool are logged and reported through the
    returned status; they are never raised.
    """
    source = Path(video_path)
    if not is_video_file(source):
        return SummaryResult(video_path=source, output_path=None, status=SummaryStatus.IGNORED)

    output_path = summary_path_for(source)
    try:
        exists = _entry_exists(output_path)
    except OSError as exc:
        LOGGER.error("Error checking thumbnail for %s: %s", source, exc)
        return SummaryResult(source, output_path, SummaryStatus.FAILED, error=str(exc))
    if exists:
        LOGGER.debug("Skipping (thumbnail exists): %s", source)
        return SummaryResult(video_path=source, output_path=output_path, status=SummaryStatus.SKIPPED)

    run = runner or subprocess.run
    command = build_ffmpeg_command(source, output_path, config)
    LOGGER.info("Generating thumbnail for: %s", source)
    if config.verbose:
        _log_plan(source, config)
        LOGGER.debug("Running: %s", shlex.join(command))

    try:
        run(command, check=True, capture_output=True)
    except subprocess.CalledProcessError as exc:
        message = _stderr_tail(exc)
        LOGGER.error("Error generating thumbnail for %s: %s", source, message)
        return SummaryResult(source, output_path, SummaryStatus.FAILED, error=message)
    except OSError as exc:
        LOGGER.error("Error generating thumbnail for %s: %s", source, exc)
        return SummaryResult(source, output_path, SummaryStatus.FAILED, error=str(exc))

    LOGGER.info("Thumbnail created: %s", output_path)
    return SummaryResult(video_path=source, output_path=output_path, status=SummaryStatus.CREATED)


def process_directory(
    root: Path | str,
    config: SummaryConfig,
    *,
    runner: Optional[Runner] = None,
) -> RunReport:
    """Walk ``root`` and generate contact sheets one file at a time."""
    report = RunReport()
    for file_path in iter_video_files(root):
        report.record(generate_summary(file_path, config, runner=runner))
    return report


__all__ = [
    "SummaryStatus",
    "SummaryResult",
    "RunReport",
    "build_ffmpeg_command",
    "generate_summary",
    "process_directory",
]
