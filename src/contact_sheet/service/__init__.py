"""Service layer orchestrating contact sheet generation."""

from .summary_service import (
    RunReport,
    SummaryResult,
    SummaryStatus,
    build_ffmpeg_command,
    generate_summary,
    process_directory,
)

__all__ = [
    "RunReport",
    "SummaryResult",
    "SummaryStatus",
    "build_ffmpeg_command",
    "generate_summary",
    "process_directory",
]
