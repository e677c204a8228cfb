"""Runtime configuration for contact sheet generation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

DEFAULT_VIDEOS_DIR = Path("/mnt/o/_obs/_test")
DEFAULT_WINDOW_SECONDS = 750
DEFAULT_INTERVAL_SECONDS = 30
DEFAULT_TILE = "5x5"
DEFAULT_SCALE_WIDTH = 320
DEFAULT_FFMPEG_BIN = "ffmpeg"


def parse_tile(text: str) -> Tuple[int, int]:
    """Parse a ``<columns>x<rows>`` grid specification."""
    parts = text.strip().lower().split("x")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Tile must look like '<columns>x<rows>', got {text!r}")
    columns, rows = int(parts[0]), int(parts[1])
    if columns <= 0 or rows <= 0:
        raise ValueError(f"Tile dimensions must be positive, got {text!r}")
    return columns, rows


@dataclass(frozen=True, slots=True)
class SummaryConfig:
    """Settings read once at startup and shared by the walker and dispatcher."""

    videos_dir: Path = DEFAULT_VIDEOS_DIR
    window_seconds: int = DEFAULT_WINDOW_SECONDS
    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    tile: str = DEFAULT_TILE
    scale_width: int = DEFAULT_SCALE_WIDTH
    ffmpeg_bin: str = DEFAULT_FFMPEG_BIN
    verbose: bool = False
    _grid: Tuple[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("window_seconds", "interval_seconds", "scale_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive.")
        object.__setattr__(self, "videos_dir", Path(self.videos_dir))
        object.__setattr__(self, "_grid", parse_tile(self.tile))

    @property
    def tile_columns(self) -> int:
        return self._grid[0]

    @property
    def tile_rows(self) -> int:
        return self._grid[1]

    @property
    def tile_slots(self) -> int:
        return self._grid[0] * self._grid[1]


def build_config_from_env(**overrides) -> SummaryConfig:
    """Populate :class:`SummaryConfig` from environment variables.

    Keyword overrides whose value is not ``None`` take precedence over the
    environment, which in turn takes precedence over the defaults.
    """
    values: dict[str, object] = {}
    if os.getenv("CONTACT_SHEET_VIDEOS_DIR"):
        values["videos_dir"] = Path(os.environ["CONTACT_SHEET_VIDEOS_DIR"])
    if os.getenv("CONTACT_SHEET_FFMPEG"):
        values["ffmpeg_bin"] = os.environ["CONTACT_SHEET_FFMPEG"]
    if os.getenv("CONTACT_SHEET_WINDOW_SECONDS"):
        values["window_seconds"] = int(os.environ["CONTACT_SHEET_WINDOW_SECONDS"])
    values.update({key: value for key, value in overrides.items() if value is not None})
    return SummaryConfig(**values)


__all__ = [
    "SummaryConfig",
    "build_config_from_env",
    "parse_tile",
    "DEFAULT_VIDEOS_DIR",
    "DEFAULT_WINDOW_SECONDS",
    "DEFAULT_INTERVAL_SECONDS",
    "DEFAULT_TILE",
    "DEFAULT_SCALE_WIDTH",
]
