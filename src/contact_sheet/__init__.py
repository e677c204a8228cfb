"""Contact sheet thumbnails for directories of videos."""

__version__ = "0.1.0"
