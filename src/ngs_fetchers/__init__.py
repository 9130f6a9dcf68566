"""Data fetchers for Next Gen Stats."""

from .ngs_fetcher import load_ngs_weekly, validate_ngs_frame

__all__ = [
    "load_ngs_weekly",
    "validate_ngs_frame",
]
