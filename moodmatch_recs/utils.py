"""
Utility Functions
=================

Common utilities used across the MoodMatch Recs system.
"""

import math
from typing import Iterator, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def format_duration(duration_ms: Optional[int]) -> str:
    """
    Format a millisecond duration as ``M:SS``.

    Args:
        duration_ms: Duration in milliseconds (None for unknown)

    Returns:
        Formatted duration, or an empty string when unknown
    """
    if duration_ms is None:
        return ""

    total_seconds = int(duration_ms) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (not to even)."""
    return int(math.floor(value + 0.5))


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """
    Split items into consecutive batches.

    Args:
        items: Items to split
        size: Maximum size of each batch

    Yields:
        Lists of at most ``size`` items, in input order
    """
    if size <= 0:
        raise ValueError("batch size must be positive")

    for i in range(0, len(items), size):
        yield list(items[i:i + size])


def normalize_track_id(value: str) -> str:
    """
    Normalize various track URL formats to a track ID.

    Args:
        value: Spotify track URL, URI, or ID

    Returns:
        Clean track ID
    """
    value = value.strip()

    if "spotify.com/track/" in value:
        return value.split("/track/")[-1].split("?")[0]
    if value.startswith("spotify:track:"):
        return value.split("spotify:track:")[-1]
    return value
