"""Utility functions."""

from datetime import datetime
from typing import Optional


def format_file_size_mb(size_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals."""
    return f"{size_bytes / (1024 * 1024):.2f} MB"


def format_date(value: Optional[datetime]) -> str:
    """Format a timestamp as a local calendar date."""
    if value is None:
        return "-"
    return value.astimezone().strftime("%Y-%m-%d")


def truncate_text(text: str, max_length: int = 50) -> str:
    """Truncate text to max length with ellipsis."""
    text = str(text or "").strip()
    if len(text) > max_length:
        return text[:max_length - 3] + "..."
    return text
