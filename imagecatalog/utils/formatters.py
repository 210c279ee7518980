"""
Formatting helpers for CLI output.
"""

from __future__ import annotations

# Re-export format_size from models for convenience
from ..models import format_size


def format_number(n: int) -> str:
    """
    Thousands-separated integer.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
    """
    return f"{n:,}"


def format_elapsed(seconds: float) -> str:
    """
    Duration of a scan.

    Short scans keep a decimal, longer ones are shown in minutes or hours.

    Examples:
        >>> format_elapsed(0.42)
        '0.4s'
        >>> format_elapsed(150)
        '2m 30s'
        >>> format_elapsed(3665)
        '1h 1m'
    """
    if seconds < 10:
        return f"{seconds:.1f}s"
    if seconds < 60:
        return f"{int(seconds)}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m"


__all__ = ['format_number', 'format_elapsed', 'format_size']
