"""
Utility methods for emover operations.

Provides small helpers shared by the loader, the scanner and the CLI:
pattern unwrapping, duration formatting and the CPU count.
"""

import os
from typing import Any, Dict, Iterable, FrozenSet

from emover.core.utils.constants import PATTERN_QUOTE_CHARS


def unwrap_pattern(pattern: str) -> str:
    """
    Strip shell quote characters surrounding an exclude pattern.

    Args:
        pattern: Raw pattern as received from the command line or config file

    Returns:
        Pattern without leading/trailing quote characters

    Examples:
        >>> unwrap_pattern("'.md'")
        '.md'
        >>> unwrap_pattern('"test"')
        'test'
    """
    return pattern.strip(PATTERN_QUOTE_CHARS)


def normalize_patterns(patterns: Iterable[str]) -> FrozenSet[str]:
    """Unwrap every pattern and drop the ones left empty."""
    unwrapped = (unwrap_pattern(p) for p in patterns)
    return frozenset(p for p in unwrapped if p)


def format_duration(seconds: float) -> str:
    """
    Format duration in seconds to human-readable string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string

    Examples:
        >>> format_duration(0.25)
        '0.25s'
        >>> format_duration(65.5)
        '1m 5.5s'
        >>> format_duration(3661)
        '1h 1m 1.0s'
    """
    if seconds < 60:
        return f"{seconds:.2f}s"

    minutes = int(seconds // 60)
    remaining_seconds = seconds % 60

    if minutes < 60:
        if remaining_seconds > 0:
            return f"{minutes}m {remaining_seconds:.1f}s"
        return f"{minutes}m"

    hours = minutes // 60
    remaining_minutes = minutes % 60

    parts = [f"{hours}h"]
    if remaining_minutes > 0:
        parts.append(f"{remaining_minutes}m")
    if remaining_seconds > 0:
        parts.append(f"{remaining_seconds:.1f}s")

    return " ".join(parts)


def get_system_info() -> Dict[str, Any]:
    """
    Get basic system information for logging.

    Returns:
        Dictionary with the CPU count the worker pool is sized against
    """
    return {"cpu_count": os.cpu_count()}
