"""Duration helpers for validation and messages."""

import math

MIN_DURATION_MINUTES = 5
MAX_DURATION_MINUTES = 480


def _is_number(value) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool) and not math.isnan(value)


def format_duration(minutes: float | None) -> str:
    """Human readable duration: ``30 min``, ``1h 30m``, ``2 hours``, ``N/A``."""
    if not _is_number(minutes) or minutes < 0:
        return "N/A"

    rounded = round(minutes)
    if rounded < 60:
        return f"{rounded} min"

    hours, remaining = divmod(rounded, 60)
    if remaining == 0:
        return f"{hours} {'hour' if hours == 1 else 'hours'}"
    return f"{hours}h {remaining}m"


def is_valid_duration(
    duration: float | None,
    min_duration: int = MIN_DURATION_MINUTES,
    max_duration: int = MAX_DURATION_MINUTES,
) -> bool:
    if not _is_number(duration):
        return False
    return min_duration <= duration <= max_duration
