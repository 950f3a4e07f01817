from __future__ import annotations

# Wait-time estimate.
#
# A fixed-rate display heuristic, not a queueing model:
#   wait_minutes = position * MINUTES_PER_POSITION
#
# It ignores real service rate and variance on purpose; the number only has
# to be stable and easy to read next to each position.

MINUTES_PER_POSITION = 5


def estimate_wait_minutes(position: int) -> int:
    """Minutes a member at `position` (1-based) is expected to wait."""
    if isinstance(position, bool) or not isinstance(position, int):
        raise ValueError("position must be an integer")
    if position < 1:
        raise ValueError("position must be >= 1")
    return position * MINUTES_PER_POSITION


def format_wait(minutes: int) -> str:
    """Render minutes as "1h 5m", or "45m" when under an hour."""
    if minutes < 0:
        raise ValueError("minutes must be >= 0")
    hours, rest = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {rest}m"
    return f"{rest}m"


def estimate_wait(position: int) -> str:
    return format_wait(estimate_wait_minutes(position))
