"""
Clock helpers shared by the timer engine and the statistics code.

All durations are integer milliseconds. Subtraction saturates at zero and
division by zero yields zero, so no arithmetic edge case ever raises.
"""

import time

# Fixed WCA-style inspection period
INSPECTION_DURATION_MS = 15_000

SECOND_MS = 1_000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def saturating_sub(lhs: int, rhs: int) -> int:
    """Return lhs - rhs, or 0 when rhs exceeds lhs."""
    if rhs > lhs:
        return 0
    return lhs - rhs


def saturating_div(lhs: int, rhs: int) -> int:
    """Integer division that returns 0 instead of dividing by zero."""
    if rhs == 0:
        return 0
    return lhs // rhs
