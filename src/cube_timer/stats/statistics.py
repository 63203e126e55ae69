"""
Solve Statistics

Pure functions of a History: personal best, all-time average and trimmed
windowed averages (AoN). Nothing is cached; every call reads the history
it is given.

AoN trimming:
    Take the most recent n solves, drop exactly one minimum and exactly one
    maximum (positionally, so ties at an extreme lose only one member), and
    average the remaining n - 2 with integer division.

All results are integer milliseconds. 0 is the "no data" sentinel.
"""

from dataclasses import dataclass
from typing import Dict
import logging
import numpy as np

from ..interfaces.solve_record import History
from ..timing.clock import saturating_div
from ..timing.time_format import format_time

logger = logging.getLogger(__name__)

# Smallest window with at least one value left after trimming
MIN_TRIMMED_WINDOW = 3


def _times(history: History) -> np.ndarray:
    return np.fromiter(history.times(), dtype=np.int64, count=len(history))


def personal_best(history: History) -> int:
    """Fastest solve, or 0 for an empty history."""
    if not history:
        return 0
    return int(_times(history).min())


def all_time_average(history: History) -> int:
    """Mean of every solve, integer-divided; 0 for an empty history."""
    times = _times(history)
    return saturating_div(int(times.sum()), len(times))


def average_of_n(history: History, n: int) -> int:
    """
    Trimmed mean of the most recent n solves.

    Args:
        history: Solve history, oldest first
        n: Window size (n >= 3 for a meaningful result)

    Returns:
        Average of the window minus one best and one worst solve, or 0 when
        fewer than n solves exist or n < 3
    """
    if n < MIN_TRIMMED_WINDOW or len(history) < n:
        return 0

    window = _times(history)[-n:]
    trimmed = np.delete(window, [int(window.argmin()), int(window.argmax())])

    # argmin == argmax only when every value is equal; drop a second element then
    if trimmed.size == n - 1:
        trimmed = trimmed[1:]

    return saturating_div(int(trimmed.sum()), n - 2)


def average_of_5(history: History) -> int:
    """AO5: average_of_n with n = 5."""
    return average_of_n(history, 5)


@dataclass(frozen=True)
class StatsSummary:
    """Snapshot of the headline statistics shown on the stats screen."""
    count: int
    personal_best: int
    average: int
    ao5: int
    ao50: int
    ao100: int

    def as_display(self) -> Dict[str, str]:
        """Formatted values keyed by their display label."""
        return {
            "PB": format_time(self.personal_best),
            "Average": format_time(self.average),
            "AO5": format_time(self.ao5),
            "AO50": format_time(self.ao50),
            "AO100": format_time(self.ao100),
        }


def summarize(history: History) -> StatsSummary:
    """Compute every headline statistic in one pass over the caller's history."""
    summary = StatsSummary(
        count=len(history),
        personal_best=personal_best(history),
        average=all_time_average(history),
        ao5=average_of_5(history),
        ao50=average_of_n(history, 50),
        ao100=average_of_n(history, 100),
    )
    logger.debug(f"Stats: {summary}")
    return summary
