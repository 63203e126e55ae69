"""Solve statistics - PB, averages and trimmed AoN."""

from .statistics import (
    personal_best,
    all_time_average,
    average_of_n,
    average_of_5,
    summarize,
    StatsSummary,
)

__all__ = [
    'personal_best', 'all_time_average', 'average_of_n', 'average_of_5',
    'summarize', 'StatsSummary',
]
