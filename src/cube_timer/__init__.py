"""
cube-timer: Speedcubing practice timer

This package times an inspection period and a solve, logs each completed
solve with its scramble, and reports rolling and historical statistics.

Architecture:
    front end (events) → TimingStateMachine → SolveStore ← statistics

The package provides:
    1. A scramble generator that never repeats an axis consecutively
    2. An inspection/solve state machine free of any UI dependency
    3. PB, all-time average and trimmed AoN statistics
    4. Atomic JSON persistence of solve history and preferences

Version: 1.0.0
"""

__version__ = "1.0.0"

from .interfaces.solve_record import SolveRecord, History
from .engine.timer_engine import Phase, TimerEvent, TimingStateMachine
from .timing.scramble import MoveToken, ScrambleGenerator

__all__ = [
    "SolveRecord",
    "History",
    "Phase",
    "TimerEvent",
    "TimingStateMachine",
    "MoveToken",
    "ScrambleGenerator",
    "__version__",
]
