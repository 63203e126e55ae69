"""
Pytest configuration and fixtures for cube-timer tests.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


@pytest.fixture
def generator():
    """Seeded scramble generator for reproducible tests."""
    from cube_timer.timing.scramble import ScrambleGenerator
    return ScrambleGenerator(seed=1234)


@pytest.fixture
def memory_store():
    """Empty in-memory solve store."""
    from cube_timer.storage.solve_store import InMemorySolveStore
    return InMemorySolveStore()


@pytest.fixture
def machine(memory_store, generator):
    """State machine over an in-memory store with a 25-move scramble."""
    from cube_timer.engine.timer_engine import TimingStateMachine
    return TimingStateMachine(memory_store, generator=generator, scramble_length=25)


def make_history(times, start_timestamp=1_700_000_000_000):
    """Build a History from solve times (oldest first)."""
    from cube_timer.interfaces.solve_record import History, SolveRecord
    return History(solves=[
        SolveRecord(timestamp=start_timestamp + i * 60_000, solve_time_ms=t, scramble="R, U")
        for i, t in enumerate(times)
    ])

