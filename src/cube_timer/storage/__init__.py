"""Persistence adapters - solve history and user preferences."""

from .solve_store import SolveStore, JsonFileSolveStore, InMemorySolveStore
from .preferences import Preferences, PreferencesStore

__all__ = [
    'SolveStore', 'JsonFileSolveStore', 'InMemorySolveStore',
    'Preferences', 'PreferencesStore',
]
