"""Data models shared between the engine, statistics and storage."""

from .solve_record import SolveRecord, History

__all__ = ['SolveRecord', 'History']
