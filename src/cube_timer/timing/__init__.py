"""
Scramble generation, clock arithmetic and time formatting.
"""

from .scramble import Axis, MoveToken, ScrambleGenerator, ScrambleRows
from .time_format import format_time

__all__ = ['Axis', 'MoveToken', 'ScrambleGenerator', 'ScrambleRows', 'format_time']
