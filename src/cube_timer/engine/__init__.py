"""Core timing engine - the inspection/solve state machine.

Contains:
- TimingStateMachine: Phase transitions, elapsed time and solve logging
"""

from .timer_engine import Phase, TimerEvent, TimerSession, TimingStateMachine

__all__ = ['Phase', 'TimerEvent', 'TimerSession', 'TimingStateMachine']
