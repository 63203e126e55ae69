"""
Timing State Machine - orchestrates one practice solve at a time

================================================================================
PHASES
================================================================================
    SHUFFLE ──toggle──▶ INSPECTION ──toggle──▶ INSPECTION (counting down)
       ▲                                              │ countdown hits 0 (tick)
       │                                              ▼
       └──toggle (log solve)── FINISHED ◀──toggle── SOLVING ◀──toggle── SOLVING (idle)
                                                    (timing)

    DISCARD from any phase returns to SHUFFLE without logging anything.
    REGENERATE in SHUFFLE replaces the scramble.

================================================================================
TIME
================================================================================
Every event carries `now` in epoch milliseconds. Elapsed and remaining times
are recomputed from the stored absolute timestamps on every tick, so missed
or coalesced ticks cost nothing but a stale display.

The machine has no UI dependency: a front end feeds it TimerEvent values and
reads `phase`, `display`, `toggle_label`, `scramble` and `error` back.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging

from ..errors import PersistenceWriteError, ValidationError
from ..interfaces.solve_record import SolveRecord
from ..storage.preferences import DEFAULT_SCRAMBLE_LENGTH, PreferencesStore
from ..storage.solve_store import SolveStore
from ..timing.clock import INSPECTION_DURATION_MS, now_ms, saturating_sub
from ..timing.scramble import MoveToken, ScrambleGenerator, ScrambleRows, render_scramble
from ..timing.time_format import format_time

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Timer phase."""
    SHUFFLE = "Shuffle"
    INSPECTION = "Inspection"
    SOLVING = "Solve"
    FINISHED = "Finished"


class TimerEvent(Enum):
    """Semantic actions a front end can dispatch."""
    TOGGLE = "toggle"
    DISCARD = "discard"
    REGENERATE = "regenerate"
    TICK = "tick"


@dataclass
class TimerSession:
    """
    Transient per-solve state, never persisted.

    end_time is only ever set while start_time is set and the phase is
    FINISHED.
    """
    phase: Phase = Phase.SHUFFLE
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    scramble: List[MoveToken] = field(default_factory=list)

    def reset(self) -> None:
        """Back to SHUFFLE; the scramble is kept."""
        self.phase = Phase.SHUFFLE
        self.start_time = None
        self.end_time = None


def parse_scramble_length(text: str) -> int:
    """
    Parse a user-supplied scramble length.

    Raises:
        ValidationError: if text is not a non-negative integer
    """
    stripped = text.strip()
    # int() alone would also accept signs and underscores
    if not (stripped.isascii() and stripped.isdigit()):
        raise ValidationError(
            f"Invalid input: expected a non-negative whole number, got {text!r}",
            value=text
        )
    return int(stripped)


def _now(now: Optional[int]) -> int:
    return now_ms() if now is None else now


class TimingStateMachine:
    """
    Inspection / solve state machine for a single practice loop.

    Args:
        store: Where finished solves are logged
        generator: Scramble source (seeded for reproducible tests)
        preferences: Optional store persisting the configured scramble length
        scramble_length: Initial length when no preferences store is given
        inspection_duration_ms: Inspection countdown length
    """

    def __init__(
        self,
        store: SolveStore,
        generator: Optional[ScrambleGenerator] = None,
        preferences: Optional[PreferencesStore] = None,
        scramble_length: Optional[int] = None,
        inspection_duration_ms: int = INSPECTION_DURATION_MS
    ):
        self.store = store
        self.generator = generator or ScrambleGenerator()
        self.preferences = preferences
        self.inspection_duration_ms = inspection_duration_ms

        if scramble_length is not None:
            self.scramble_length = scramble_length
        elif preferences is not None:
            self.scramble_length = preferences.load().scramble_length
        else:
            self.scramble_length = DEFAULT_SCRAMBLE_LENGTH

        # True while scramble_length differs from what preferences hold on disk
        self._length_unsaved = False

        self.session = TimerSession()
        self.error = ""
        self.last_record: Optional[SolveRecord] = None
        self.display = format_time(self.inspection_duration_ms)

        self._new_scramble()

        logger.debug(
            f"TimingStateMachine ready: length={self.scramble_length}, "
            f"inspection={self.inspection_duration_ms}ms"
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.session.phase

    @property
    def scramble(self) -> List[MoveToken]:
        return list(self.session.scramble)

    @property
    def scramble_text(self) -> str:
        return render_scramble(self.session.scramble)

    def scramble_rows(self) -> ScrambleRows:
        """Active scramble grouped into rows of 5 for layout."""
        return ScrambleRows(self.session.scramble)

    @property
    def toggle_enabled(self) -> bool:
        """False while the inspection countdown is running."""
        return not (self.phase is Phase.INSPECTION and self.session.start_time is not None)

    @property
    def toggle_label(self) -> str:
        """Hint describing what the next toggle will do."""
        phase = self.session.phase
        started = self.session.start_time is not None

        if phase is Phase.SHUFFLE:
            return "Inspect (Space)"
        if phase is Phase.INSPECTION:
            return "Inspecting!" if started else "Start Inspection (Space)"
        if phase is Phase.SOLVING:
            return "Stop (Space)" if started else "Begin (Space)"
        return "Log Solve (Space)"

    # ------------------------------------------------------------------
    # Event entry point
    # ------------------------------------------------------------------

    def apply(self, event: TimerEvent, now: int, text: Optional[str] = None) -> Phase:
        """
        Apply one event and return the resulting phase.

        Args:
            event: Action to apply
            now: Current time, epoch milliseconds
            text: Length override for REGENERATE (None keeps the current length)

        Raises:
            PersistenceWriteError: if logging a finished solve fails; the
                session is left in FINISHED so the log can be retried
        """
        if event is TimerEvent.TOGGLE:
            self._handle_toggle(now)
        elif event is TimerEvent.DISCARD:
            self._reset()
        elif event is TimerEvent.REGENERATE:
            self._handle_regenerate(text)
        elif event is TimerEvent.TICK:
            self._handle_tick(now)
        else:
            raise ValueError(f"Unknown event: {event!r}")

        return self.session.phase

    # Convenience methods read the wall clock when `now` is omitted

    def toggle(self, now: Optional[int] = None) -> Phase:
        return self.apply(TimerEvent.TOGGLE, _now(now))

    def discard(self, now: Optional[int] = None) -> Phase:
        return self.apply(TimerEvent.DISCARD, _now(now))

    def regenerate(self, text: Optional[str] = None, now: Optional[int] = None) -> Phase:
        return self.apply(TimerEvent.REGENERATE, _now(now), text=text)

    def tick(self, now: Optional[int] = None) -> str:
        """Refresh and return the display string."""
        self.apply(TimerEvent.TICK, _now(now))
        return self.display

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _handle_toggle(self, now: int):
        session = self.session

        if session.phase is Phase.SHUFFLE:
            self._enter(Phase.INSPECTION)
            self.display = format_time(self.inspection_duration_ms)

        elif session.phase is Phase.INSPECTION:
            # Ignored once the countdown is running
            if session.start_time is None:
                session.start_time = now
                logger.debug(f"Inspection countdown started at {now}")

        elif session.phase is Phase.SOLVING:
            if session.start_time is None:
                session.start_time = now
                logger.debug(f"Solve timing started at {now}")
            else:
                session.end_time = now
                self._enter(Phase.FINISHED)
                self.display = format_time(saturating_sub(now, session.start_time))

        elif session.phase is Phase.FINISHED:
            self._log_solve()

    def _log_solve(self):
        session = self.session
        start = session.start_time if session.start_time is not None else 0
        end = session.end_time if session.end_time is not None else start

        record = SolveRecord(
            timestamp=end,
            solve_time_ms=saturating_sub(end, start),
            scramble=render_scramble(session.scramble),
        )

        try:
            self.store.append_solve(record)
        except PersistenceWriteError as e:
            logger.error(f"Failed to log solve {format_time(record.solve_time_ms)}: {e}")
            raise

        self.last_record = record
        logger.info(f"Logged solve: {format_time(record.solve_time_ms)}")

        self._reset()
        self._new_scramble()

    def _handle_tick(self, now: int):
        session = self.session

        if session.phase is Phase.INSPECTION:
            if session.start_time is None:
                self.display = format_time(self.inspection_duration_ms)
                return

            remaining = saturating_sub(session.start_time + self.inspection_duration_ms, now)
            self.display = format_time(remaining)

            if remaining == 0:
                session.start_time = None
                self._enter(Phase.SOLVING)

        elif session.phase is Phase.SOLVING:
            if session.start_time is None:
                self.display = format_time(0)
            else:
                self.display = format_time(saturating_sub(now, session.start_time))

        # SHUFFLE and FINISHED have nothing to refresh

    def _handle_regenerate(self, text: Optional[str]):
        if self.session.phase is not Phase.SHUFFLE:
            logger.debug(f"Regenerate ignored in {self.session.phase.value}")
            return

        if text is not None:
            if not self.configure_length(text):
                return

        self._new_scramble()

    def configure_length(self, text: str) -> bool:
        """
        Update the configured scramble length from user text.

        Empty text falls back to the previously configured length. On a
        parse failure the error message is stored in `error` and nothing
        else changes.

        Returns:
            True if the length is usable, False on validation failure
        """
        if not text.strip():
            if self.preferences is not None and not self._length_unsaved:
                self.scramble_length = self.preferences.load().scramble_length
            self.error = ""
            return True

        try:
            length = parse_scramble_length(text)
        except ValidationError as e:
            self.error = str(e)
            logger.warning(f"Rejected scramble length {text!r}: {e}")
            return False

        self.error = ""
        self.scramble_length = length

        if self.preferences is not None:
            try:
                self.preferences.set_scramble_length(length)
                self._length_unsaved = False
            except PersistenceWriteError as e:
                # Length still applies for this session
                self._length_unsaved = True
                logger.warning(f"Scramble length not persisted: {e}")

        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enter(self, phase: Phase):
        logger.debug(f"Phase {self.session.phase.value} -> {phase.value}")
        self.session.phase = phase

    def _reset(self):
        if self.session.phase is not Phase.SHUFFLE:
            logger.debug(f"Phase {self.session.phase.value} -> {Phase.SHUFFLE.value} (reset)")
        self.session.reset()
        self.display = format_time(self.inspection_duration_ms)

    def _new_scramble(self):
        self.session.scramble = self.generator.generate(self.scramble_length)
