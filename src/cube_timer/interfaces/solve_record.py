"""
Solve Record Data Models

These dataclasses define the contract between the timer engine, the
statistics code, and the solve store. History is serialised to JSON for
persistence.

Contract Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List
import json

HISTORY_VERSION = "1.0.0"


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid timestamp or duration
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SolveRecord:
    """
    One completed, logged solve.

    Records are immutable. Two records may carry identical values; equality
    is by value, identity is by position in the History.
    """
    timestamp: int          # Completion time, epoch milliseconds
    solve_time_ms: int      # Duration of the solving phase
    scramble: str           # Rendered move sequence, e.g. "R, U', F2"

    def __post_init__(self):
        if not _is_int(self.timestamp):
            raise ValueError(f"timestamp must be an integer, got {self.timestamp!r}")
        if not _is_int(self.solve_time_ms):
            raise ValueError(f"solve_time_ms must be an integer, got {self.solve_time_ms!r}")
        if self.solve_time_ms < 0:
            raise ValueError(f"solve_time_ms must be non-negative, got {self.solve_time_ms}")
        if not isinstance(self.scramble, str):
            raise ValueError(f"scramble must be a string, got {type(self.scramble).__name__}")

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "solve_time_ms": self.solve_time_ms,
            "scramble": self.scramble,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolveRecord":
        """
        Build a record from its JSON dictionary.

        Raises:
            KeyError: if a field is missing
            ValueError: if a field has the wrong type or range
        """
        return cls(
            timestamp=data["timestamp"],
            solve_time_ms=data["solve_time_ms"],
            scramble=data["scramble"],
        )


@dataclass
class History:
    """
    Insertion-ordered sequence of SolveRecord, oldest first.

    Only ever appended to or replaced wholesale.
    """
    solves: List[SolveRecord] = field(default_factory=list)

    def add(self, solve: SolveRecord) -> None:
        self.solves.append(solve)

    def times(self) -> List[int]:
        """Solve durations in insertion order."""
        return [s.solve_time_ms for s in self.solves]

    def __len__(self) -> int:
        return len(self.solves)

    def __iter__(self) -> Iterator[SolveRecord]:
        return iter(self.solves)

    def __bool__(self) -> bool:
        return bool(self.solves)

    def to_json(self) -> str:
        """Serialize to JSON for the history file."""
        data = {
            "version": HISTORY_VERSION,
            "history": [s.to_dict() for s in self.solves],
        }
        return json.dumps(data, indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "History":
        """
        Deserialize from JSON.

        Raises:
            json.JSONDecodeError: if the text is not JSON
            KeyError, ValueError, TypeError: if the document or a record is malformed
        """
        data = json.loads(json_str)
        if not isinstance(data, dict):
            raise ValueError("History document must be a JSON object")

        records = data.get("history", [])
        if not isinstance(records, list):
            raise ValueError("'history' must be a list")

        return cls(solves=[SolveRecord.from_dict(r) for r in records])
