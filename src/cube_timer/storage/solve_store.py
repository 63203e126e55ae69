"""
Solve History Stores

The timer engine and statistics code talk to an abstract SolveStore and
never assume a storage technology. Two implementations are provided:

    JsonFileSolveStore  - history kept in a JSON file, written atomically
                          (write to temp, rename) so a crash never leaves a
                          half-written file behind
    InMemorySolveStore  - history kept in a list, for tests and embedding

Reading never fails: a missing, unreadable or corrupt history reads as an
empty History. Writing raises PersistenceWriteError.

Usage:
    store = JsonFileSolveStore('~/.local/share/cube-timer/history.json')
    store.append_solve(SolveRecord(timestamp=..., solve_time_ms=..., scramble=...))
    history = store.read_history()
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union
import json
import logging
import os
import tempfile

from ..errors import PersistenceReadError, PersistenceWriteError
from ..interfaces.solve_record import History, SolveRecord

logger = logging.getLogger(__name__)


class SolveStore(ABC):
    """Append/read/clear interface over a persisted History."""

    def read_history(self) -> History:
        """
        Read the full history.

        Returns:
            History, empty if none exists or the stored data is unusable
        """
        try:
            return self._load()
        except PersistenceReadError as e:
            logger.warning(f"Discarding unreadable history: {e}")
            return History()

    @abstractmethod
    def _load(self) -> History:
        """Load history, raising PersistenceReadError on corrupt data."""

    @abstractmethod
    def write_history(self, history: History) -> None:
        """
        Replace the stored history.

        Raises:
            PersistenceWriteError: if the write fails
        """

    def append_solve(self, solve: SolveRecord) -> History:
        """Read, append one record, write back. Returns the new history."""
        history = self.read_history()
        history.add(solve)
        self.write_history(history)
        return history

    def clear(self) -> None:
        """Replace the stored history with an empty one."""
        self.write_history(History())
        logger.info("Solve history cleared")


class InMemorySolveStore(SolveStore):
    """SolveStore kept entirely in memory."""

    def __init__(self, history: Optional[History] = None):
        self._solves = list(history.solves) if history else []

    def _load(self) -> History:
        # Hand out a copy so callers cannot mutate the store in place
        return History(solves=list(self._solves))

    def write_history(self, history: History) -> None:
        self._solves = list(history.solves)


class JsonFileSolveStore(SolveStore):
    """
    SolveStore backed by a JSON file.

    The file is rewritten in full on every write. Updates are atomic
    (write to temp file in the same directory, then rename).
    """

    DEFAULT_FILENAME = "history.json"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.write_count = 0
        logger.debug(f"JsonFileSolveStore initialized: {self.path}")

    def _load(self) -> History:
        if not self.path.exists():
            logger.info(f"No history at {self.path}, starting fresh")
            return History()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                json_data = f.read()
            return History.from_json(json_data)
        except json.JSONDecodeError as e:
            raise PersistenceReadError(f"Invalid JSON in {self.path}: {e}", self.path) from e
        except (KeyError, ValueError, TypeError) as e:
            raise PersistenceReadError(f"Malformed history in {self.path}: {e}", self.path) from e
        except OSError as e:
            raise PersistenceReadError(f"Cannot read {self.path}: {e}", self.path) from e

    def write_history(self, history: History) -> None:
        json_data = history.to_json()
        temp_path = None

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix='.history_',
                suffix='.tmp'
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(json_data)

            os.replace(temp_path, self.path)
            temp_path = None
            self.write_count += 1

            logger.debug(f"History write #{self.write_count}: {len(history)} solves")

        except OSError as e:
            logger.error(f"Failed to write history to {self.path}: {e}")
            raise PersistenceWriteError(f"Cannot write {self.path}: {e}", self.path) from e

        finally:
            # Clean up temp file on error
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
