"""
Persisted user preferences: scramble length and dark mode.

Loading falls back to defaults when the file is missing or unreadable.
"""

from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Optional, Union
import json
import logging
import os
import tempfile

from ..errors import PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)

DEFAULT_SCRAMBLE_LENGTH = 25


@dataclass(frozen=True)
class Preferences:
    """User preferences. dark_mode is carried for the UI only."""
    scramble_length: int = DEFAULT_SCRAMBLE_LENGTH
    dark_mode: bool = False

    @classmethod
    def from_dict(cls, data: dict, defaults: Optional["Preferences"] = None) -> "Preferences":
        base = defaults or cls()
        length = data.get("scramble_length", base.scramble_length)
        dark = data.get("dark_mode", base.dark_mode)

        if not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise ValueError(f"Invalid scramble_length: {length!r}")
        if not isinstance(dark, bool):
            raise ValueError(f"Invalid dark_mode: {dark!r}")

        return cls(scramble_length=length, dark_mode=dark)


class PreferencesStore:
    """
    Reads and writes Preferences as a small JSON file.

    Args:
        path: Preferences file location
        defaults: Values used when nothing usable is on disk
    """

    DEFAULT_FILENAME = "preferences.json"

    def __init__(self, path: Union[str, Path], defaults: Optional[Preferences] = None):
        self.path = Path(path).expanduser()
        self.defaults = defaults or Preferences()

    def load(self) -> Preferences:
        """Load preferences, returning defaults on any read problem."""
        try:
            return self._load()
        except PersistenceReadError as e:
            logger.warning(f"Using default preferences: {e}")
            return self.defaults

    def _load(self) -> Preferences:
        if not self.path.exists():
            return self.defaults

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("preferences must be a JSON object")
            return Preferences.from_dict(data, self.defaults)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            raise PersistenceReadError(str(e), self.path) from e

    def save(self, prefs: Preferences) -> None:
        """
        Write preferences atomically.

        Raises:
            PersistenceWriteError: if the file cannot be written
        """
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix='.preferences_',
                suffix='.tmp'
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(asdict(prefs), f, indent=2)
            os.replace(temp_path, self.path)
            temp_path = None
        except OSError as e:
            logger.error(f"Failed to save preferences: {e}")
            raise PersistenceWriteError(f"Cannot write {self.path}: {e}", self.path) from e
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)

    def set_scramble_length(self, length: int) -> Preferences:
        prefs = replace(self.load(), scramble_length=length)
        self.save(prefs)
        return prefs

    def set_dark_mode(self, dark: bool) -> Preferences:
        prefs = replace(self.load(), dark_mode=dark)
        self.save(prefs)
        return prefs
