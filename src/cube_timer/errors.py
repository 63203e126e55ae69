"""
Error taxonomy for cube-timer.

ValidationError and PersistenceReadError are always recovered locally by the
component that raises them. PersistenceWriteError reaches the caller so that
a failed write is never silently dropped.
"""

from pathlib import Path
from typing import Optional, Union


class CubeTimerError(Exception):
    """Base class for all cube-timer errors."""


class ValidationError(CubeTimerError):
    """User-supplied input could not be parsed."""

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value


class ConfigError(CubeTimerError):
    """Configuration file contains an unusable value."""


class PersistenceReadError(CubeTimerError):
    """Persisted data is missing fields or cannot be decoded."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = path


class PersistenceWriteError(CubeTimerError):
    """Persisted data could not be written."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = path
