"""
Configuration loading.

Example config.toml:

    [timer]
    scramble_length = 25
    inspection_duration_ms = 15000

    [storage]
    data_dir = "~/.local/share/cube-timer"
    history_file = "history.json"
    preferences_file = "preferences.json"

    [logging]
    level = "INFO"
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import logging
import toml

from .errors import ConfigError
from .storage.preferences import DEFAULT_SCRAMBLE_LENGTH
from .timing.clock import INSPECTION_DURATION_MS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'timer': {
        'scramble_length': DEFAULT_SCRAMBLE_LENGTH,
        'inspection_duration_ms': INSPECTION_DURATION_MS,
    },
    'storage': {
        'data_dir': '~/.local/share/cube-timer',
        'history_file': 'history.json',
        'preferences_file': 'preferences.json',
    },
    'logging': {
        'level': 'INFO',
    },
}


@dataclass(frozen=True)
class TimerConfig:
    """Normalised configuration values."""
    scramble_length: int
    inspection_duration_ms: int
    data_dir: Path
    history_file: str
    preferences_file: str
    log_level: str

    @property
    def history_path(self) -> Path:
        return self.data_dir / self.history_file

    @property
    def preferences_path(self) -> Path:
        return self.data_dir / self.preferences_file


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from TOML file, merged over the defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and Path(config_path).exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = toml.load(f)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e

        for section, values in loaded.items():
            if isinstance(values, dict) and section in config:
                config[section].update(values)
        logger.debug(f"Loaded config from {config_path}")
    elif config_path:
        logger.warning(f"Config file {config_path} not found, using defaults")

    return config


def _non_negative_int(section: Dict[str, Any], key: str) -> int:
    value = section.get(key)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ConfigError(f"{key} must be a non-negative integer, got {value!r}")
    return value


def build_timer_config(config: Dict[str, Any], data_dir: Optional[str] = None) -> TimerConfig:
    """
    Normalise a config dictionary into a TimerConfig.

    Args:
        config: Dictionary as returned by load_config()
        data_dir: Override for storage.data_dir (command line)

    Raises:
        ConfigError: on invalid values
    """
    timer = config.get('timer', {})
    storage = config.get('storage', {})
    log_cfg = config.get('logging', {})

    return TimerConfig(
        scramble_length=_non_negative_int(timer, 'scramble_length'),
        inspection_duration_ms=_non_negative_int(timer, 'inspection_duration_ms'),
        data_dir=Path(data_dir or storage.get('data_dir', '.')).expanduser(),
        history_file=str(storage.get('history_file', 'history.json')),
        preferences_file=str(storage.get('preferences_file', 'preferences.json')),
        log_level=str(log_cfg.get('level', 'INFO')).upper(),
    )
