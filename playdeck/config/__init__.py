"""Simple YAML configuration loader for PlayDeck."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "library": {
        "music_directory": "music",
        "slots": 3,
    },
    "storage": {
        "data_directory": ".",
    },
    "playback": {
        "chunk_samples": 8192,
        "seek_seconds": 10,
        "pause_poll_seconds": 0.1,
        "track_delay_seconds": 2.0,
    },
    "logging": {
        "level": "INFO",
        "file_path": "data/logs/playdeck.log",
        "console_output": True,
    },
}

# Keys holding paths that are resolved against the config file's directory
PATH_KEYS = (
    ("library", "music_directory"),
    ("storage", "data_directory"),
    ("logging", "file_path"),
)


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class PlayDeckConfig:
    """PlayDeck configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, built-in
                        defaults are used.
        """
        self.config_file = Path(config_path) if config_path else None
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_file is None:
            logger.info("No configuration file given, using defaults")
            return

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        _merge(self.config, self._load_config())
        self._resolve_paths(self.config)

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ValueError(f"Failed to load configuration: {e}")

        if config is None:
            logger.warning(f"Configuration file {self.config_file} is empty, using defaults")
            return {}
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent
        for section, key in PATH_KEYS:
            value = config.get(section, {}).get(key)
            if isinstance(value, str) and not os.path.isabs(value):
                config[section][key] = str(config_dir / value)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'playback.seek_seconds').

        Args:
            key_path: Dot-separated key path
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config
        for key in key_path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_data_directory(self) -> str:
        """Get data directory path."""
        return str(Path(self.get('storage.data_directory', '.')).absolute())

    def get_music_directory(self) -> str:
        return self.get('library.music_directory', 'music')
