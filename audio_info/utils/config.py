"""Configuration management for Audio Info."""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..exceptions import ConfigError


LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class Config:
    """Configuration manager that loads and provides access to configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        The packaged default_config.yaml is always loaded first. A
        local_config.yaml next to it, or the file at config_path when
        given, is merged on top.

        Args:
            config_path: Path to an overriding configuration file
        """
        self.config_dir = Path(__file__).parent.parent / "config"
        self.default_path = self.config_dir / "default_config.yaml"

        if config_path is None:
            local_config = self.config_dir / "local_config.yaml"
            if local_config.exists():
                config_path = str(local_config)

        self.config_path = Path(config_path) if config_path else None
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load the default configuration and merge any override on top."""
        config = self._read_yaml(self.default_path)

        if self.config_path is not None:
            if not self.config_path.exists():
                raise ConfigError(f"Configuration file not found: {self.config_path}")
            config = _merge(config, self._read_yaml(self.config_path))

        return config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration {path} must be a mapping, got {type(data).__name__}")

        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'output.format')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self.config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get_audio_extensions(self) -> List[str]:
        """Get audio file extensions, lower-cased and without leading dot."""
        extensions = self.get('audio.extensions') or []
        return [str(ext).lower().lstrip('.') for ext in extensions]

    def get_log_level(self) -> str:
        """Get the configured logging level, validated against the known names."""
        level = str(self.get('logging.level') or 'WARNING').upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"Invalid logging level in configuration: {level}")
        return level

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return self.get(key)

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config."""
        return self.get(key) is not None


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
