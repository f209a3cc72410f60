"""
Configuration management for corpus conversion
"""

import copy
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    "export": {
        "keep_comments": False
    },
    "coref": {
        "marker": "R=coreferential"
    },
    "logging": {
        "level": "WARNING"
    }
}


class ConfigManager:
    """Manages configuration for the NEGRA to CoNLL-X conversion"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to YAML config file, if None uses defaults
        """
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        if config_path and config_path.exists():
            self.load_config(config_path)
        elif config_path:
            logger.warning(f"Config file not found: {config_path}, using defaults")

    def load_config(self, config_path: Path) -> None:
        """Load configuration from YAML file."""
        with open(config_path, 'r') as f:
            file_config = yaml.safe_load(f) or {}

        if not isinstance(file_config, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        # Deep merge with default config
        self.config = self._merge_configs(DEFAULT_CONFIG, file_config)
        logger.info(f"Loaded configuration from {config_path}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'export.keep_comments'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key_path: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'coref.marker'
            value: Value to set
        """
        keys = key_path.split('.')
        config = self.config

        # Navigate to parent dict
        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def save_config(self, config_path: Path) -> None:
        """Save current configuration to YAML file."""
        with open(config_path, 'w') as f:
            yaml.dump(self.config, f, default_flow_style=False, indent=2)
        logger.info(f"Saved configuration to {config_path}")

    def to_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary."""
        return copy.deepcopy(self.config)
