"""
Settings management for the braw2ilpd tool.

Provides configuration handling and management.
"""

import os
from typing import Dict, Any, Optional

from dotenv import load_dotenv

# Environment variables understood by load_settings()
ENV_BACKEND = "BRAW2ILPD_BACKEND"
ENV_LOG_DIR = "BRAW2ILPD_LOG_DIR"
ENV_VERBOSE = "BRAW2ILPD_VERBOSE"


class Config:
    """
    A simple configuration class to hold and provide settings.
    """
    def __init__(self, config_data: Dict[str, Any] = None):
        """
        Initialize the configuration.

        Args:
            config_data: Initial configuration data
        """
        self._config = config_data if config_data is not None else {}

    def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Retrieves a setting value by key.
        Uses dot notation for nested keys (e.g., 'logging.verbose').

        Args:
            key: The key to retrieve
            default: Default value if key is not found

        Returns:
            The setting value or default
        """
        keys = key.split('.')
        value = self._config
        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def update_config(self, new_config_data: Dict[str, Any]) -> None:
        """
        Merges new configuration data into the existing configuration.
        Keys whose value is None are ignored so CLI defaults never mask
        values coming from the environment.

        Args:
            new_config_data: New configuration data to merge
        """
        def _deep_update(source: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
            for key, value in overrides.items():
                if value is None:
                    continue
                if isinstance(value, dict) and key in source and isinstance(source[key], dict):
                    _deep_update(source[key], value)
                else:
                    source[key] = value
            return source
        self._config = _deep_update(self._config, new_config_data)

    def __repr__(self) -> str:
        return f"Config(config_data={self._config})"


def _env_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in ['true', '1', 'yes', 'on']


def load_settings(env_file: Optional[str] = None) -> Config:
    """
    Build the runtime configuration from a .env file and the environment.

    Args:
        env_file: Optional explicit .env path; the default search is used otherwise

    Returns:
        Config: settings with 'backend', 'logging.dir' and 'logging.verbose'
    """
    load_dotenv(env_file)

    return Config({
        'backend': os.environ.get(ENV_BACKEND) or None,
        'logging': {
            'dir': os.environ.get(ENV_LOG_DIR) or None,
            'verbose': _env_flag(os.environ.get(ENV_VERBOSE)),
        },
    })
