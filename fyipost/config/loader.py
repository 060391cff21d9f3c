"""
Settings loader for YAML files.

Handles loading and validation of the application settings, with
environment variable overrides.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Dict, Any, Union
import yaml
from pydantic import ValidationError

from .models import AppSettings

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Configuration loading or validation error."""
    pass


class SettingsLoader:
    """
    Loads and validates AppSettings from an optional YAML file.

    Environment variables take precedence over file values:
    FYIPOST_STATE_DIR, FYIPOST_STORAGE, FYIPOST_USER.
    """

    ENV_OVERRIDES = {
        "FYIPOST_STATE_DIR": "state_dir",
        "FYIPOST_STORAGE": "storage",
        "FYIPOST_USER": "default_user",
    }

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the settings loader.

        Args:
            config_path: Path to a YAML settings file (optional)
        """
        self.config_path = Path(config_path) if config_path else None
        self._settings: Optional[AppSettings] = None

    def load(self) -> AppSettings:
        """
        Load settings from the file (if any) and the environment.

        Returns:
            Validated AppSettings

        Raises:
            ConfigError: If the file is unreadable or the settings are invalid
        """
        data: Dict[str, Any] = {}

        if self.config_path is not None:
            if not self.config_path.is_file():
                raise ConfigError(f"Configuration file does not exist: {self.config_path}")
            data.update(self._read_yaml(self.config_path))

        for env_var, field_name in self.ENV_OVERRIDES.items():
            value = os.environ.get(env_var)
            if value:
                logger.debug("Setting %s from %s", field_name, env_var)
                data[field_name] = value

        self._settings = self._parse_settings(data)
        return self._settings

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML file."""
        try:
            with open(file_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}")
        except IOError as e:
            raise ConfigError(f"Cannot read {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {file_path}, got {type(data).__name__}")
        return data

    def _parse_settings(self, data: Dict[str, Any]) -> AppSettings:
        """Parse application settings."""
        try:
            return AppSettings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}")

    @property
    def settings(self) -> Optional[AppSettings]:
        """Get the last loaded settings."""
        return self._settings

    def save(self, output_path: Union[str, Path], settings: Optional[AppSettings] = None) -> None:
        """
        Save settings to a YAML file.

        Args:
            output_path: File to write
            settings: Settings to save (defaults to the last loaded)
        """
        settings = settings or self._settings
        if settings is None:
            raise ConfigError("No settings loaded")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            yaml.dump(
                settings.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )
