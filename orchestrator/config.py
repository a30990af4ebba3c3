#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration management for batch conversion.
Loads YAML config with environment variable support.
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from conversion.errors import ConfigurationError
from conversion.overwrite import OverwritePolicy

DEFAULT_CONFIG_PATH = "convert-config.yaml"


class ConfigManager:
    """
    Configuration manager that loads settings from a YAML file.
    Missing files fall back to built-in defaults; values given in the
    file are merged over the defaults section by section.
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH, quiet: bool = False):
        self.config_path = Path(config_path)
        self.quiet = quiet
        self._config: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load configuration file"""
        self._config = self._default_config()

        if not self.config_path.exists():
            if not self.quiet:
                print(f"[Config] Config file not found, using defaults: {self.config_path}")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read config {self.config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config {self.config_path} must be a mapping")

        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(self._config.get(section), dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _default_config(self) -> Dict[str, Any]:
        """Return default configuration"""
        return {
            'transcoder': {
                'command': 'ffmpeg',
                'timeout': None
            },
            'conversion': {
                'extension': 'flac',
                'overwrite': 'undecided',
                'copy': False
            },
            'manifest': {
                'path': 'convert_data.json'
            },
            'art': {
                'download_dir': 'temp',
                'timeout': 30
            },
            'console': {
                'pause_on_exit': False
            }
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value with dot notation.

        Examples:
            config.get('transcoder.command')
            config.get('conversion.extension')

        Environment variables are expanded if value is like ${VAR_NAME}
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default

        # Expand environment variables
        if isinstance(value, str) and value.startswith('${') and value.endswith('}'):
            env_var = value[2:-1]
            return os.environ.get(env_var, default)

        return value

    def _flag(self, key: str, default: bool) -> bool:
        """Read a yes/no setting, accepting YAML booleans or their quoted text"""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ('true', 'yes'):
            return True
        if text in ('false', 'no'):
            return False
        raise ConfigurationError(f"{key} must be true or false (got {value!r})")

    @property
    def transcoder(self) -> str:
        return self.get('transcoder.command', 'ffmpeg')

    @property
    def transcoder_timeout(self) -> Optional[float]:
        """Seconds to wait for one transcoder run, None to wait indefinitely"""
        value = self.get('transcoder.timeout')
        if value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"transcoder.timeout must be a number of seconds (got {value!r})"
            ) from None

    @property
    def extension(self) -> str:
        return str(self.get('conversion.extension', 'flac')).lstrip('.')

    @property
    def overwrite_policy(self) -> OverwritePolicy:
        value = self.get('conversion.overwrite', 'undecided')
        # Unquoted yes/no in YAML load as booleans
        if isinstance(value, bool):
            value = 'yes' if value else 'no'
        value = str(value).lower()
        try:
            return OverwritePolicy(value)
        except ValueError:
            raise ConfigurationError(
                f"conversion.overwrite must be yes, no or undecided (got {value!r})"
            ) from None

    @property
    def copy(self) -> bool:
        return self._flag('conversion.copy', False)

    @property
    def manifest_path(self) -> str:
        return self.get('manifest.path', 'convert_data.json')

    @property
    def art_download_dir(self) -> str:
        return self.get('art.download_dir', 'temp')

    @property
    def art_timeout(self) -> float:
        return float(self.get('art.timeout', 30))

    @property
    def pause_on_exit(self) -> bool:
        return self._flag('console.pause_on_exit', False)

    def __repr__(self) -> str:
        return f"ConfigManager(config={self.config_path})"
