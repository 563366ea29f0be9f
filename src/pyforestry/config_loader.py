"""
Configuration loader for pyforestry.
Provides unified access to the YAML and JSON configuration files.

Configuration is layered:
- Built-in defaults (DEFAULT_SETTINGS)
- The packaged cfg/forestry.yaml
- An optional forestry.yaml in the current working directory

Each layer is merged section by section over the previous one.
"""
import copy
import json
from pathlib import Path
from typing import Dict, Any, Optional, Union

import yaml

from .exceptions import (
    ConfigurationError,
    InvalidParameterError,
    validate_non_negative,
)

DEFAULT_CONFIG_FILE = Path(__file__).parent / 'cfg' / 'forestry.yaml'
LOCAL_CONFIG_NAME = 'forestry.yaml'

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

DEFAULT_SETTINGS: Dict[str, Dict[str, Any]] = {
    'storage': {
        'extension': '.db',
        'directory': '.',
    },
    'generator': {
        'max_year_offset': 20,
        'max_height': 100.0,
        'max_growth_rate': 20.0,
    },
    'logging': {
        'level': 'WARNING',
    },
}


class ConfigLoader:
    """Loads and validates pyforestry configuration.

    Attributes:
        cfg_file: Path to the base configuration file
        override_file: Path to the optional override file
        settings: Merged configuration sections
    """

    def __init__(self, cfg_file: Optional[Path] = None,
                 override_file: Optional[Path] = None):
        """Initialize the configuration loader.

        Args:
            cfg_file: Base configuration file. Defaults to the packaged cfg/forestry.yaml.
            override_file: Optional file merged over the base configuration.
                Defaults to forestry.yaml in the current working directory.
        """
        self.cfg_file = Path(cfg_file) if cfg_file is not None else DEFAULT_CONFIG_FILE
        if override_file is None:
            override_file = Path.cwd() / LOCAL_CONFIG_NAME
        self.override_file = Path(override_file)

        self.settings = copy.deepcopy(DEFAULT_SETTINGS)
        if self.cfg_file.exists():
            self._merge(self._load_config_file(self.cfg_file), self.cfg_file)
        if self.override_file.exists() and self.override_file.resolve() != self.cfg_file.resolve():
            self._merge(self._load_config_file(self.override_file), self.override_file)

        self._validate()

    def _load_config_file(self, file_path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file.

        Args:
            file_path: Path to the configuration file

        Returns:
            Dictionary containing configuration data

        Raises:
            ConfigurationError: If file format is not supported or parsing fails
        """
        suffix = file_path.suffix.lower()

        try:
            if suffix in ['.yaml', '.yml']:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f)
            elif suffix == '.json':
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported configuration file format: {suffix}. "
                                         f"Supported formats: .yaml, .yml, .json")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML parsing error in {file_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"JSON parsing error in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration from {file_path}: {e}") from e

        if data is None:
            # Empty file or only comments
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {file_path} must contain a mapping at the top level"
            )
        return data

    def _merge(self, data: Dict[str, Any], source: Path) -> None:
        """Merge a loaded file section by section over the current settings."""
        for section, values in data.items():
            if section not in DEFAULT_SETTINGS:
                raise ConfigurationError(
                    f"Unknown configuration section '{section}' in {source}. "
                    f"Known sections: {list(DEFAULT_SETTINGS.keys())}"
                )
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ConfigurationError(f"Section '{section}' in {source} must be a mapping")
            self.settings[section].update(values)

    def _validate(self) -> None:
        extension = self.settings['storage']['extension']
        if not isinstance(extension, str) or not extension.startswith('.') or len(extension) < 2:
            raise ConfigurationError(
                f"storage.extension must look like '.db', got {extension!r}"
            )

        directory = self.settings['storage']['directory']
        if not isinstance(directory, str) or not directory.strip():
            raise ConfigurationError(
                f"storage.directory must be a non-empty path string, got {directory!r}"
            )

        level = self.settings['logging']['level']
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"logging.level must be one of {list(LOG_LEVELS)}, got {level!r}"
            )

        generator = self.settings['generator']
        try:
            for key in ('max_year_offset', 'max_height', 'max_growth_rate'):
                validate_non_negative(generator[key], f'generator.{key}')
        except InvalidParameterError as e:
            raise ConfigurationError(str(e)) from e
        if not isinstance(generator['max_year_offset'], int):
            raise ConfigurationError(
                f"generator.max_year_offset must be an integer, got {generator['max_year_offset']!r}"
            )

    @property
    def extension(self) -> str:
        """File extension used for saved forests."""
        return self.settings['storage']['extension']

    @property
    def data_dir(self) -> Path:
        """Directory where forests are saved and loaded."""
        return Path(self.settings['storage']['directory'])

    @property
    def generator_params(self) -> Dict[str, Any]:
        """Bounds for randomly generated trees."""
        return dict(self.settings['generator'])

    @property
    def log_level(self) -> str:
        return str(self.settings['logging']['level'])

    def save_config(self, file_path: Union[str, Path]) -> None:
        """Write the merged settings to a YAML file.

        Args:
            file_path: Path where to save the configuration
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.settings, f, default_flow_style=False, sort_keys=False)


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    """Get the shared configuration loader, creating it on first use.

    Returns:
        ConfigLoader instance
    """
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def reset_config_loader(loader: Optional[ConfigLoader] = None) -> None:
    """Replace or clear the shared configuration loader.

    Args:
        loader: Loader to install. When None, the next get_config_loader()
            call reloads configuration from disk.
    """
    global _config_loader
    _config_loader = loader
