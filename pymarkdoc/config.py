"""
Configuration management for pymarkdoc.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError

from .constants import CONFIG_FILES, DEFAULT_CONFIG, ENV_OVERRIDES
from .exceptions import ConfigError
from .utils import logger

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


class RepositoryConfig(BaseModel):
    """Manual overrides for repository detection."""
    url: str = Field(default="")
    default_branch: str = Field(default="")
    path: str = Field(default="")


class MarkdocConfig(BaseModel):
    """Options for a documentation run."""
    output: str = Field(default="")
    check: bool = Field(default=False)
    embed: bool = Field(default=False)
    format: str = Field(default="github")
    template: Dict[str, str] = Field(default_factory=dict)
    template_file: Dict[str, str] = Field(default_factory=dict)
    header: str = Field(default="")
    header_file: str = Field(default="")
    footer: str = Field(default="")
    footer_file: str = Field(default="")
    tags: Optional[List[str]] = None
    include_unexported: bool = Field(default=False)
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)


def merge_dicts(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Accept both snake_case and kebab-case keys in config files."""
    normalized = {}
    for key, value in data.items():
        key = str(key).replace('-', '_')
        if isinstance(value, dict) and key == 'repository':
            value = _normalize_keys(value)
        normalized[key] = value
    return normalized


class Config:
    """Configuration manager for pymarkdoc.

    Values are layered as defaults, then the config file, then environment
    overrides, then whatever was given on the command line.
    """

    def __init__(self, config_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        self.config_file = config_file
        self.environ = os.environ if environ is None else environ
        self.config_data = self._load_config()
        self._apply_environment_overrides()
        self.config = self._build(self.config_data)

    def _find_config_file(self) -> Optional[Path]:
        """Find a configuration file in the current directory."""
        for config_name in CONFIG_FILES:
            config_path = Path.cwd() / config_name
            if config_path.exists():
                logger.debug(f"Found config file: {config_path}")
                return config_path

        return None

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file."""
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_file:
            config_path = Path(self.config_file)
            if not config_path.exists():
                raise ConfigError(f"config file not found: {config_path}")
        else:
            config_path = self._find_config_file()

        if not config_path:
            logger.debug("No config file found, using defaults")
            return config

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if config_path.suffix in ['.yaml', '.yml']:
                    file_config = yaml.safe_load(f) or {}
                elif config_path.suffix == '.toml':
                    file_config = toml.load(f)
                elif config_path.suffix == '.json':
                    file_config = json.load(f)
                else:
                    # Files without a known extension are read as YAML
                    file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError, toml.TomlDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f"unable to load config file {config_path}: {e}") from e

        if not isinstance(file_config, dict):
            raise ConfigError(f"config file {config_path} must contain a mapping")

        logger.info(f"Loaded config from: {config_path}")
        return merge_dicts(config, _normalize_keys(file_config))

    def _apply_environment_overrides(self):
        """Apply environment variable overrides to configuration."""
        for env_var, key in ENV_OVERRIDES.items():
            value = self.environ.get(env_var)
            if value is None:
                continue
            if isinstance(DEFAULT_CONFIG[key], bool):
                self.config_data[key] = value.strip().lower() in _TRUE_VALUES
            else:
                self.config_data[key] = value

    @staticmethod
    def _build(data: Dict[str, Any]) -> MarkdocConfig:
        try:
            return MarkdocConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"invalid configuration: {e}") from e

    def options(self, **overrides: Any) -> MarkdocConfig:
        """Resolve the run options, with command-line values taking precedence.

        Args:
            overrides: Command-line values; None means "not given". Nested
                repository values use ``repository_url``,
                ``repository_default_branch`` and ``repository_path``.

        Returns:
            The resolved options
        """
        data = copy.deepcopy(self.config_data)

        for key, value in overrides.items():
            if value is None:
                continue
            if key.startswith('repository_'):
                data['repository'][key[len('repository_'):]] = value
            else:
                data[key] = value

        return self._build(data)
