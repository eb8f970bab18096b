"""
Configuration management for patmatch.

This module provides the ConfigurationManager class for loading matcher
options from a YAML file, applying environment variable overrides, and
merging explicit keyword overrides on top.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from patmatch.core.exceptions import ConfigurationError
from patmatch.core.interfaces import MatcherOptions


logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = 'PATMATCH_CONFIG'

# Environment variable -> option name
ENV_OVERRIDES = {
    'PATMATCH_LOCALE': 'locale',
    'PATMATCH_ALLOW_FUZZY': 'allow_fuzzy_matching',
    'PATMATCH_ALLOW_SUBSTRING': 'allow_simple_substring_matching',
    'PATMATCH_INCLUDE_SPANS': 'include_matched_spans',
    'PATMATCH_CONTAINER_CHARS': 'container_split_characters',
}


class ConfigurationManager:
    """
    Loads matcher options for patmatch.

    This class handles:
    - Loading options from a YAML file (under a ``matcher:`` key or at the root)
    - Applying ``PATMATCH_*`` environment overrides
    - Applying explicit keyword overrides

    Precedence, highest first: keyword overrides, environment, file, defaults.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a YAML configuration file. If None, the
                ``PATMATCH_CONFIG`` environment variable is consulted.
            environ: Environment mapping to read overrides from. Defaults to ``os.environ``.
        """
        self.environ = os.environ if environ is None else environ

        if config_path is None:
            config_path = self.environ.get(CONFIG_PATH_ENV) or None

        self.config_path = Path(config_path).expanduser() if config_path else None

        if self.config_path is not None and not self.config_path.exists():
            raise ConfigurationError(f"Configuration file does not exist: {self.config_path}")

        self._file_options_cache: Optional[Dict[str, Any]] = None

        logger.debug(f"ConfigurationManager initialized with config_path: {self.config_path}")

    def load_file_options(self) -> Dict[str, Any]:
        """
        Load the raw option mapping from the configuration file.

        Returns:
            Dictionary of options from the file, empty when no file is configured.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
        """
        if self._file_options_cache is not None:
            return self._file_options_cache

        if self.config_path is None:
            self._file_options_cache = {}
            return self._file_options_cache

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing configuration YAML: {e}")
        except IOError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}")

        if not isinstance(document, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {self.config_path}")

        options = document.get('matcher', document)
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise ConfigurationError("The 'matcher' section must be a mapping")

        self._file_options_cache = dict(options)
        logger.debug(f"Loaded {len(self._file_options_cache)} matcher options from {self.config_path}")
        return self._file_options_cache

    def load_env_options(self) -> Dict[str, Any]:
        """
        Collect option overrides from the environment.

        Returns:
            Dictionary of options set through ``PATMATCH_*`` variables.
        """
        options: Dict[str, Any] = {}
        for env_name, option_name in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value is None or value == '':
                continue
            options[option_name] = value
        return options

    def load_options(self, **overrides: Any) -> MatcherOptions:
        """
        Build the effective matcher options.

        Args:
            **overrides: Option values that take precedence over every other
                source. ``None`` values are ignored.

        Returns:
            The merged MatcherOptions.

        Raises:
            ConfigurationError: If any source holds an unknown or invalid option.
        """
        merged: Dict[str, Any] = {}
        merged.update(self.load_file_options())
        merged.update(self.load_env_options())
        merged.update({key: value for key, value in overrides.items() if value is not None})

        return MatcherOptions.from_dict(merged)

    def clear_cache(self) -> None:
        """Forget the cached file contents so the next load re-reads the file."""
        self._file_options_cache = None
