"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'output_format': 'srt',
    'words_per_line': 8,
    'input_suffix': '.json',
    'include_hidden': False,
    'log_dir': 'logs',
    'log_file': 'dg2srt.log',
    'log_max_bytes': 10 * 1024 * 1024,
    'log_backup_count': 5,
}

# Expected types per key; None is accepted where listed
_KEY_TYPES = {
    'output_format': (str,),
    'words_per_line': (int,),
    'input_suffix': (str,),
    'include_hidden': (bool,),
    'log_dir': (str, type(None)),
    'log_file': (str,),
    'log_max_bytes': (int,),
    'log_backup_count': (int,),
}

SUPPORTED_FORMATS = ('srt', 'vtt')

class ConfigLoader:
    """Loads configuration settings from a YAML file, layered over defaults."""

    def load_config(self, config_path: str = None) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file, or None
                         for the built-in defaults.

        Returns:
            A dictionary containing the defaults overlaid with the file's settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML, has
                              the wrong structure, or holds invalid values.
        """
        config = dict(DEFAULT_CONFIG)
        if config_path is None:
            logger.info("No configuration file given; using defaults.")
            return config

        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
             logger.error(f"Configuration path is not a file: {config_path}")
             raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}")
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except IOError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}")
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if loaded is None:
            # An empty file is treated as "no overrides"
            loaded = {}
        if not isinstance(loaded, dict):
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")

        for key, value in loaded.items():
            if key not in DEFAULT_CONFIG:
                logger.warning(f"Ignoring unknown configuration key '{key}' in {config_path}")
                continue
            config[key] = value

        self.validate(config)
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config

    @staticmethod
    def validate(config: dict) -> None:
        """
        Checks value types and ranges.

        Raises:
            ConfigurationError: On the first invalid value.
        """
        for key, types in _KEY_TYPES.items():
            value = config.get(key)
            # bool is an int subclass; keep true/false out of numeric keys
            if not isinstance(value, types) or (isinstance(value, bool) and bool not in types):
                raise ConfigurationError(f"Configuration key '{key}' has invalid value {value!r}.")

        if config['output_format'].lower() not in SUPPORTED_FORMATS:
            raise ConfigurationError(
                f"Unsupported output_format '{config['output_format']}'. Choose one of {', '.join(SUPPORTED_FORMATS)}."
            )
        if config['words_per_line'] < 1:
            raise ConfigurationError("words_per_line must be at least 1.")
        if not config['input_suffix']:
            raise ConfigurationError("input_suffix cannot be empty.")
        if config['log_max_bytes'] < 0 or config['log_backup_count'] < 0:
            raise ConfigurationError("log_max_bytes and log_backup_count cannot be negative.")
