#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("semnote")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. SEMNOTE_CONFIG environment variable
    2. ~/.semnote/ directory
    """
    if 'SEMNOTE_CONFIG' in os.environ:
        path = Path(os.environ['SEMNOTE_CONFIG'])
        if path.exists():
            return path

    semnote_dir = Path.home() / '.semnote'
    for filename in CONFIG_FILENAMES:
        path = semnote_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path
    return semnote_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "notes": {
            "namespace": "semver",
        },
        "remote": {
            "name": "origin",
        },
        "tags": {
            "continue_on_error": True,
            "match": "[0-9]*.[0-9]*.[0-9]*",
        },
        "git": {
            "timeout_seconds": 30,
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s"
        },
    }


def load_config():
    """Load configuration from file."""
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f)
            else:
                # Default to JSON format
                with open(config_path, 'r') as f:
                    file_config = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e

        if file_config:
            if not isinstance(file_config, dict):
                raise ConfigError(f"Config file {config_path} must contain a mapping")
            config = merge_configs(config, file_config)
        logger.debug(f"Loaded config from {config_path}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def configure_logging(config, verbose=False):
    """Apply the configured log level and format to the package logger."""
    settings = config.get("logging", {})
    level = "DEBUG" if verbose else str(settings.get("level", "WARNING")).upper()
    logger.setLevel(getattr(logging, level, logging.WARNING))

    fmt = settings.get("format")
    if fmt:
        formatter = logging.Formatter(fmt)
        for handler in logging.getLogger().handlers:
            handler.setFormatter(formatter)


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def _convert_env_value(value, current):
    """Convert an environment string to the type of the setting it replaces."""
    if isinstance(current, bool):
        if value.lower() in ('true', 'yes', 'on', '1'):
            return True
        if value.lower() in ('false', 'no', 'off', '0'):
            return False
        return value
    if isinstance(current, int) and value.isdigit():
        return int(value)
    return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: SEMNOTE_SECTION_KEY
    For example: SEMNOTE_TAGS_CONTINUE_ON_ERROR=false
    """
    env_prefix = "SEMNOTE_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == "SEMNOTE_CONFIG":
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts_from_key = config_key.split('_')
                if key_parts[i : i + len(config_key_parts_from_key)] == config_key_parts_from_key:
                    if len(config_key_parts_from_key) > best_match_len:
                        best_match_len = len(config_key_parts_from_key)
                        matched_key = config_key

            if matched_key:
                # If we are at the end of the env var, we have found the key to set
                if i + best_match_len == len(key_parts):
                    current_level[matched_key] = _convert_env_value(value, current_level[matched_key])
                    break

                # Otherwise, we descend into the dictionary
                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    # Path conflict, e.g., env var is longer but we found a non-dict value
                    break
            else:
                # No match found
                break

    return config
