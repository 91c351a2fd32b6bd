"""
Configuration

Loads the YAML configuration file and merges it over built-in defaults.
"""

import copy
import logging
import os
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config.yaml'

DEFAULTS: Dict[str, Any] = {
    'backend': {'type': 'exiv2'},
    'decoding': {'errors': 'replace'},
    'logging': {'level': 'INFO'},
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries without mutating the originals."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Defaults overlaid with the file's settings; a missing file yields
        the defaults

    Raises:
        ValueError: If the file is not valid YAML or not a mapping
    """
    if not os.path.exists(config_path):
        logger.debug(f"No config file at {config_path}, using defaults")
        return copy.deepcopy(DEFAULTS)

    with open(config_path, 'r') as f:
        try:
            config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ValueError(f"Invalid config file {config_path}: expected a mapping")

    return _deep_merge(DEFAULTS, config)
