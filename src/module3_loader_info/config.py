"""
Configuration loading for loader info components.
"""

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")


def get_default_config() -> Dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Default configuration dictionary
    """
    return {
        "system": {
            "verbose": False,
        },
        "reconstruction": {
            "verify_output": True,
        },
        "swf": {
            "zlib_level": 9,
            "lzma_preset": 6,
        },
    }


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file, layered over the defaults.

    Args:
        config_path: Path to configuration YAML file.
                     If None, uses default_config.yaml next to this module.

    Returns:
        Configuration dictionary
    """
    defaults = get_default_config()

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not os.path.exists(config_path):
            return defaults

    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not load config %s (%s); using defaults", config_path, e)
        return defaults

    if not isinstance(loaded, dict):
        logger.warning("Config %s is not a mapping; using defaults", config_path)
        return defaults

    return _merge(defaults, loaded)
