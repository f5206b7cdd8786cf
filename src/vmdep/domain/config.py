from __future__ import annotations

"""
Configuration Domain Management.

Handles the default scan configuration and its persistent JSON storage in
the user data directory (or an explicit file). Loading never fails: a
missing or corrupted file falls back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from vmdep.domain.constants import (
    CONFIG_FILE_NAME,
    CURRENT_CONFIG_VERSION,
    DEFAULT_DIRECTIVES,
    DEFAULT_ENCODING,
    DEFAULT_EXTENSION,
)
from vmdep.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# Explicit override of the persistent config location (tests, embedding)
CONFIG_FILE: Optional[str] = None


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default scan configuration.
    This dictionary drives the behavior of the traversal engine.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Resolution
        "roots": [os.getcwd()],
        "file": "",

        # Lexer
        "directives": list(DEFAULT_DIRECTIVES),
        "encoding": DEFAULT_ENCODING,
        "extension": DEFAULT_EXTENSION,

        # Traversal mode
        "reverse": False,
        "recursive": False,
        "variable": False,
    }


def get_config_path() -> str:
    """Return the location of the persistent configuration file."""
    if CONFIG_FILE:
        return CONFIG_FILE
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a scan configuration from disk, merged over the defaults.

    Args:
        path: Explicit JSON file. Defaults to the user config file.

    Returns:
        Dict[str, Any]: The merged configuration, or defaults on failure.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    data.pop("version", None)
    config.update({k: v for k, v in data.items() if k in config})
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist a scan configuration to disk.

    Args:
        config: The configuration dictionary to save.
        path: Explicit JSON file. Defaults to the user config file.
    """
    config_path = path or get_config_path()
    payload = dict(config)
    payload["version"] = CURRENT_CONFIG_VERSION
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
