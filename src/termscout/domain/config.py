from __future__ import annotations

"""
Configuration Domain Management.

Builds the default run configuration and loads persisted overrides from a
JSON file (either an explicit path or 'config.json' inside the user data
directory). Unknown keys in the file are ignored.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from termscout.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_EXCLUDED_DIRS,
    DEFAULT_EXCLUDED_EXTENSIONS,
)
from termscout.domain.errors import ConfigError
from termscout.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default run configuration.
    This dictionary drives the behavior of the scan pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Word list
        "word_list_path": "",
        "word_column": "A",
        "header_rows": 1,

        # Traversal
        "include_dirs": [],
        "exclude_dirs": list(DEFAULT_EXCLUDED_DIRS),
        "exclude_extensions": list(DEFAULT_EXCLUDED_EXTENSIONS),

        # Reading
        "encoding_errors": "strict",

        # Output
        "output_path": "",
        "error_log_path": "",
    }


def get_default_config_path() -> str:
    """Resolve the location of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration, layering the JSON file over the defaults.

    A missing default config file is normal and yields the defaults. An
    explicitly requested file that is missing or malformed is an error.

    Args:
        path: Explicit config file path. Defaults to the user data dir file.

    Returns:
        Dict[str, Any]: Defaults updated with the known keys from the file.

    Raises:
        ConfigError: If an explicit file is missing, or any file is malformed.
    """
    explicit = path is not None
    config_path = path if explicit else get_default_config_path()
    config = get_default_config()

    if not os.path.exists(config_path):
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to load config '{config_path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{config_path}' must hold a JSON object.")

    version = data.get("version")
    if version and version != CURRENT_CONFIG_VERSION:
        logger.warning(
            f"Config file version {version} differs from {CURRENT_CONFIG_VERSION}; "
            "unknown keys will be ignored."
        )

    for key in config:
        if key in data:
            config[key] = data[key]

    logger.debug(f"Configuration loaded from {config_path}")
    return config
