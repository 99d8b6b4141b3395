from __future__ import annotations

"""
Configuration Domain Management.

Provides the flat runtime configuration that drives both goals
(validate/list) and its optional JSON file overlay.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from bumpguard.domain.constants import (
    DEFAULT_LIST_HEADER,
    DEFAULT_LIST_TEMPLATE,
    DEFAULT_REPOSITORY_ID,
    DEFAULT_REPOSITORY_URL,
    ValidationPolicy,
)
from bumpguard.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
DEFAULT_REQUEST_TIMEOUT = 10


def get_default_config_path() -> str:
    """Location of the persistent configuration file."""
    return os.path.join(get_user_data_dir(create=False), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Project & SCM
        "project_dir": os.getcwd(),
        "scm": "GIT",
        "remote_branch": "HEAD",
        "fetch": True,

        # Validate goal
        "policy": ValidationPolicy.PERMISSIVE.value,
        "show_change_details": True,
        "show_progress": False,

        # Remote repositories ("id=url" entries)
        "repositories": [f"{DEFAULT_REPOSITORY_ID}={DEFAULT_REPOSITORY_URL}"],
        "request_timeout": DEFAULT_REQUEST_TIMEOUT,

        # List goal
        "print_header": True,
        "print_all": False,
        "header": DEFAULT_LIST_HEADER,
        "template": DEFAULT_LIST_TEMPLATE,
        "output_file": "",
        "line_ending": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration, merging a JSON file over the defaults.

    A missing file is not an error. A corrupted file is reported and the
    defaults are returned.

    Args:
        path: JSON file to read. Defaults to the user data directory file.

    Returns:
        Dict[str, Any]: Defaults updated with the persisted values.
    """
    config = get_default_config()
    config_path = path or get_default_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file (root is not an object). Using defaults.")
        return config

    config.update(data)
    return config

