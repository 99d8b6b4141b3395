from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for the sample multi-module project used across tests.
"""

import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from bumpguard.domain.change_models import ModuleDescriptor  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_descriptors() -> Dict[str, ModuleDescriptor]:
    """
    Return the descriptors of a three-module build rooted at /repo.

    Structure:
    /repo            g:root:1.0
      /core          g:core:1.0
        /api         g:api:1.0
    """
    return {
        "root": ModuleDescriptor("g", "root", "1.0", "/repo", modules=("core",)),
        "core": ModuleDescriptor("g", "core", "1.0", "/repo/core", modules=("api",)),
        "api": ModuleDescriptor("g", "api", "1.0", "/repo/core/api"),
    }


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'bumpguard.domain.config'.
    """
    return {
        # Project & SCM
        "project_dir": "/tmp/project",
        "scm": "GIT",
        "remote_branch": "main",
        "fetch": False,

        # Validate goal
        "policy": "ENFORCING",
        "show_change_details": True,
        "show_progress": False,

        # Remote repositories
        "repositories": ["central=https://repo.example.org/maven2"],
        "request_timeout": 5,

        # List goal
        "print_header": True,
        "print_all": False,
        "header": "dir,coords",
        "template": "baseDir,groupId:artifactId",
        "output_file": "",
        "line_ending": "LF",
    }
