from __future__ import annotations

"""
Domain Constants and Enumerations.

Centralizes report formatting constants, policy and line-ending
enumerations, and the defaults of the 'list' goal.
"""

import os
from enum import Enum
from typing import Optional

APP_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# REPORT FORMATTING
# -----------------------------------------------------------------------------

SEPARATOR_LINE = "-" * 72
CHANGES_HEADER = "Changes for {coordinates}"

# -----------------------------------------------------------------------------
# REMOTE REPOSITORIES
# -----------------------------------------------------------------------------

DEFAULT_REPOSITORY_ID = "central"
DEFAULT_REPOSITORY_URL = "https://repo.maven.apache.org/maven2"

# -----------------------------------------------------------------------------
# LIST GOAL
# -----------------------------------------------------------------------------

DEFAULT_LIST_HEADER = (
    "directory,group:artifact,localVersion,remoteVersion,remoteRepositoryId,remoteRepositoryUrl"
)
DEFAULT_LIST_TEMPLATE = (
    "baseDir,groupId:artifactId,localVersion,remoteVersion,remoteRepositoryId,remoteRepositoryUrl"
)
TEMPLATE_TOKENS = (
    "baseDir",
    "pomPath",
    "groupId",
    "artifactId",
    "localVersion",
    "remoteVersion",
    "remoteRepositoryId",
    "remoteRepositoryUrl",
)

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class ValidationPolicy(str, Enum):
    """
    How version violations are reported.

    PERMISSIVE: violations are logged as warnings.
    ENFORCING: violations are logged as errors and fail the run.
    """
    PERMISSIVE = "PERMISSIVE"
    ENFORCING = "ENFORCING"


class LineEnding(str, Enum):
    """Row separators supported by the 'list' goal output."""
    CR = "\r"
    LF = "\n"
    CRLF = "\r\n"

    @classmethod
    def from_name(cls, name: Optional[str]) -> LineEnding:
        """Resolve by name (LF, CRLF, CR); empty input means the platform separator."""
        if not name:
            return cls(os.linesep)
        return cls[name.strip().upper()]
