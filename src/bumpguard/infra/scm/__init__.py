from __future__ import annotations

"""
Source-Control Adapters.

Factory for the change detectors available to the validate goal.
"""

from enum import Enum
from typing import List, Protocol, Union

from bumpguard.domain.change_models import DiffEntry
from bumpguard.infra.scm.git_detector import GitDetector, parse_name_status


class ScmType(str, Enum):
    GIT = "GIT"


class ChangeDetector(Protocol):
    def detect_changes(self, project_dir: str, remote_branch: str = ..., fetch: bool = ...) -> List[DiffEntry]:
        ...


def get_detector(scm: Union[ScmType, str]) -> ChangeDetector:
    """
    Create the change detector for a source-control type.

    Raises:
        ValueError: The type is not supported.
    """
    try:
        scm_type = ScmType(str(scm).upper()) if not isinstance(scm, ScmType) else scm
    except ValueError:
        raise ValueError(
            f"Unsupported SCM '{scm}'. Expected one of: {', '.join(t.value for t in ScmType)}"
        ) from None

    if scm_type is ScmType.GIT:
        return GitDetector()
    raise ValueError(f"Unsupported SCM '{scm}'.")


__all__ = ["ChangeDetector", "GitDetector", "ScmType", "get_detector", "parse_name_status"]
