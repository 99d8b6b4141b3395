from __future__ import annotations

"""
Goal Result Data Models.

Immutable results handed from the validate/list services to the
interface layer, with their factory helpers.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from bumpguard.domain.constants import ValidationPolicy

# -----------------------------------------------------------------------------
# VALIDATE GOAL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ModuleViolation:
    """
    A module with changes whose local version is already published.

    Attributes:
        coords: group:artifact of the module.
        version: Local (and remote) version.
        diff_count: Number of changes attributed to the module.
        repository_id: Repository that published the version.
        repository_url: URL of that repository.
    """
    coords: str
    version: str
    diff_count: int
    repository_id: str = ""
    repository_url: str = ""

    @property
    def message(self) -> str:
        return (
            f"Module {self.coords} has {self.diff_count} changes. "
            f"However local version is the same with the remote version. "
            f"Version: {self.version}, Repository ID: {self.repository_id}, "
            f"Repository URL: {self.repository_url}"
        )


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the validate goal."""
    policy: ValidationPolicy
    modules_checked: int
    modules_changed: int
    violations: List[ModuleViolation] = field(default_factory=list)
    report: str = ""

    @property
    def ok(self) -> bool:
        """Only ENFORCING turns violations into a failure."""
        return not (self.violations and self.policy is ValidationPolicy.ENFORCING)

# -----------------------------------------------------------------------------
# LIST GOAL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ListOptions:
    """
    Settings of the list goal.

    Attributes:
        print_header: Emit the header line first.
        print_all: Emit every module, not only those whose local version
            differs from the remote one.
        header: Header line text.
        template: Row template (see TEMPLATE_TOKENS).
        line_ending: Row separator.
        output_file: CSV file base name; empty disables file output.
    """
    print_header: bool
    print_all: bool
    header: str
    template: str
    line_ending: str
    output_file: str = ""


@dataclass(frozen=True)
class ListResult:
    """Rows produced by the list goal and where they were written."""
    rows: List[str] = field(default_factory=list)
    content: str = ""
    output_path: Optional[str] = None
