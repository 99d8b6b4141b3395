from __future__ import annotations

"""
Domain Exception Hierarchy.

All failures raised by bumpguard derive from BumpguardError so interface
layers can map them to exit codes in one place.
"""


class BumpguardError(Exception):
    """Base class for every error raised by the application."""


class ResolutionError(BumpguardError):
    """A declared submodule identifier cannot be resolved into the tree."""

    def __init__(self, identifier: str, parent: str = "", reason: str = "is not part of the project model") -> None:
        self.identifier = identifier
        self.parent = parent
        where = f" (declared by {parent})" if parent else ""
        super().__init__(f"Module '{identifier}'{where} {reason}.")


class ProjectModelError(BumpguardError):
    """Project descriptors could not be read or parsed."""


class ChangeDetectionError(BumpguardError):
    """The source-control adapter failed to produce a diff."""


class RepositoryError(BumpguardError):
    """A remote repository returned data that could not be interpreted."""


class ValidationFailedError(BumpguardError):
    """Version policy violations were found under the ENFORCING policy."""

    def __init__(self, violations_count: int) -> None:
        self.violations_count = violations_count
        super().__init__(
            f"You have {violations_count} validation error(s). "
            "Please fix them before continuing."
        )
