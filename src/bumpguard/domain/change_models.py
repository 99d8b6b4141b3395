from __future__ import annotations

"""
Change Domain Data Models.

Defines the value objects exchanged between the source-control adapter,
the project model loader and the attribution engine: change types,
raw diff entries, attributed diff records and module descriptors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# CHANGE TYPES
# -----------------------------------------------------------------------------

class ChangeType(str, Enum):
    """Kind of filesystem-level change reported by a version-control diff."""
    ADD = "ADD"
    COPY = "COPY"
    DELETE = "DELETE"
    MODIFY = "MODIFY"
    RENAME = "RENAME"

    @property
    def uses_new_path(self) -> bool:
        return self in _NEW_PATH_TYPES

    @property
    def uses_old_path(self) -> bool:
        return self in _OLD_PATH_TYPES


_NEW_PATH_TYPES = frozenset({ChangeType.ADD, ChangeType.COPY, ChangeType.RENAME})
_OLD_PATH_TYPES = frozenset(
    {ChangeType.COPY, ChangeType.DELETE, ChangeType.MODIFY, ChangeType.RENAME}
)

# -----------------------------------------------------------------------------
# DIFF VALUE OBJECTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DiffEntry:
    """
    One change as reported by the source-control adapter.

    The adapter contract is enforced on creation: an old path is required
    for COPY/DELETE/MODIFY/RENAME and a new path for ADD/COPY/RENAME.

    Attributes:
        change_type: Kind of change.
        old_path: Path before the change (if any).
        new_path: Path after the change (if any).
    """
    change_type: ChangeType
    old_path: Optional[str] = None
    new_path: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.change_type, ChangeType):
            object.__setattr__(self, "change_type", ChangeType(self.change_type))
        if self.change_type.uses_old_path and self.old_path is None:
            raise ValueError(f"{self.change_type.value} entry requires an old path")
        if self.change_type.uses_new_path and self.new_path is None:
            raise ValueError(f"{self.change_type.value} entry requires a new path")


@dataclass(frozen=True)
class DiffRecord:
    """
    A change attributed to a module.

    Equality and hashing cover the full (type, old_path, new_path) triple,
    so a module's record set never holds the same change twice.
    """
    change_type: ChangeType
    old_path: Optional[str] = None
    new_path: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: DiffEntry) -> DiffRecord:
        return cls(entry.change_type, entry.old_path, entry.new_path)

    def sort_key(self) -> Tuple[str, str, str]:
        return (self.change_type.value, self.old_path or "", self.new_path or "")

    def __str__(self) -> str:
        if self.change_type is ChangeType.ADD:
            target = self.new_path
        elif self.change_type in (ChangeType.COPY, ChangeType.RENAME):
            target = f"{self.old_path}->{self.new_path}"
        else:
            target = self.old_path
        return f"[{self.change_type.value} {target}]"

# -----------------------------------------------------------------------------
# PROJECT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ModuleDescriptor:
    """
    Static description of one module of a multi-module build.

    Attributes:
        group_id: Maven-style group coordinate.
        artifact_id: Artifact coordinate.
        version: Declared local version.
        base_path: Absolute base directory of the module.
        modules: Identifiers of the declared submodules.
        pom_path: Path of the descriptor file the module was read from.
    """
    group_id: str
    artifact_id: str
    version: str
    base_path: str
    modules: Tuple[str, ...] = field(default_factory=tuple)
    pom_path: str = ""

    @property
    def coords(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"
