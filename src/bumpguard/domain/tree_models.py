from __future__ import annotations

"""
Module Change Tree Data Models.

Provides the recursive node type used by the attribution engine to map
changed files onto the module hierarchy of a multi-module build.
"""

from typing import Iterator, List, Set, Tuple

from bumpguard.domain.change_models import DiffRecord

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class ModuleNode:
    """
    One buildable module and the changes attributed directly to it.

    Identity is value-based: two nodes with the same (group_id, artifact_id,
    version) compare equal and hash alike, whatever their diffs or children.
    Each node owns its children; there is no reference back to the parent.

    Attributes:
        group_id: Group coordinate.
        artifact_id: Artifact coordinate.
        version: Local version.
        base_path: Absolute base directory of the module.
        diffs: Records attributed to this module (deduplicated).
        modules: Direct submodules.
    """

    __slots__ = ("group_id", "artifact_id", "version", "base_path", "diffs", "modules")

    def __init__(self, group_id: str, artifact_id: str, version: str, base_path: str) -> None:
        self.group_id = group_id
        self.artifact_id = artifact_id
        self.version = version
        self.base_path = base_path
        self.diffs: Set[DiffRecord] = set()
        self.modules: Set[ModuleNode] = set()

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def coords(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def gav(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def _key(self) -> Tuple[str, str, str]:
        return (self.group_id, self.artifact_id, self.version)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ModuleNode):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"ModuleNode({self.gav!r}, base_path={self.base_path!r}, diffs={len(self.diffs)})"

    # -------------------------------------------------------------------------
    # Diff inspection
    # -------------------------------------------------------------------------

    def add_diff(self, record: DiffRecord) -> None:
        self.diffs.add(record)

    def has_diff(self) -> bool:
        """True if this node itself holds changes. Descendants are not consulted."""
        return bool(self.diffs)

    def diff_count(self) -> int:
        return len(self.diffs)

    def sorted_diffs(self) -> List[DiffRecord]:
        return sorted(self.diffs, key=DiffRecord.sort_key)

    def sorted_modules(self) -> List[ModuleNode]:
        return sorted(self.modules, key=ModuleNode._key)

    # -------------------------------------------------------------------------
    # Traversal & rendering
    # -------------------------------------------------------------------------

    def flatten(self) -> Iterator[ModuleNode]:
        """
        Yield every node of the subtree in pre-order.

        Each call returns a fresh iterator. Children are visited in
        coordinate order so the sequence is reproducible.
        """
        yield self
        for module in self.sorted_modules():
            yield from module.flatten()

    def __iter__(self) -> Iterator[ModuleNode]:
        return self.flatten()

    def render(self) -> str:
        """Human-readable report of the changes held in this subtree."""
        from bumpguard.core.analysis.tree_renderer import render_change_tree
        return render_change_tree(self)

    def __str__(self) -> str:
        return self.render()
