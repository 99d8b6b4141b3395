from __future__ import annotations

"""
Diff Attributor.

Attaches every changed file to the deepest module whose base directory
contains it. Descent compares the remaining path against each child's
base path relative to the current node. Children sharing a leading
directory (modules/core, modules/api) are told apart by their full
relative prefix.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from bumpguard.core.analysis.path_normalizer import (
    normalize_fs_path,
    normalize_path,
    relative_segments,
)
from bumpguard.domain.change_models import DiffEntry, DiffRecord
from bumpguard.domain.tree_models import ModuleNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def find_module_of_path(tree: ModuleNode, segments: Sequence[str]) -> ModuleNode:
    """
    Descend from tree to the module owning the given path.

    Args:
        tree: Node to start from.
        segments: Normalized path segments, relative to tree's base path.

    Returns:
        ModuleNode: The deepest matching module, or tree itself when no
        child claims the leading segment (including for an empty path).
    """
    node = tree
    remaining = list(segments)

    while remaining:
        child, consumed = _match_child(node, remaining)
        if child is None:
            break
        del remaining[:consumed]
        node = child

    return node


def attribute_diff(tree: ModuleNode, entry: DiffEntry) -> List[ModuleNode]:
    """
    Insert the record of one diff entry into the module(s) that own it.

    ADD/COPY/RENAME are attributed by their new path and
    COPY/DELETE/MODIFY/RENAME by their old path, each side independently.
    Re-attributing an identical entry leaves the tree unchanged.

    Args:
        tree: Root of the module tree.
        entry: The change to attribute.

    Returns:
        List[ModuleNode]: Modules that received the record, one per side.
    """
    record = DiffRecord.from_entry(entry)
    owners: List[ModuleNode] = []

    if entry.change_type.uses_new_path:
        owners.append(_attribute_side(tree, entry.new_path, record))
    if entry.change_type.uses_old_path:
        owners.append(_attribute_side(tree, entry.old_path, record))

    return owners


def attribute_diffs(tree: ModuleNode, entries: Iterable[DiffEntry]) -> ModuleNode:
    """
    Attribute every entry of a diff list to the tree.

    Args:
        tree: Root of the module tree (mutated in place).
        entries: Diff entries in any order.

    Returns:
        ModuleNode: The same tree, for chaining.
    """
    count = 0
    for entry in entries:
        attribute_diff(tree, entry)
        count += 1
    logger.debug(f"Attributed {count} diff entries to {tree.gav}")
    return tree

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _attribute_side(tree: ModuleNode, path: Optional[str], record: DiffRecord) -> ModuleNode:
    segments = normalize_path(path or "")
    # Absolute paths under the root are rebased; anything else is already root-relative
    if path and path.startswith("/"):
        segments = relative_segments(normalize_fs_path(tree.base_path), segments)
    owner = find_module_of_path(tree, segments)
    owner.add_diff(record)
    return owner


def _match_child(node: ModuleNode, remaining: List[str]) -> Tuple[Optional[ModuleNode], int]:
    """
    Find the child that owns the leading segments of remaining.

    A child whose whole relative base path prefixes remaining wins and
    consumes all of it. Otherwise the first child (in coordinate order)
    whose leading segment equals remaining[0] consumes a single segment.
    """
    base = normalize_fs_path(node.base_path)
    head = remaining[0]
    fallback: Optional[ModuleNode] = None

    for child in node.sorted_modules():
        child_rel = relative_segments(base, normalize_fs_path(child.base_path))
        if not child_rel or child_rel[0] != head:
            continue
        if remaining[:len(child_rel)] == child_rel:
            return child, len(child_rel)
        if fallback is None:
            fallback = child

    if fallback is not None:
        return fallback, 1
    return None, 0
