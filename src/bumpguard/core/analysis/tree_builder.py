from __future__ import annotations

"""
Module Tree Builder.

Mirrors the declared parent/child relationships of a multi-module build
into a ModuleNode tree. Construction is all-or-nothing: an inconsistent
project model raises before any tree is returned.
"""

import logging
from typing import Mapping, Tuple

from bumpguard.domain.change_models import ModuleDescriptor
from bumpguard.domain.errors import ResolutionError
from bumpguard.domain.tree_models import ModuleNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_module_tree(
        root: ModuleDescriptor,
        descriptors: Mapping[str, ModuleDescriptor],
) -> ModuleNode:
    """
    Build the module tree rooted at the given project descriptor.

    Each declared submodule identifier is looked up in descriptors and
    construction recurses on it.

    Args:
        root: Descriptor of the top-level project.
        descriptors: Every module of the build keyed by identifier,
            including the root.

    Returns:
        ModuleNode: Root of the new tree, with empty diff sets.

    Raises:
        ResolutionError: A declared submodule is missing from descriptors,
            or declares itself or one of its ancestors.
    """
    tree = _build_node(root, descriptors, ())
    logger.debug(f"Module tree built for {tree.gav} ({sum(1 for _ in tree.flatten())} modules)")
    return tree

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _build_node(
        descriptor: ModuleDescriptor,
        descriptors: Mapping[str, ModuleDescriptor],
        ancestors: Tuple[ModuleDescriptor, ...],
) -> ModuleNode:
    node = ModuleNode(
        descriptor.group_id,
        descriptor.artifact_id,
        descriptor.version,
        descriptor.base_path,
    )
    lineage = ancestors + (descriptor,)
    for identifier in descriptor.modules:
        child = descriptors.get(identifier)
        if child is None:
            raise ResolutionError(identifier, parent=descriptor.coords)
        if child in lineage:
            raise ResolutionError(identifier, parent=descriptor.coords, reason="forms a module cycle")
        node.modules.add(_build_node(child, descriptors, lineage))
    return node
