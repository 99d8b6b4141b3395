from __future__ import annotations

"""
Change Detection Service.

Glues the project model, the source-control adapter and the attribution
engine: build the module tree once, then attribute every diff entry.
"""

import logging
from typing import Iterable, Mapping

from bumpguard.core.analysis.attributor import attribute_diffs
from bumpguard.core.analysis.tree_builder import build_module_tree
from bumpguard.domain.change_models import DiffEntry, ModuleDescriptor
from bumpguard.domain.errors import ResolutionError
from bumpguard.domain.tree_models import ModuleNode
from bumpguard.infra.project.pom_loader import load_reactor
from bumpguard.infra.scm import ChangeDetector

logger = logging.getLogger(__name__)


def detect_module_changes(
        root: ModuleDescriptor,
        descriptors: Mapping[str, ModuleDescriptor],
        entries: Iterable[DiffEntry],
) -> ModuleNode:
    """
    Build the module tree and attribute the given diff entries to it.

    Args:
        root: Descriptor of the top-level module.
        descriptors: Every module of the build keyed by identifier.
        entries: Diff entries from the source-control adapter.

    Returns:
        ModuleNode: Root of the attributed tree.

    Raises:
        ResolutionError: The project model is inconsistent.
    """
    tree = build_module_tree(root, descriptors)
    return attribute_diffs(tree, entries)


def detect_project_changes(
        project_dir: str,
        detector: ChangeDetector,
        remote_branch: str = "HEAD",
        fetch: bool = True,
) -> ModuleNode:
    """
    Load the reactor under project_dir and attribute its SCM changes.

    The tree is built before git runs so an inconsistent project fails fast.
    """
    root_id, descriptors = load_reactor(project_dir)
    root = descriptors.get(root_id)
    if root is None:
        raise ResolutionError(root_id)

    tree = build_module_tree(root, descriptors)
    entries = detector.detect_changes(project_dir, remote_branch=remote_branch, fetch=fetch)
    return attribute_diffs(tree, entries)
