from __future__ import annotations

"""
Change Tree Renderer.

Converts a ModuleNode tree into the plain-text change report: one block
per module that directly holds changes, visited in pre-order.
"""

from typing import List

from bumpguard.domain.constants import CHANGES_HEADER, SEPARATOR_LINE
from bumpguard.domain.tree_models import ModuleNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_change_tree(tree: ModuleNode) -> str:
    """
    Render the change report of a subtree.

    Args:
        tree: Root of the subtree to print.

    Returns:
        str: Report text; empty when no module in the subtree has changes.
    """
    lines: List[str] = []
    render_tree_structure(tree, lines)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def render_tree_structure(node: ModuleNode, lines: List[str]) -> None:
    """
    Recursively append the report lines of node and its descendants.

    A module without direct changes contributes nothing itself, but its
    children are still visited.

    Args:
        node: Current node.
        lines: Accumulator list for output lines.
    """
    if node.has_diff():
        lines.append(SEPARATOR_LINE)
        lines.append(CHANGES_HEADER.format(coordinates=node.gav))
        lines.append(SEPARATOR_LINE)
        for record in node.sorted_diffs():
            lines.append(str(record))
        lines.append("")

    for module in node.sorted_modules():
        render_tree_structure(module, lines)
