from __future__ import annotations

"""
Path Normalizer.

Splits forward-slash path strings into ordered segment lists used by the
attribution engine for prefix descent.
"""

import os
from typing import List, Sequence


def normalize_path(path: str) -> List[str]:
    """
    Split a path into its non-empty segments, left to right.

    Leading, trailing and repeated separators are dropped, so "/a/b/c",
    "a/b/c" and "a//b/c" all give ['a', 'b', 'c'] and "" gives [].

    Args:
        path: Forward-slash separated path (may be empty).

    Returns:
        List[str]: Path segments.
    """
    if not path:
        return []
    return [segment for segment in path.split("/") if segment]


def normalize_fs_path(path: str) -> List[str]:
    """Same as normalize_path for OS-native paths (backslashes on Windows)."""
    if not path:
        return []
    return normalize_path(path.replace(os.sep, "/"))


def relative_segments(base: Sequence[str], target: Sequence[str]) -> List[str]:
    """
    Segments of target below base.

    When target does not lie under base, target is returned unchanged.
    """
    n = len(base)
    if n <= len(target) and list(target[:n]) == list(base):
        return list(target[n:])
    return list(target)
