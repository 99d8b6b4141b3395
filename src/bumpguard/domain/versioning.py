from __future__ import annotations

"""
Version Ordering.

Maven-like ordering of version strings: numeric parts compare as
numbers, textual qualifiers (alpha, rc, SNAPSHOT...) sort below the
release they qualify.
"""

import re
from typing import Iterable, Optional, Tuple

_TOKEN_RX = re.compile(r"\d+|[A-Za-z]+")

# Rank of each token kind; the end marker sits between qualifiers and numbers
_QUALIFIER = 0
_END = 1
_NUMBER = 2

VersionKey = Tuple[Tuple[int, int, str], ...]


def version_key(version: str) -> VersionKey:
    """
    Sort key for a version string.

    "1.0-SNAPSHOT" < "1.0" < "1.0.1" < "1.1" < "1.10".
    """
    parts = []
    for token in _TOKEN_RX.findall(version or ""):
        if token.isdigit():
            parts.append((_NUMBER, int(token), ""))
        else:
            parts.append((_QUALIFIER, 0, token.lower()))
    parts.append((_END, 0, ""))
    return tuple(parts)


def is_newer(current: str, candidate: str) -> bool:
    return version_key(candidate) > version_key(current)


def highest_version(versions: Iterable[str]) -> Optional[str]:
    """Highest of the given versions, or None for an empty input."""
    best: Optional[str] = None
    for v in versions:
        if best is None or is_newer(best, v):
            best = v
    return best
