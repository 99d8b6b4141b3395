from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the remote repository client.
"""

from bumpguard.infra.network.repository_client import (
    RemoteRepository,
    RepositoryContext,
    VersionLookup,
    metadata_url,
    parse_metadata_versions,
)

__all__ = [
    "RemoteRepository",
    "RepositoryContext",
    "VersionLookup",
    "metadata_url",
    "parse_metadata_versions",
]
