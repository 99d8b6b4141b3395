from __future__ import annotations

"""
Remote Repository Client.

Resolves the latest published version of an artifact from Maven-layout
HTTP repositories by reading their maven-metadata.xml documents.

RepositoryContext is created once per invocation and handed to every
consumer; it owns the HTTP session and a per-run lookup cache.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import requests

from bumpguard.domain.constants import DEFAULT_REPOSITORY_ID, DEFAULT_REPOSITORY_URL
from bumpguard.domain.errors import RepositoryError
from bumpguard.domain.versioning import highest_version, is_newer
from bumpguard.infra.network.common import DEFAULT_TIMEOUT, METADATA_FILE_NAME, USER_AGENT

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RemoteRepository:
    """A Maven-layout repository reachable over HTTP(S)."""
    id: str
    url: str

    @classmethod
    def parse(cls, spec: str) -> RemoteRepository:
        """
        Parse an 'id=url' specification. A bare URL gets its host as id.

        Raises:
            ValueError: The specification is empty or has no URL.
        """
        text = (spec or "").strip()
        if not text:
            raise ValueError("Empty repository specification.")
        repo_id, sep, url = text.partition("=")
        if not sep:
            url = text
            repo_id = url.split("://", 1)[-1].split("/", 1)[0]
        repo_id, url = repo_id.strip(), url.strip()
        if not url:
            raise ValueError(f"Repository '{repo_id}' has no URL.")
        return cls(id=repo_id or url, url=url.rstrip("/"))


@dataclass(frozen=True)
class VersionLookup:
    """
    Outcome of a latest-version query.

    Attributes:
        highest_version: Highest published version, or None if unpublished.
        repository: Repository that published it, or None.
    """
    highest_version: Optional[str] = None
    repository: Optional[RemoteRepository] = None

    @property
    def found(self) -> bool:
        return self.highest_version is not None

# -----------------------------------------------------------------------------
# CONTEXT OBJECT
# -----------------------------------------------------------------------------

class RepositoryContext:
    """
    Explicit per-invocation resolver session.

    Usage:
        with RepositoryContext([RemoteRepository("central", url)]) as ctx:
            lookup = ctx.find_latest_version("org.acme", "core")
    """

    def __init__(
            self,
            repositories: Optional[Sequence[RemoteRepository]] = None,
            timeout: float = DEFAULT_TIMEOUT,
            session: Optional[requests.Session] = None,
    ) -> None:
        self.repositories: List[RemoteRepository] = list(
            repositories or [RemoteRepository(DEFAULT_REPOSITORY_ID, DEFAULT_REPOSITORY_URL)]
        )
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})
        self._cache: Dict[Tuple[str, str], VersionLookup] = {}

    @classmethod
    def from_specs(cls, specs: Sequence[str], timeout: float = DEFAULT_TIMEOUT) -> RepositoryContext:
        return cls([RemoteRepository.parse(s) for s in specs], timeout=timeout)

    def __enter__(self) -> RepositoryContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def find_latest_version(self, group_id: str, artifact_id: str) -> VersionLookup:
        """
        Find the highest version of an artifact across all repositories.

        Unreachable repositories are logged and skipped.

        Args:
            group_id: Group coordinate.
            artifact_id: Artifact coordinate.

        Returns:
            VersionLookup: Highest version and the repository providing it.

        Raises:
            RepositoryError: A repository served unparsable metadata.
        """
        key = (group_id, artifact_id)
        if key in self._cache:
            return self._cache[key]

        best = VersionLookup()
        for repository in self.repositories:
            versions = self._fetch_versions(repository, group_id, artifact_id)
            candidate = highest_version(versions)
            if candidate is None:
                continue
            if best.highest_version is None or is_newer(best.highest_version, candidate):
                best = VersionLookup(candidate, repository)

        logger.debug(f"Latest version of {group_id}:{artifact_id}: {best.highest_version}")
        self._cache[key] = best
        return best

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _fetch_versions(self, repository: RemoteRepository, group_id: str, artifact_id: str) -> List[str]:
        url = metadata_url(repository, group_id, artifact_id)
        logger.debug(f"Network: Fetching {url}")

        try:
            response = self._session.get(url, timeout=self.timeout)
            if response.status_code == 404:
                return []
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.warning(f"Network: Repository '{repository.id}' timed out after {self.timeout}s.")
            return []
        except requests.exceptions.RequestException as e:
            logger.warning(f"Network: Repository '{repository.id}' unreachable: {e}")
            return []

        return parse_metadata_versions(response.content, url)


def metadata_url(repository: RemoteRepository, group_id: str, artifact_id: str) -> str:
    """URL of the artifact-level maven-metadata.xml in a repository."""
    group_path = group_id.replace(".", "/")
    return f"{repository.url}/{group_path}/{artifact_id}/{METADATA_FILE_NAME}"


def parse_metadata_versions(content: bytes, source: str = "") -> List[str]:
    """
    Extract the versions listed in a maven-metadata.xml document.

    Falls back to <latest>/<release> when no <versions> list is present.

    Raises:
        RepositoryError: The document is not valid XML.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise RepositoryError(f"Invalid metadata document {source}: {e}") from e

    versions = [
        (el.text or "").strip()
        for el in root.iterfind("./versioning/versions/version")
        if (el.text or "").strip()
    ]
    if versions:
        return versions

    for tag in ("./versioning/release", "./versioning/latest", "./version"):
        el = root.find(tag)
        if el is not None and (el.text or "").strip():
            return [el.text.strip()]
    return []
