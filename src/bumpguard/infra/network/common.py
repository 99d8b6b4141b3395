from __future__ import annotations

from bumpguard.domain.constants import APP_VERSION

USER_AGENT = f"Bumpguard-Client/{APP_VERSION}"
DEFAULT_TIMEOUT = 10
METADATA_FILE_NAME = "maven-metadata.xml"
