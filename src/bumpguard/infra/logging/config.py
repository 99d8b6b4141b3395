from __future__ import annotations

"""
Logging Configuration Models.

Defines the immutable settings used to initialize the logging subsystem
and the mapping from level names to logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    name: logging.getLevelName(name) for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
}
_LEVEL_MAP["WARN"] = logging.WARNING


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for the logging subsystem.

    Console records below WARNING go to stdout so reports can be piped;
    warnings and errors go to stderr.

    Attributes:
        level: Minimum severity level to capture.
        console: Enable terminal output.
        log_file: Optional path for a rotating log file.
        max_bytes: Size of a log segment before rotation.
        backup_count: Number of rotated segments to keep.
        console_fmt: Format of terminal lines (Maven-style "[LEVEL] message").
        file_fmt: Format of file entries.
        datefmt: Timestamp format of file entries.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "[%(levelname)s] %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
    datefmt: str = "%Y-%m-%dT%H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> LoggingConfig:
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file or None)
