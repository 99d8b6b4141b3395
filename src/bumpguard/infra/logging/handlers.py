from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Handler factories plus the tagging used to tell bumpguard's handlers
apart from handlers installed by the host application or by pytest.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

_HANDLER_TAG_ATTR: str = "_bumpguard_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


class _BelowLevelFilter(logging.Filter):
    """Pass records strictly below a threshold level."""

    def __init__(self, threshold: int) -> None:
        super().__init__()
        self.threshold = threshold

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.threshold


def _create_console_handlers(level_int: int, formatter: logging.Formatter) -> List[logging.Handler]:
    """stdout for records below WARNING, stderr for the rest."""
    out = logging.StreamHandler(sys.stdout)
    out.setLevel(level_int)
    out.addFilter(_BelowLevelFilter(logging.WARNING))

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(max(level_int, logging.WARNING))

    handlers: List[logging.Handler] = [out, err]
    for h in handlers:
        h.setFormatter(formatter)
        _tag_handler(h)
    return handlers


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Create a tagged RotatingFileHandler.

    An unwritable location is reported on stderr and yields None, so a
    bad --log-file never prevents the goal from running.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        if parent:
            os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot write log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
