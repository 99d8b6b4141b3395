from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Installs the crash reporter, routes execution to the CLI controller and
flushes queued log records before the process exits.
"""

import logging
import os
import sys
import traceback
from types import TracebackType
from typing import Optional

# Make the package importable when this file is run directly from a checkout
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SRC_DIR = os.path.dirname(BASE_DIR)
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

EXIT_CRASH = 1

# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def report_crash(exctype: type[BaseException], value: BaseException, tb: Optional[TracebackType]) -> None:
    """
    Report an unhandled exception and terminate.

    The summary is logged as CRITICAL (reaching --log-file when configured);
    the full trace is written to stderr directly.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger("bumpguard.supervisor").critical(f"Unhandled {exctype.__name__}: {value}")

    banner = "=" * 72
    sys.stderr.write(f"\n{banner}\nBUMPGUARD CRASHED\n{banner}\n{stack_trace}")
    sys.stderr.flush()
    sys.exit(EXIT_CRASH)

# -----------------------------------------------------------------------------
# ROUTING
# -----------------------------------------------------------------------------

def main() -> int:
    """Run the CLI under the supervisor."""
    sys.excepthook = report_crash

    from bumpguard.infra.logging import shutdown_logging
    from bumpguard.interface.cli.app import main as cli_main

    try:
        return cli_main()
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
