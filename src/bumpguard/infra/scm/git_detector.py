from __future__ import annotations

"""
Git Change Detector.

Source-control adapter that produces the flat diff list consumed by the
attribution engine. Runs the git executable in the project directory and
parses `git diff --name-status -z` output.
"""

import logging
import subprocess
from typing import List, Sequence

from bumpguard.domain.change_models import ChangeType, DiffEntry
from bumpguard.domain.errors import ChangeDetectionError

logger = logging.getLogger(__name__)

# Git status letters; T (type change) is reported as a modification
_STATUS_MAP = {
    "A": ChangeType.ADD,
    "C": ChangeType.COPY,
    "D": ChangeType.DELETE,
    "M": ChangeType.MODIFY,
    "R": ChangeType.RENAME,
    "T": ChangeType.MODIFY,
}

# -----------------------------------------------------------------------------
# DETECTOR
# -----------------------------------------------------------------------------

class GitDetector:
    """
    Detects changes between a remote-tracking branch and the local branch.

    Args:
        git_executable: Name or path of the git binary.
    """

    def __init__(self, git_executable: str = "git") -> None:
        self.git_executable = git_executable

    def detect_changes(
            self,
            project_dir: str,
            remote_branch: str = "HEAD",
            fetch: bool = True,
    ) -> List[DiffEntry]:
        """
        List the changes of the local branch against origin/<remote_branch>.

        Args:
            project_dir: Root directory of the repository.
            remote_branch: Remote branch to compare against.
            fetch: Refresh remote-tracking refs first.

        Returns:
            List[DiffEntry]: One entry per changed file.

        Raises:
            ChangeDetectionError: A git command failed.
        """
        if fetch:
            try:
                self._git(project_dir, ["fetch", "--quiet", "origin"])
            except ChangeDetectionError as e:
                logger.warning(f"Fetch failed, comparing against cached refs: {e}")

        local_branch = self._git(project_dir, ["rev-parse", "--abbrev-ref", "HEAD"]).strip()
        remote_ref = f"origin/{remote_branch}"
        logger.info(f"Local Branch  : {local_branch}")
        logger.info(f"Remote Branch : {remote_ref}")

        output = self._git(
            project_dir,
            ["diff", "--name-status", "-z", "-M", "-C", "--relative", remote_ref, local_branch, "--"],
        )
        entries = parse_name_status(output)
        logger.info(f"Detected {len(entries)} changed file(s).")
        return entries

    def _git(self, cwd: str, args: Sequence[str]) -> str:
        cmd = [self.git_executable, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except OSError as e:
            raise ChangeDetectionError(f"Unable to run git: {e}") from e

        if result.returncode != 0:
            raise ChangeDetectionError(
                f"'git {' '.join(args)}' failed ({result.returncode}): {result.stderr.strip()}"
            )
        return result.stdout

# -----------------------------------------------------------------------------
# OUTPUT PARSING
# -----------------------------------------------------------------------------

def parse_name_status(output: str) -> List[DiffEntry]:
    """
    Parse NUL-separated `git diff --name-status -z` output.

    Each record is a status field followed by one path, or two paths
    (source, destination) for copies and renames. Scores such as R087
    are ignored.

    Args:
        output: Raw stdout of git.

    Returns:
        List[DiffEntry]: Parsed entries in git order.
    """
    fields = output.split("\0")
    entries: List[DiffEntry] = []
    i = 0

    while i < len(fields):
        status = fields[i].strip()
        i += 1
        if not status:
            continue

        change_type = _STATUS_MAP.get(status[0])
        two_paths = status[0] in ("R", "C")
        expected = 2 if two_paths else 1
        paths = fields[i:i + expected]
        i += expected

        if len(paths) < expected:
            logger.warning(f"Truncated git output after status '{status}'")
            break
        if change_type is None:
            logger.debug(f"Skipping unsupported git status '{status}'")
            continue

        if two_paths:
            entries.append(DiffEntry(change_type, old_path=paths[0], new_path=paths[1]))
        elif change_type is ChangeType.ADD:
            entries.append(DiffEntry(change_type, new_path=paths[0]))
        else:
            entries.append(DiffEntry(change_type, old_path=paths[0]))

    return entries
