from __future__ import annotations

"""
Integration tests for the Git Change Detector.

Verifies `--name-status -z` parsing and the git command sequence, with
subprocess mocked so no repository or git binary is needed.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from bumpguard.domain.change_models import ChangeType, DiffEntry
from bumpguard.domain.errors import ChangeDetectionError
from bumpguard.infra.scm import GitDetector, ScmType, get_detector, parse_name_status


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr=stderr)

# -----------------------------------------------------------------------------
# OUTPUT PARSING TESTS
# -----------------------------------------------------------------------------

def test_parse_name_status_all_types() -> None:
    """TC-01: Verify every supported status letter."""
    output = "\0".join([
        "A", "core/New.java",
        "M", "core/Mod.java",
        "D", "Old.md",
        "R087", "core/a.txt", "core/api/a.txt",
        "C100", "pom.xml", "core/pom.xml",
        "T", "link",
    ]) + "\0"

    assert parse_name_status(output) == [
        DiffEntry(ChangeType.ADD, new_path="core/New.java"),
        DiffEntry(ChangeType.MODIFY, old_path="core/Mod.java"),
        DiffEntry(ChangeType.DELETE, old_path="Old.md"),
        DiffEntry(ChangeType.RENAME, old_path="core/a.txt", new_path="core/api/a.txt"),
        DiffEntry(ChangeType.COPY, old_path="pom.xml", new_path="core/pom.xml"),
        DiffEntry(ChangeType.MODIFY, old_path="link"),
    ]


def test_parse_name_status_paths_with_spaces() -> None:
    """TC-02: Verify NUL separation keeps unusual file names intact."""
    assert parse_name_status("M\0docs/release notes.txt\0") == [
        DiffEntry(ChangeType.MODIFY, old_path="docs/release notes.txt"),
    ]


def test_parse_name_status_skips_unknown_and_truncated() -> None:
    """TC-03: Verify unsupported statuses are skipped and truncation stops parsing."""
    assert parse_name_status("U\0conflict.txt\0M\0ok.txt\0") == [
        DiffEntry(ChangeType.MODIFY, old_path="ok.txt"),
    ]
    assert parse_name_status("M\0a.txt\0R100\0only-source.txt") == [
        DiffEntry(ChangeType.MODIFY, old_path="a.txt"),
    ]
    assert parse_name_status("") == []

# -----------------------------------------------------------------------------
# DETECTOR TESTS
# -----------------------------------------------------------------------------

@patch("bumpguard.infra.scm.git_detector.subprocess.run")
def test_detect_changes_command_sequence(mock_run: MagicMock) -> None:
    """TC-04: Verify fetch, branch resolution and diff invocation."""
    mock_run.side_effect = [
        _completed(),
        _completed("feature/x\n"),
        _completed("M\0core/Foo.java\0"),
    ]

    entries = GitDetector().detect_changes("/repo", remote_branch="main")

    assert entries == [DiffEntry(ChangeType.MODIFY, old_path="core/Foo.java")]
    commands = [c.args[0] for c in mock_run.call_args_list]
    assert commands[0] == ["git", "fetch", "--quiet", "origin"]
    assert commands[1] == ["git", "rev-parse", "--abbrev-ref", "HEAD"]
    assert commands[2][:2] == ["git", "diff"]
    assert "--relative" in commands[2]
    assert commands[2][-3:] == ["origin/main", "feature/x", "--"]
    assert all(c.kwargs["cwd"] == "/repo" for c in mock_run.call_args_list)


@patch("bumpguard.infra.scm.git_detector.subprocess.run")
def test_detect_changes_without_fetch(mock_run: MagicMock) -> None:
    """TC-05: Verify fetch can be disabled."""
    mock_run.side_effect = [_completed("main\n"), _completed("")]

    assert GitDetector().detect_changes("/repo", fetch=False) == []
    assert mock_run.call_count == 2


@patch("bumpguard.infra.scm.git_detector.subprocess.run")
def test_fetch_failure_is_not_fatal(mock_run: MagicMock) -> None:
    """TC-06: Verify an offline fetch falls back to cached refs."""
    mock_run.side_effect = [
        _completed(returncode=128, stderr="Could not resolve host"),
        _completed("main\n"),
        _completed("A\0x.txt\0"),
    ]

    assert len(GitDetector().detect_changes("/repo")) == 1


@patch("bumpguard.infra.scm.git_detector.subprocess.run")
def test_diff_failure_raises(mock_run: MagicMock) -> None:
    """TC-07: Verify git errors surface as ChangeDetectionError."""
    mock_run.side_effect = [
        _completed("main\n"),
        _completed(returncode=128, stderr="fatal: bad revision 'origin/nope'"),
    ]

    with pytest.raises(ChangeDetectionError, match="bad revision"):
        GitDetector().detect_changes("/repo", remote_branch="nope", fetch=False)


@patch("bumpguard.infra.scm.git_detector.subprocess.run", side_effect=FileNotFoundError("git"))
def test_missing_git_binary_raises(mock_run: MagicMock) -> None:
    """TC-08: Verify a missing executable is reported as ChangeDetectionError."""
    with pytest.raises(ChangeDetectionError):
        GitDetector().detect_changes("/repo", fetch=False)


def test_get_detector() -> None:
    """TC-09: Verify the SCM factory."""
    assert isinstance(get_detector("git"), GitDetector)
    assert isinstance(get_detector(ScmType.GIT), GitDetector)
    with pytest.raises(ValueError):
        get_detector("svn")
