from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior: argument parsing, exit
codes, stream output and file side effects. The list goal runs in a
subprocess against an unreachable repository; the validate goal runs
in-process with the git adapter and the repository context patched.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List
from unittest.mock import MagicMock, patch

import pytest

from bumpguard.domain.change_models import ChangeType, DiffEntry
from bumpguard.infra.network import RemoteRepository, VersionLookup
from bumpguard.interface.cli.app import main as cli_main

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "bumpguard" / "main.py"

# Nothing listens on the discard port, so lookups fail fast and offline
UNREACHABLE_REPO = "local=http://127.0.0.1:9"


def run_cli(args: List[str], home: Path, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and points HOME at a
    temporary directory so no user configuration leaks into the run.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a two-module Maven reactor.

    Structure:
    /project         org.acme:root:1.0
      /core          org.acme:core:1.1
    """
    root = tmp_path / "project"
    (root / "core").mkdir(parents=True)
    (root / "pom.xml").write_text(
        "<project><groupId>org.acme</groupId><artifactId>root</artifactId>"
        "<version>1.0</version><modules><module>core</module></modules></project>",
        encoding="utf-8",
    )
    (root / "core" / "pom.xml").write_text(
        "<project><parent><groupId>org.acme</groupId><version>1.0</version></parent>"
        "<artifactId>core</artifactId><version>1.1</version></project>",
        encoding="utf-8",
    )
    return root


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path

# -----------------------------------------------------------------------------
# SUBPROCESS TESTS
# -----------------------------------------------------------------------------

def test_cli_help_message(home: Path) -> None:
    """TC-01: Verify help message is displayed (smoke test for argparse)."""
    result = run_cli(["--help"], home)

    assert result.returncode == 0
    assert "usage: bumpguard" in result.stdout
    assert "validate" in result.stdout


def test_cli_dump_config_applies_overrides(home: Path, sample_project: Path) -> None:
    """TC-02: Verify command line flags override default configuration values."""
    result = run_cli([
        "validate",
        "-p", str(sample_project),
        "--policy", "enforcing",
        "--no-fetch",
        "--dump-config",
    ], home)

    assert result.returncode == 0, result.stderr
    data = json.loads(result.stdout)
    assert data["project_dir"] == str(sample_project)
    assert data["policy"] == "ENFORCING"
    assert data["fetch"] is False
    assert data["scm"] == "GIT"


def test_cli_handles_missing_project(home: Path, tmp_path: Path) -> None:
    """TC-03: Verify exit code 2 when the project directory is invalid."""
    result = run_cli(["list", "-p", str(tmp_path / "nope")], home)

    assert result.returncode == 2
    assert "does not exist" in result.stderr


def test_cli_list_writes_csv(home: Path, sample_project: Path, tmp_path: Path) -> None:
    """TC-04: Verify the list goal renders rows and writes '<name>.csv'."""
    out_base = tmp_path / "versions"

    result = run_cli([
        "list",
        "-p", str(sample_project),
        "-r", UNREACHABLE_REPO,
        "--timeout", "2",
        "--template", "artifactId=localVersion",
        "--line-ending", "LF",
        "--output-file", str(out_base),
    ], home)

    assert result.returncode == 0, result.stderr
    csv_file = Path(str(out_base) + ".csv")
    assert csv_file.exists()
    lines = csv_file.read_text(encoding="utf-8").split("\n")
    assert lines[1:] == ["core=1.1", "root=1.0"]


def test_cli_list_debug_reports_summary(home: Path, sample_project: Path, tmp_path: Path) -> None:
    """TC-04b: Verify --debug reports the listed row count and the written file."""
    out_base = tmp_path / "versions"

    result = run_cli([
        "list",
        "-p", str(sample_project),
        "-r", UNREACHABLE_REPO,
        "--timeout", "2",
        "--output-file", str(out_base),
        "--debug",
    ], home)

    assert result.returncode == 0, result.stderr
    assert f"Listed 2 module(s); file: {out_base}.csv" in result.stdout


def test_cli_list_without_pom_fails(home: Path, tmp_path: Path) -> None:
    """TC-05: Verify a directory without pom.xml is reported as a failure."""
    result = run_cli(["list", "-p", str(tmp_path), "-r", UNREACHABLE_REPO], home)

    assert result.returncode == 1
    assert "ProjectModelError" in result.stderr

# -----------------------------------------------------------------------------
# IN-PROCESS TESTS (validate goal)
# -----------------------------------------------------------------------------

def _patched_validate(sample_project: Path, remote_version: str, extra_args: List[str]) -> int:
    detector = MagicMock()
    detector.detect_changes.return_value = [
        DiffEntry(ChangeType.MODIFY, old_path="core/src/Main.java"),
    ]
    context = MagicMock()
    context.find_latest_version.return_value = VersionLookup(
        remote_version, RemoteRepository("central", "https://repo.example.org")
    )

    with patch("bumpguard.interface.cli.app.get_detector", return_value=detector), \
            patch("bumpguard.interface.cli.app.RepositoryContext") as ctx_cls, \
            patch("bumpguard.interface.cli.app.load_config", return_value={}):
        ctx_cls.from_specs.return_value.__enter__.return_value = context
        code = cli_main(["validate", "-p", str(sample_project), *extra_args])

    detector.detect_changes.assert_called_once()
    context.find_latest_version.assert_called_once_with("org.acme", "core")
    return code


def test_validate_enforcing_fails_on_unbumped_module(sample_project: Path) -> None:
    """TC-06: Verify a changed module with a published version fails the run."""
    assert _patched_validate(sample_project, "1.1", ["--policy", "ENFORCING"]) == 1


def test_validate_permissive_only_warns(sample_project: Path) -> None:
    """TC-07: Verify the permissive policy never fails the run."""
    assert _patched_validate(sample_project, "1.1", ["--policy", "PERMISSIVE"]) == 0


def test_validate_bumped_module_passes(sample_project: Path) -> None:
    """TC-08: Verify a bumped version passes under the enforcing policy."""
    assert _patched_validate(sample_project, "1.0", ["--policy", "ENFORCING", "--no-fetch"]) == 0
