from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys for both goals.
2. Handling of boolean flags (store_true) and repeatable options.
3. Rejection of unknown enum values.
"""

import pytest

from bumpguard.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_validate_flags_mapping():
    args = parse_args([
        "validate",
        "--policy", "enforcing",
        "--remote-branch", "develop",
        "--no-fetch",
        "--no-change-details",
        "--progress",
    ])

    overrides = args_to_overrides(args)

    assert args.goal == "validate"
    assert overrides["policy"] == "ENFORCING"
    assert overrides["remote_branch"] == "develop"
    assert overrides["fetch"] is False
    assert overrides["show_change_details"] is False
    assert overrides["show_progress"] is True


def test_cli_list_flags_mapping():
    args = parse_args([
        "list",
        "--no-header",
        "--print-all",
        "--template", "groupId:artifactId",
        "--output-file", "versions",
        "--line-ending", "crlf",
    ])

    overrides = args_to_overrides(args)

    assert overrides["print_header"] is False
    assert overrides["print_all"] is True
    assert overrides["template"] == "groupId:artifactId"
    assert overrides["output_file"] == "versions"
    assert overrides["line_ending"] == "CRLF"
    assert "policy" not in overrides


def test_cli_common_arguments():
    args = parse_args([
        "list",
        "-p", "/work/project",
        "-r", "central=https://a.example",
        "-r", "mirror=https://b.example",
        "--timeout", "3",
    ])

    overrides = args_to_overrides(args)

    assert overrides["project_dir"] == "/work/project"
    assert overrides["repositories"] == ["central=https://a.example", "mirror=https://b.example"]
    assert overrides["request_timeout"] == 3.0


def test_cli_defaults_do_not_override_config():
    """Unset options map to None (dropped by the merge) or are absent."""
    overrides = args_to_overrides(parse_args(["validate"]))

    assert overrides["project_dir"] is None
    assert overrides["policy"] is None
    assert "fetch" not in overrides
    assert "show_progress" not in overrides


def test_cli_rejects_unknown_policy():
    with pytest.raises(SystemExit):
        parse_args(["validate", "--policy", "lax"])


def test_cli_requires_goal():
    with pytest.raises(SystemExit):
        parse_args([])
