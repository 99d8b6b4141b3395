from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the two goals (validate, list) and
translates parsed namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

from bumpguard.domain.constants import APP_VERSION, LineEnding, ValidationPolicy

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the bumpguard CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-p", "--project-dir",
        dest="project_dir",
        default=None,
        help="Directory holding the root pom.xml (default: current directory).",
    )
    common.add_argument(
        "-r", "--repository",
        dest="repositories",
        action="append",
        default=None,
        metavar="ID=URL",
        help="Remote repository to query. Repeatable; replaces the configured list.",
    )
    common.add_argument(
        "--timeout",
        dest="request_timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds for repository queries.",
    )
    common.add_argument(
        "--progress",
        dest="show_progress",
        action="store_true",
        help="Log one line per visited module.",
    )
    common.add_argument("--config", dest="config_file", default=None, help="JSON configuration file.")
    common.add_argument("--log-file", dest="log_file", default=None, help="Also write logs to this file.")
    common.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")
    common.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )

    p = argparse.ArgumentParser(
        prog="bumpguard",
        description="Detect module changes and check that their versions were bumped.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    sub = p.add_subparsers(dest="goal", metavar="GOAL")
    sub.required = True

    # --- validate ---
    v = sub.add_parser(
        "validate",
        parents=[common],
        help="Fail or warn when changed modules keep an already published version.",
    )
    v.add_argument(
        "--policy",
        type=str.upper,
        choices=[policy.value for policy in ValidationPolicy],
        default=None,
        help="PERMISSIVE logs violations as warnings; ENFORCING fails the run.",
    )
    v.add_argument(
        "--remote-branch",
        dest="remote_branch",
        default=None,
        help="Remote branch to compare against (default: HEAD).",
    )
    v.add_argument("--no-fetch", action="store_true", help="Do not fetch before diffing.")
    v.add_argument(
        "--no-change-details",
        action="store_true",
        help="Do not print the per-module change report.",
    )

    # --- list ---
    ls = sub.add_parser(
        "list",
        parents=[common],
        help="List local and remote versions of every module.",
    )
    ls.add_argument("--no-header", action="store_true", help="Omit the header line.")
    ls.add_argument(
        "--print-all",
        action="store_true",
        help="Include modules whose local version equals the remote one.",
    )
    ls.add_argument("--header", default=None, help="Header line text.")
    ls.add_argument(
        "--template",
        default=None,
        help="Row template. Tokens: baseDir, pomPath, groupId, artifactId, "
             "localVersion, remoteVersion, remoteRepositoryId, remoteRepositoryUrl.",
    )
    ls.add_argument(
        "--output-file",
        dest="output_file",
        default=None,
        help="Write the listing to <name>.csv.",
    )
    ls.add_argument(
        "--line-ending",
        dest="line_ending",
        type=str.upper,
        choices=[e.name for e in LineEnding],
        default=None,
        help="Row separator (default: platform separator).",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options left unset map to None (or are omitted) so they never mask
    values coming from the configuration file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "project_dir": args.project_dir,
        "repositories": args.repositories,
        "request_timeout": args.request_timeout,
    }
    if args.show_progress:
        overrides["show_progress"] = True

    if args.goal == "validate":
        overrides["policy"] = args.policy
        overrides["remote_branch"] = args.remote_branch
        if args.no_fetch:
            overrides["fetch"] = False
        if args.no_change_details:
            overrides["show_change_details"] = False

    elif args.goal == "list":
        overrides["header"] = args.header
        overrides["template"] = args.template
        overrides["output_file"] = args.output_file
        overrides["line_ending"] = args.line_ending
        if args.no_header:
            overrides["print_header"] = False
        if args.print_all:
            overrides["print_all"] = True

    return overrides
