from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, JSON file, CLI overrides), goal execution and exit
code mapping.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from bumpguard.core.services.change_detector import detect_project_changes
from bumpguard.core.services.config_validator import validate_config
from bumpguard.core.services.version_lister import list_versions
from bumpguard.core.services.version_validator import validate_changes
from bumpguard.domain.config import load_config
from bumpguard.domain.constants import LineEnding, ValidationPolicy
from bumpguard.domain.errors import BumpguardError, ValidationFailedError
from bumpguard.domain.report_models import ListOptions
from bumpguard.infra.fs import normalize_path
from bumpguard.infra.logging import LoggingConfig, configure_logging, get_logger
from bumpguard.infra.network import RepositoryContext
from bumpguard.infra.project.pom_loader import load_reactor
from bumpguard.infra.scm import get_detector
from bumpguard.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))
    logger.debug(f"Running goal '{args.goal}'. Resolving configuration...")

    # 2. Configuration hierarchy
    base_conf = load_config(args.config_file)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    try:
        conf, warnings = validate_config(raw_conf, strict=False)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_INVALID_INPUT

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 3. Pre-flight input verification
    project_dir = normalize_path(conf["project_dir"], os.getcwd())
    if not os.path.isdir(project_dir):
        logger.error(f"Project directory does not exist: {project_dir}")
        return EXIT_INVALID_INPUT

    # 4. Goal execution
    try:
        with RepositoryContext.from_specs(conf["repositories"], timeout=conf["request_timeout"]) as context:
            if args.goal == "validate":
                return _run_validate(conf, project_dir, context)
            return _run_list(conf, project_dir, context)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except ValidationFailedError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    except BumpguardError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# GOALS
# -----------------------------------------------------------------------------

def _run_validate(conf: Dict[str, Any], project_dir: str, context: RepositoryContext) -> int:
    policy = ValidationPolicy(conf["policy"])
    logger.info(f"Validating {project_dir} against origin/{conf['remote_branch']} (policy: {policy.value})")

    tree = detect_project_changes(
        project_dir,
        get_detector(conf["scm"]),
        remote_branch=conf["remote_branch"],
        fetch=conf["fetch"],
    )
    result = validate_changes(
        tree,
        context,
        policy=policy,
        show_progress=conf["show_progress"],
        show_change_details=conf["show_change_details"],
    )
    if not result.ok:
        raise ValidationFailedError(len(result.violations))
    return EXIT_OK


def _run_list(conf: Dict[str, Any], project_dir: str, context: RepositoryContext) -> int:
    line_ending = LineEnding.from_name(conf["line_ending"])
    options = ListOptions(
        print_header=conf["print_header"],
        print_all=conf["print_all"],
        header=conf["header"],
        template=conf["template"],
        line_ending=line_ending.value,
        output_file=conf["output_file"],
    )
    logger.info(
        f"Listing versions of {project_dir} "
        f"(printAll: {options.print_all}, lineEnding: {line_ending.name})"
    )

    _, descriptors = load_reactor(project_dir)
    result = list_versions(descriptors, context, options, show_progress=conf["show_progress"])
    logger.debug(f"Listed {len(result.rows)} module(s); file: {result.output_path or '-'}")
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge; None overrides are ignored."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
