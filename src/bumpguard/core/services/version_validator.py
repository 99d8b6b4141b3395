from __future__ import annotations

"""
Version Validation Service.

Applies the versioning policy to an attributed change tree: a module that
directly holds changes must not carry a version that is already
published in a remote repository.
"""

import logging
from typing import List, Optional

from bumpguard.domain.constants import ValidationPolicy
from bumpguard.domain.report_models import ModuleViolation, ValidationResult
from bumpguard.domain.tree_models import ModuleNode
from bumpguard.infra.network import RepositoryContext

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_changes(
        tree: ModuleNode,
        context: RepositoryContext,
        policy: ValidationPolicy = ValidationPolicy.PERMISSIVE,
        show_progress: bool = False,
        show_change_details: bool = False,
) -> ValidationResult:
    """
    Check every changed module of the tree against its latest remote version.

    Violations are logged as warnings under PERMISSIVE and as errors under
    ENFORCING. Raising is left to the caller (see ValidationResult.ok).

    Args:
        tree: Attributed module tree.
        context: Remote repository session for this run.
        policy: How violations are reported.
        show_progress: Log one line per visited module.
        show_change_details: Log the rendered change report first.

    Returns:
        ValidationResult: Checked/changed counts and the violations found.
    """
    report = tree.render()
    if show_change_details:
        logger.info("Change Details:\n" + report)

    modules = list(tree.flatten())
    violations: List[ModuleViolation] = []
    changed = 0

    if show_progress:
        logger.info("Progress:")

    for index, module in enumerate(modules, start=1):
        if show_progress:
            logger.info(f"{index} / {len(modules)} [{module.coords}]")
        if not module.has_diff():
            continue
        changed += 1

        violation = _check_module(module, context)
        if violation is None:
            continue

        violations.append(violation)
        if policy is ValidationPolicy.ENFORCING:
            logger.error(violation.message)
        else:
            logger.warning(violation.message)

    logger.info(
        f"Validated {len(modules)} module(s): {changed} changed, {len(violations)} violation(s)."
    )
    return ValidationResult(
        policy=policy,
        modules_checked=len(modules),
        modules_changed=changed,
        violations=violations,
        report=report,
    )

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _check_module(module: ModuleNode, context: RepositoryContext) -> Optional[ModuleViolation]:
    lookup = context.find_latest_version(module.group_id, module.artifact_id)
    if not lookup.found or lookup.highest_version != module.version:
        return None

    repository = lookup.repository
    return ModuleViolation(
        coords=module.coords,
        version=module.version,
        diff_count=module.diff_count(),
        repository_id=repository.id if repository else "",
        repository_url=repository.url if repository else "",
    )
