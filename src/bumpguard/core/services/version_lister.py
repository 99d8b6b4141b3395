from __future__ import annotations

"""
Version Listing Service.

Implements the list goal: compares the local version of every module with
the latest remote version and renders one templated row per module.
"""

import logging
import re
from typing import Dict, List, Mapping

from bumpguard.domain.change_models import ModuleDescriptor
from bumpguard.domain.constants import TEMPLATE_TOKENS
from bumpguard.domain.report_models import ListOptions, ListResult
from bumpguard.infra.fs import csv_output_path, write_text_file
from bumpguard.infra.network import RepositoryContext, VersionLookup

logger = logging.getLogger(__name__)

# Longest tokens first so the alternation never matches a shorter prefix
_TOKEN_RX = re.compile("|".join(sorted(TEMPLATE_TOKENS, key=len, reverse=True)))

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def list_versions(
        descriptors: Mapping[str, ModuleDescriptor],
        context: RepositoryContext,
        options: ListOptions,
        show_progress: bool = False,
) -> ListResult:
    """
    Render the local/remote version listing of every module.

    Args:
        descriptors: Every module of the build.
        context: Remote repository session for this run.
        options: Row selection and formatting settings.
        show_progress: Log one line per visited module.

    Returns:
        ListResult: Rendered rows, joined content and the CSV path if written.
    """
    modules = sorted(descriptors.values(), key=lambda d: (d.group_id, d.artifact_id, d.base_path))
    rows: List[str] = []

    for index, module in enumerate(modules, start=1):
        if show_progress:
            logger.info(f"{index} / {len(modules)} [{module.coords}]")

        lookup = context.find_latest_version(module.group_id, module.artifact_id)
        if options.print_all or lookup.highest_version != module.version:
            rows.append(render_template(options.template, module, lookup))

    lines = ([options.header] if options.print_header else []) + rows
    content = options.line_ending.join(lines)
    logger.info("Output:\n" + content)

    output_path = csv_output_path(options.output_file) or None
    if output_path:
        ok, err = write_text_file(output_path, content)
        if ok:
            logger.info(f"Listing saved to file: {output_path}")
        else:
            logger.error(f"Failed to save listing to '{output_path}': {err}")
            output_path = None

    return ListResult(rows=rows, content=content, output_path=output_path)


def render_template(template: str, module: ModuleDescriptor, lookup: VersionLookup) -> str:
    """
    Substitute the per-module tokens of a row template.

    Text that is not a token is copied verbatim. Missing remote data
    renders as an empty string.
    """
    values = template_values(module, lookup)
    return _TOKEN_RX.sub(lambda m: values[m.group(0)], template)


def template_values(module: ModuleDescriptor, lookup: VersionLookup) -> Dict[str, str]:
    repository = lookup.repository
    return {
        "baseDir": module.base_path,
        "pomPath": module.pom_path,
        "groupId": module.group_id,
        "artifactId": module.artifact_id,
        "localVersion": module.version,
        "remoteVersion": lookup.highest_version or "",
        "remoteRepositoryId": repository.id if repository else "",
        "remoteRepositoryUrl": repository.url if repository else "",
    }
