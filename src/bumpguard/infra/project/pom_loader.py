from __future__ import annotations

"""
Maven Project Model Loader.

Reads a reactor (root pom.xml and every declared <module>, recursively)
into the flat identifier -> ModuleDescriptor map consumed by the tree
builder. Identifiers are the modules' absolute base directories.
"""

import logging
import os
import re
import xml.etree.ElementTree as ET
from typing import Dict, Mapping, Optional, Tuple

from bumpguard.domain.change_models import ModuleDescriptor
from bumpguard.domain.errors import ProjectModelError

logger = logging.getLogger(__name__)

POM_FILE_NAME = "pom.xml"
_PLACEHOLDER_RX = re.compile(r"\$\{([^}]+)\}")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_reactor(project_dir: str) -> Tuple[str, Dict[str, ModuleDescriptor]]:
    """
    Load the module descriptors of a multi-module Maven build.

    A declared module whose directory has no pom.xml is left out of the
    map; the tree builder then reports it as unresolved.

    Args:
        project_dir: Directory holding the root pom.xml.

    Returns:
        Tuple[str, Dict[str, ModuleDescriptor]]: Root identifier and the
        descriptors of every loaded module, root included.

    Raises:
        ProjectModelError: The root pom is missing, or a pom is not valid XML.
    """
    root_dir = os.path.abspath(project_dir)
    root_pom = os.path.join(root_dir, POM_FILE_NAME)
    if not os.path.isfile(root_pom):
        raise ProjectModelError(f"No {POM_FILE_NAME} found in {root_dir}")

    descriptors: Dict[str, ModuleDescriptor] = {}
    _load_module(root_dir, descriptors, inherited={})
    logger.info(f"Loaded {len(descriptors)} module descriptor(s) from {root_dir}")
    return root_dir, descriptors


def read_pom(pom_path: str, inherited: Optional[Mapping[str, str]] = None) -> Tuple[ModuleDescriptor, Dict[str, str]]:
    """
    Parse one pom.xml.

    Args:
        pom_path: Path of the pom file.
        inherited: Properties of the reactor parent, used for placeholders.

    Returns:
        Tuple[ModuleDescriptor, Dict[str, str]]: The descriptor (submodule
        identifiers resolved to absolute directories) and the properties
        visible to this module's children.
    """
    try:
        tree = ET.parse(pom_path)
    except (ET.ParseError, OSError) as e:
        raise ProjectModelError(f"Unable to read {pom_path}: {e}") from e

    root = tree.getroot()
    ns = _namespace(root)
    base_dir = os.path.dirname(os.path.abspath(pom_path))

    parent = root.find(f"{ns}parent")
    parent_group = _text(parent, f"{ns}groupId")
    parent_version = _text(parent, f"{ns}version")

    properties: Dict[str, str] = dict(inherited or {})
    props_el = root.find(f"{ns}properties")
    if props_el is not None:
        for prop in props_el:
            properties[_local_name(prop.tag)] = (prop.text or "").strip()

    group_id = _text(root, f"{ns}groupId") or parent_group
    artifact_id = _text(root, f"{ns}artifactId")
    version = _text(root, f"{ns}version") or parent_version

    if parent_group:
        properties["project.parent.groupId"] = parent_group
    if parent_version:
        properties["project.parent.version"] = parent_version
    properties["project.groupId"] = group_id
    properties["project.artifactId"] = artifact_id
    properties["project.version"] = version

    group_id = _interpolate(group_id, properties)
    version = _interpolate(version, properties)
    properties["project.groupId"] = group_id
    properties["project.version"] = version

    if not artifact_id:
        raise ProjectModelError(f"{pom_path} declares no artifactId")

    modules = tuple(
        os.path.normpath(os.path.join(base_dir, (el.text or "").strip()))
        for el in root.iterfind(f"{ns}modules/{ns}module")
        if (el.text or "").strip()
    )

    descriptor = ModuleDescriptor(
        group_id=group_id,
        artifact_id=_interpolate(artifact_id, properties),
        version=version,
        base_path=base_dir,
        modules=modules,
        pom_path=os.path.abspath(pom_path),
    )

    # Children see the parent's properties, not its project.* identity
    child_properties = {k: v for k, v in properties.items() if not k.startswith("project.")}
    return descriptor, child_properties

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _load_module(module_dir: str, descriptors: Dict[str, ModuleDescriptor], inherited: Mapping[str, str]) -> None:
    if module_dir in descriptors:
        return

    pom_path = os.path.join(module_dir, POM_FILE_NAME)
    if not os.path.isfile(pom_path):
        logger.warning(f"Declared module has no {POM_FILE_NAME}: {module_dir}")
        return

    descriptor, child_properties = read_pom(pom_path, inherited)
    descriptors[module_dir] = descriptor
    logger.debug(f"Module {descriptor.coords}:{descriptor.version} at {module_dir}")

    for sub_dir in descriptor.modules:
        _load_module(sub_dir, descriptors, child_properties)


def _namespace(element: ET.Element) -> str:
    if element.tag.startswith("{"):
        return element.tag.split("}", 1)[0] + "}"
    return ""


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[-1]


def _text(element: Optional[ET.Element], path: str) -> str:
    if element is None:
        return ""
    found = element.find(path)
    if found is None or found.text is None:
        return ""
    return found.text.strip()


def _interpolate(value: str, properties: Mapping[str, str]) -> str:
    """Resolve ${...} placeholders; unknown ones are kept verbatim."""
    for _ in range(10):
        resolved = _PLACEHOLDER_RX.sub(lambda m: properties.get(m.group(1), m.group(0)), value)
        if resolved == value:
            break
        value = resolved
    return value
