from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the merged configuration (defaults, JSON file, CLI overrides)
before any goal runs: type coercion, enum checks and default injection.
"""

import logging
from typing import Any, Dict, List, Tuple, Type

from bumpguard.domain.config import get_default_config
from bumpguard.domain.constants import LineEnding, ValidationPolicy
from bumpguard.infra.network import RemoteRepository
from bumpguard.infra.scm import ScmType

logger = logging.getLogger(__name__)

_STRING_FIELDS = ["project_dir", "remote_branch", "header", "template", "output_file", "line_ending"]
_BOOL_FIELDS = ["fetch", "show_change_details", "show_progress", "print_header", "print_all"]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
        the warnings collected while coercing it.

    Raises:
        TypeError: (strict) A field has the wrong type.
        ValueError: (strict) An enum-like field has an unknown value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["repositories"] = _as_repositories(
        merged.get("repositories"), defaults["repositories"], warnings, strict
    )
    merged["request_timeout"] = _as_timeout(
        merged.get("request_timeout"), defaults["request_timeout"], warnings, strict
    )

    merged["policy"] = _as_enum(merged.get("policy"), ValidationPolicy, defaults["policy"], "policy", warnings, strict)
    merged["scm"] = _as_enum(merged.get("scm"), ScmType, defaults["scm"], "scm", warnings, strict)
    if merged["line_ending"]:
        merged["line_ending"] = _as_line_ending(merged["line_ending"], warnings, strict)

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip() if field not in ("header", "template") else value
    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce 0/1 and yes/no style strings to booleans (non-strict only)."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_repositories(value: Any, fallback: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Keep the 'id=url' entries that parse; a CSV string is split first."""
    if value is None:
        return list(fallback)
    if isinstance(value, str) and not strict:
        value = [x for x in value.split(",") if x.strip()]
    if not isinstance(value, list):
        msg = f"Invalid field 'repositories': expected list[str], received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return list(fallback)

    out: List[str] = []
    for i, item in enumerate(value):
        try:
            if not isinstance(item, str):
                raise TypeError(f"Invalid item in 'repositories[{i}]': expected str.")
            repo = RemoteRepository.parse(item)
        except (TypeError, ValueError) as e:
            if strict:
                raise
            warnings.append(f"{e} Item discarded.")
            continue
        out.append(f"{repo.id}={repo.url}")
    return out if out else list(fallback)


def _as_timeout(value: Any, fallback: float, warnings: List[str], strict: bool) -> float:
    if value is None:
        return fallback
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        msg = f"Invalid field 'request_timeout': expected number, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    try:
        timeout = float(value)
    except ValueError:
        if strict:
            raise
        warnings.append(f"Invalid field 'request_timeout': '{value}' is not a number. Using fallback.")
        return fallback
    if timeout <= 0:
        if strict:
            raise ValueError("Field 'request_timeout' must be positive.")
        warnings.append("Field 'request_timeout' must be positive. Using fallback.")
        return fallback
    return timeout

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _as_enum(value: Any, enum_cls: Type[Any], fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Return the canonical (upper-case) enum value name."""
    name = str(value or "").strip().upper()
    if name in enum_cls.__members__:
        return enum_cls[name].value
    allowed = ", ".join(enum_cls.__members__)
    msg = f"Invalid field '{field}': '{value}' is not one of {allowed}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback


def _as_line_ending(value: str, warnings: List[str], strict: bool) -> str:
    """Line endings are kept by name (CR, LF, CRLF)."""
    try:
        return LineEnding.from_name(value).name
    except KeyError:
        msg = f"Invalid field 'line_ending': '{value}' is not one of CR, LF, CRLF."
        if strict:
            raise ValueError(msg) from None
        warnings.append(f"{msg} Using the platform default.")
        return ""
