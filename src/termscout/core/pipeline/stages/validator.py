from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the scan pipeline, ensuring that the
configuration dictionary conforms to the expected schema. Handles type
coercion, path normalization and default value injection, and rejects
configurations that lack the settings a scan cannot run without.
"""

import logging
import re
from typing import Any, Dict, List, Tuple

from termscout.domain.config import get_default_config
from termscout.domain.constants import ENCODING_ERROR_MODES
from termscout.domain.errors import ConfigError
from termscout.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_COLUMN_RX = re.compile(r"^[A-Z]{1,3}$")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (CLI, JSON config file) into strictly typed
    parameters and fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition (Declarative mapping)
    string_fields = [
        "word_list_path", "word_column", "output_path",
        "error_log_path", "encoding_errors",
    ]
    list_fields = ["include_dirs", "exclude_dirs", "exclude_extensions"]

    # 3. Field Processing & Normalization
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in list_fields:
        merged[field] = _as_list_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["header_rows"] = _as_non_negative_int(
        merged.get("header_rows"), defaults["header_rows"], "header_rows", warnings, strict
    )

    # 4. Domain-Specific Normalization
    for field in ("word_list_path", "output_path", "error_log_path"):
        merged[field] = normalize_path(merged[field])
    merged["include_dirs"] = [normalize_path(d) for d in merged["include_dirs"]]

    merged["word_column"] = merged["word_column"].upper()
    merged["exclude_extensions"] = _normalize_extensions(merged["exclude_extensions"], warnings, strict)

    if merged["encoding_errors"] not in ENCODING_ERROR_MODES:
        msg = f"Invalid field 'encoding_errors': '{merged['encoding_errors']}' is not one of {ENCODING_ERROR_MODES}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        merged["encoding_errors"] = defaults["encoding_errors"]

    return merged, warnings


def require_run_settings(
        cfg: Dict[str, Any],
        *,
        need_word_list: bool = True,
        need_output: bool = True,
) -> None:
    """
    Ensure a validated configuration carries everything a scan needs.

    Args:
        cfg: Configuration returned by validate_config().
        need_word_list: Whether the word list path is mandatory.
        need_output: Whether the report path is mandatory.

    Raises:
        ConfigError: Listing every missing or malformed mandatory setting.
    """
    problems: List[str] = []

    if need_word_list and not cfg.get("word_list_path"):
        problems.append("no word list file given")
    if need_output and not cfg.get("output_path"):
        problems.append("no output report path given")
    if not cfg.get("include_dirs"):
        problems.append("no directory to scan given")
    if not _COLUMN_RX.match(cfg.get("word_column") or ""):
        problems.append(f"'{cfg.get('word_column')}' is not a column letter (e.g. A, B, AA)")

    if problems:
        raise ConfigError("Invalid scan configuration: " + "; ".join(problems) + ".")


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce integers and numeric strings; negative values fall back."""
    if value is None:
        return fallback

    out = None
    if isinstance(value, int) and not isinstance(value, bool):
        out = value
    elif isinstance(value, str) and not strict:
        s = value.strip()
        if s.isdigit():
            warnings.append(f"Field '{field}' converted from '{value}' to {int(s)}.")
            out = int(s)

    if out is not None and out >= 0:
        return out

    msg = f"Invalid field '{field}': expected non-negative int, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    # Support CSV string to list conversion for CLI compatibility
    if isinstance(value, str) and not strict:
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return [x.strip() for x in value.split(",") if x.strip()]

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Ensure all excluded extensions are lower-case and prefixed with a dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            if strict:
                raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
            warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
            e = "." + e
        out.append(e)
    return out
