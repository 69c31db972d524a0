from __future__ import annotations

"""
Traversal Exclusion Engine.

Implements the exclusion policy applied by the directory walker: directory
base names and file extension tokens, both compared exactly and without
regard to case. No glob, regex or partial matching is performed.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from termscout.domain.constants import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXCLUDED_EXTENSIONS

# -----------------------------------------------------------------------------
# POLICY MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ExclusionPolicy:
    """
    Immutable set of directory-name and extension exclusions.

    Entries are stored lower-cased; use build_exclusion_policy() to
    construct an instance from raw configuration values.

    Attributes:
        excluded_dirs: Directory base names whose whole subtree is skipped.
        excluded_extensions: Extension tokens (with leading dot) never scanned.
    """
    excluded_dirs: FrozenSet[str] = frozenset()
    excluded_extensions: FrozenSet[str] = frozenset()

    def is_excluded_dir(self, dir_name: str) -> bool:
        return dir_name.lower() in self.excluded_dirs

    def is_excluded_extension(self, extension: str) -> bool:
        # A file without extension never matches an exclusion entry
        if not extension:
            return False
        return extension.lower() in self.excluded_extensions


def build_exclusion_policy(
        excluded_dirs: Optional[Iterable[str]] = None,
        excluded_extensions: Optional[Iterable[str]] = None,
) -> ExclusionPolicy:
    """
    Create a policy from raw name lists, falling back to the system defaults.

    Blank entries are discarded so they can never match an empty extension.

    Args:
        excluded_dirs: Directory base names, or None for the defaults.
        excluded_extensions: Extension tokens, or None for the defaults.

    Returns:
        ExclusionPolicy: Normalized, case-folded policy.
    """
    dirs = DEFAULT_EXCLUDED_DIRS if excluded_dirs is None else excluded_dirs
    exts = DEFAULT_EXCLUDED_EXTENSIONS if excluded_extensions is None else excluded_extensions

    return ExclusionPolicy(
        excluded_dirs=frozenset(d.strip().lower() for d in dirs if d and d.strip()),
        excluded_extensions=frozenset(e.strip().lower() for e in exts if e and e.strip()),
    )

# -----------------------------------------------------------------------------
# NAME HELPERS
# -----------------------------------------------------------------------------

def get_extension(file_name: str) -> str:
    """
    Extract the extension token of a file name, including the leading dot.

    Unlike os.path.splitext, a leading dot counts as an extension separator,
    so '.gitignore' yields '.gitignore'. A trailing dot yields ''.

    Args:
        file_name: Base name of the file.

    Returns:
        str: Extension token such as '.py', or '' if there is none.
    """
    idx = file_name.rfind(".")
    if idx == -1 or idx == len(file_name) - 1:
        return ""
    return file_name[idx:]
