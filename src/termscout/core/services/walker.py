from __future__ import annotations

"""
File Discovery Service.

Walks the configured root directories depth-first, pruning excluded
directories before descending and dropping files with excluded extensions.
Problems with a single directory (missing root, access denied) are turned
into ScanWarning values at the failing node; the walk then carries on with
the remaining work.
"""

import logging
import os
from typing import Iterator, List, Sequence

from termscout.core.pipeline.components.filters import ExclusionPolicy, get_extension
from termscout.domain.scan_models import FileRef, ScanWarning
from termscout.infra.fs import ensure_parent_dir

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

class DirectoryWalker:
    """
    Enumerates scannable files below a list of root directories.

    Files of a directory are yielded before any of its subdirectories are
    entered. Siblings are visited in sorted order so that reports are
    reproducible across runs.

    Attributes:
        roots: Root directories in the order they are walked.
        policy: Exclusion rules applied to directory and file names.
        warnings: Traversal problems collected so far.
        excluded_files: Number of files dropped by extension.
        excluded_dirs: Number of subtrees pruned by directory name.
    """

    def __init__(self, roots: Sequence[str], policy: ExclusionPolicy) -> None:
        self.roots = [os.path.abspath(r) for r in roots]
        self.policy = policy
        self.warnings: List[ScanWarning] = []
        self.excluded_files = 0
        self.excluded_dirs = 0

    def iter_files(self) -> Iterator[FileRef]:
        """
        Yield a FileRef for every regular, non-excluded file.

        Yields:
            FileRef: Files in traversal order.
        """
        for root in self.roots:
            if not os.path.isdir(root):
                reason = "not a directory" if os.path.exists(root) else "directory not found"
                self._warn(root, f"Skipping root: {reason}")
                continue

            logger.info(f"Walking {root}")
            yield from self._walk_root(root)

    # --------------------------------------------------------------------------
    # PRIVATE HELPERS
    # --------------------------------------------------------------------------

    def _walk_root(self, root: str) -> Iterator[FileRef]:
        for current, dirs, files in os.walk(root, topdown=True, onerror=self._on_walk_error):
            # In-place pruning keeps os.walk out of excluded subtrees
            kept = []
            for d in dirs:
                if self.policy.is_excluded_dir(d):
                    self.excluded_dirs += 1
                    logger.debug(f"Excluded directory: {os.path.join(current, d)}")
                else:
                    kept.append(d)
            dirs[:] = sorted(kept)

            for file_name in sorted(files):
                extension = get_extension(file_name)
                full_path = os.path.join(current, file_name)

                if self.policy.is_excluded_extension(extension):
                    self.excluded_files += 1
                    continue

                # FIFOs, sockets and dangling links are not scannable files
                if not os.path.isfile(full_path):
                    logger.debug(f"Skipping non-regular entry: {full_path}")
                    continue

                yield FileRef(name=file_name, extension=extension, full_path=full_path)

    def _on_walk_error(self, error: OSError) -> None:
        path = error.filename or ""
        if isinstance(error, PermissionError):
            self._warn(path, f"Access denied to directory: {error.strerror or error}")
        elif isinstance(error, FileNotFoundError):
            self._warn(path, f"Directory not found: {error.strerror or error}")
        else:
            self._warn(path, f"Cannot list directory: {error}")

    def _warn(self, path: str, message: str) -> None:
        logger.warning(f"{message} ({path})")
        self.warnings.append(ScanWarning(path=path, category="traversal", message=message))



def finalize_error_reporting(error_output_path: str, warnings: List[ScanWarning]) -> str:
    """
    Persist the warnings collected during a scan to a text report.

    Nothing is written when there are no warnings or no path is configured.
    A failure to write the report is logged and otherwise ignored; the scan
    result itself is unaffected.

    Args:
        error_output_path: Target filesystem path for the report.
        warnings: Recoverable problems encountered during the walk.

    Returns:
        str: The path to the generated report, or an empty string if not saved.
    """
    if not error_output_path or not warnings:
        return ""

    try:
        ensure_parent_dir(error_output_path)
        with open(error_output_path, "w", encoding="utf-8", errors="surrogateescape") as f:
            f.write("SCAN WARNINGS REPORT:\n")
            f.write("=" * 80 + "\n")
            for item in warnings:
                f.write(f"PATH: {item.path}\n")
                f.write(f"CATEGORY: {item.category}\n")
                f.write(f"MESSAGE: {item.message}\n")
                f.write("-" * 80 + "\n")
    except (OSError, UnicodeError) as e:
        logger.error(f"Failed to persist warnings report to '{error_output_path}': {e}")
        return ""

    return error_output_path
