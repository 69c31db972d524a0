from __future__ import annotations

"""
Atomic File Scan Worker.

Encapsulates the processing of a single file unit: full read, line
matching and conversion of raw matches into Finding objects. Read failures
are captured and returned as part of the task result so that one bad file
never interrupts the walk.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from termscout.core.pipeline.components.matcher import scan_lines
from termscout.core.pipeline.components.reader import read_text_lines
from termscout.domain.scan_models import FileRef, Finding, ScanWarning

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def scan_file_task(
        file_ref: FileRef,
        words: Sequence[str],
        encoding_errors: str = "strict",
) -> Dict[str, Any]:
    """
    Execute the full scanning lifecycle for a single file.

    Args:
        file_ref: File to scan.
        words: Search terms in word-list order.
        encoding_errors: Decoder policy handed to the reader.

    Returns:
        Dict[str, Any]: Task result with keys:
                        - ok: False if the file could not be read.
                        - file: The FileRef processed.
                        - findings: List of (word, Finding) in discovery order.
                        - lines: Number of lines scanned.
                        - warning: ScanWarning describing a read failure, or None.
    """
    logger.debug(f"Scanning {file_ref.full_path}")

    try:
        lines = read_text_lines(file_ref.full_path, errors=encoding_errors)
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read file: {e}"
        logger.warning(f"{msg} ({file_ref.full_path})")
        return {
            "ok": False,
            "file": file_ref,
            "findings": [],
            "lines": 0,
            "warning": ScanWarning(path=file_ref.full_path, category="read", message=msg),
        }

    findings: List[Tuple[str, Finding]] = []
    for word, line_number, column in scan_lines(lines, words):
        logger.debug(f"Found '{word}' in {file_ref.full_path} at {line_number}:{column}")
        findings.append((word, Finding(file=file_ref, line=line_number, column=column)))

    return {
        "ok": True,
        "file": file_ref,
        "findings": findings,
        "lines": len(lines),
        "warning": None,
    }
