from __future__ import annotations

"""
Findings Report Sinks.

Serializes a finalized FindingsIndex to disk, one row per finding in index
order (words in first-seen order, findings in discovery order), under a
single header row:

    Word, Line Number, Line Row, File Name, File Extension, File Full Path

The delimited sink joins fields with ', ' and wraps only the full path in
double quotes, because paths may contain the separator. The Excel sink
writes the same columns to one worksheet.

File names that are not valid UTF-8 reach this module as strings holding
surrogate escapes. The delimited sink writes their original bytes back;
the Excel sink, which can only store valid XML text, substitutes U+FFFD
for them and drops control characters.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import List

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from termscout.domain.constants import (
    EXCEL_REPORT_EXTENSIONS,
    REPORT_COLUMNS,
    REPORT_SEPARATOR,
    REPORT_SHEET_TITLE,
)
from termscout.domain.errors import ReportWriteError
from termscout.domain.scan_models import Finding, FindingsIndex
from termscout.infra.fs import ensure_parent_dir

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PORT
# -----------------------------------------------------------------------------

class ReportSink(ABC):
    """
    Abstract destination for a findings report.

    Attributes:
        path: Output file, overwritten if it exists.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def write(self, index: FindingsIndex) -> int:
        """
        Persist the report, creating the parent directory if needed.

        Args:
            index: Findings to serialize.

        Returns:
            int: Number of finding rows written.

        Raises:
            ReportWriteError: If the file cannot be written.
        """
        try:
            ensure_parent_dir(self.path)
            rows = self._write(index)
        except (OSError, UnicodeError, ValueError) as e:
            # ValueError covers cells openpyxl refuses, such as control characters
            _discard_partial(self.path)
            raise ReportWriteError(f"Cannot write report '{self.path}': {e}") from e

        logger.info(f"Report written to {self.path} ({rows} rows).")
        return rows

    @abstractmethod
    def _write(self, index: FindingsIndex) -> int:
        """Format-specific serialization. May raise OSError."""


# -----------------------------------------------------------------------------
# ADAPTERS
# -----------------------------------------------------------------------------

class DelimitedReportSink(ReportSink):
    """Comma-space separated UTF-8 text report (BOM-prefixed for spreadsheet apps)."""

    def _write(self, index: FindingsIndex) -> int:
        count = 0
        with open(self.path, "w", encoding="utf-8-sig", errors="surrogateescape") as out:
            out.write(REPORT_SEPARATOR.join(REPORT_COLUMNS) + "\n")
            for word, finding in index.rows():
                out.write(format_report_line(word, finding) + "\n")
                count += 1
        return count


class ExcelReportSink(ReportSink):
    """Single-sheet Excel workbook report written with openpyxl."""

    def _write(self, index: FindingsIndex) -> int:
        wb = Workbook(write_only=True)
        ws = wb.create_sheet(title=REPORT_SHEET_TITLE)
        ws.append(list(REPORT_COLUMNS))

        count = 0
        for word, finding in index.rows():
            ws.append([
                _cell_text(word),
                finding.line,
                finding.column,
                _cell_text(finding.file.name),
                _cell_text(finding.file.extension),
                _cell_text(finding.file.full_path),
            ])
            count += 1

        wb.save(self.path)
        return count


def _cell_text(value: str) -> str:
    text = value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    return ILLEGAL_CHARACTERS_RE.sub("", text)


# -----------------------------------------------------------------------------
# FORMATTING & FACTORY
# -----------------------------------------------------------------------------

def format_report_line(word: str, finding: Finding) -> str:
    """
    Render one finding as a delimited report line (without terminator).

    Args:
        word: Search term the finding belongs to.
        finding: Occurrence to render.

    Returns:
        str: e.g. 'ERROR, 3, 7, app.log, .log, "/var/app.log"'.
    """
    fields: List[str] = [
        word,
        str(finding.line),
        str(finding.column),
        finding.file.name,
        finding.file.extension,
        f"\"{finding.file.full_path}\"",
    ]
    return REPORT_SEPARATOR.join(fields)


def open_report_sink(path: str) -> ReportSink:
    """
    Select the report sink matching the output file extension.

    '.xlsx' produces a workbook; any other extension produces the delimited
    text report.

    Args:
        path: Report destination.

    Returns:
        ReportSink: Sink ready to write().
    """
    ext = os.path.splitext(path)[1].lower()
    if ext in EXCEL_REPORT_EXTENSIONS:
        return ExcelReportSink(path)
    return DelimitedReportSink(path)


def _discard_partial(path: str) -> None:
    """Remove a report left half-written by a failed write."""
    if not os.path.isfile(path):
        return
    try:
        os.remove(path)
    except OSError as e:
        logger.warning(f"Could not remove incomplete report '{path}': {e}")
