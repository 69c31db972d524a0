from __future__ import annotations

"""
Word List Sources.

Adapters that read the search vocabulary from tabular files. Every source
walks one designated column top to bottom, skips the configured number of
header rows and keeps only textual, non-blank cells, in row order.

Supported formats:
- Excel workbooks (.xlsx, .xlsm) through openpyxl; all worksheets are read
  in workbook order as one continuous row stream.
- Delimited text (.csv, .tsv) through the standard csv module.
"""

import csv
import logging
import os
import zipfile
from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Tuple

from openpyxl import load_workbook
from openpyxl.utils.cell import column_index_from_string
from openpyxl.utils.exceptions import InvalidFileException

from termscout.domain.constants import (
    DELIMITED_WORD_LIST_EXTENSIONS,
    EXCEL_WORD_LIST_EXTENSIONS,
)
from termscout.domain.errors import WordSourceError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PORT
# -----------------------------------------------------------------------------

class WordSource(ABC):
    """
    Abstract provider of the ordered search vocabulary.

    Attributes:
        path: Location of the tabular file.
        column: Spreadsheet column letter holding the words ('A', 'B', 'AA').
        header_rows: Number of leading rows to skip.
    """

    def __init__(self, path: str, column: str, header_rows: int) -> None:
        self.path = path
        self.column = column.upper()
        self.header_rows = header_rows

    def load(self) -> Tuple[str, ...]:
        """
        Read the vocabulary.

        Returns:
            Tuple[str, ...]: Search terms in row order, duplicates preserved.

        Raises:
            WordSourceError: If the source cannot be opened or parsed.
        """
        if not os.path.isfile(self.path):
            raise WordSourceError(f"Word list not found: {self.path}")

        try:
            col_idx = column_index_from_string(self.column)
        except ValueError as e:
            raise WordSourceError(f"Invalid word column '{self.column}': {e}") from e

        words: List[str] = []
        for row_number, value in enumerate(self._iter_column(col_idx), start=1):
            # Offset rows with header_rows
            if row_number <= self.header_rows:
                continue
            if not _is_text(value):
                continue
            logger.debug(f"Row {row_number}: loaded '{value}'")
            words.append(value)

        logger.info(f"Loaded {len(words)} words from {self.path} (column {self.column}).")
        return tuple(words)

    @abstractmethod
    def _iter_column(self, col_idx: int) -> Iterator[Any]:
        """
        Yield the raw value of the given 1-based column for every row.

        Rows too short to reach the column must still be yielded (as None)
        so that row numbering stays aligned.
        """


# -----------------------------------------------------------------------------
# ADAPTERS
# -----------------------------------------------------------------------------

class ExcelWordSource(WordSource):
    """Reads words from an Excel workbook using openpyxl in read-only mode."""

    def _iter_column(self, col_idx: int) -> Iterator[Any]:
        try:
            wb = load_workbook(self.path, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise WordSourceError(f"Cannot open workbook '{self.path}': {e}") from e

        try:
            for ws in wb.worksheets:
                for row in ws.iter_rows(min_col=col_idx, max_col=col_idx, values_only=True):
                    yield row[0] if row else None
        finally:
            wb.close()


class DelimitedWordSource(WordSource):
    """Reads words from a comma- or tab-separated UTF-8 text file."""

    def __init__(self, path: str, column: str, header_rows: int, delimiter: str = ",") -> None:
        super().__init__(path, column, header_rows)
        self.delimiter = delimiter

    def _iter_column(self, col_idx: int) -> Iterator[Any]:
        try:
            with open(self.path, "r", encoding="utf-8-sig", newline="") as f:
                for row in csv.reader(f, delimiter=self.delimiter):
                    yield row[col_idx - 1] if len(row) >= col_idx else None
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise WordSourceError(f"Cannot read word list '{self.path}': {e}") from e


# -----------------------------------------------------------------------------
# FACTORY
# -----------------------------------------------------------------------------

def open_word_source(path: str, column: str, header_rows: int) -> WordSource:
    """
    Select the word source adapter matching the file extension.

    Args:
        path: Word list file.
        column: Column letter holding the words.
        header_rows: Leading rows to skip.

    Returns:
        WordSource: Adapter ready to load().

    Raises:
        WordSourceError: If the extension is not supported.
    """
    ext = os.path.splitext(path)[1].lower()

    if ext in EXCEL_WORD_LIST_EXTENSIONS:
        return ExcelWordSource(path, column, header_rows)
    if ext in DELIMITED_WORD_LIST_EXTENSIONS:
        delimiter = "\t" if ext == ".tsv" else ","
        return DelimitedWordSource(path, column, header_rows, delimiter=delimiter)

    supported = ", ".join(EXCEL_WORD_LIST_EXTENSIONS + DELIMITED_WORD_LIST_EXTENSIONS)
    raise WordSourceError(f"Unsupported word list format '{ext or path}'. Supported: {supported}.")


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
