from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants: the default
exclusion lists applied while walking, report layout and supported
word-list/report formats.
"""

from typing import List, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# TRAVERSAL EXCLUSIONS
# -----------------------------------------------------------------------------

# Build output, IDE state and VCS metadata that never hold audited text.
DEFAULT_EXCLUDED_DIRS: List[str] = [
    ".git",
    ".vs",
    "obj",
    "bin",
    "wwwroot",
    "release",
    "debug",
]

# Binary, media and office formats that cannot be scanned line by line.
DEFAULT_EXCLUDED_EXTENSIONS: List[str] = [
    ".docx",
    ".gitignore",
    ".ico",
    ".resx",
    ".xlsx",
    ".mp3",
    ".mp4",
    ".mov",
    ".gif",
    ".ttf",
    ".woff",
    ".woff2",
    ".xsd",
    ".png",
    ".bmp",
    ".jpeg",
    ".jpg",
    ".zip",
    ".rar",
    ".7z",
    ".db",
    ".dll",
    ".obj",
    ".exe",
    ".svg",
    ".so",
    ".pdf",
]

# -----------------------------------------------------------------------------
# REPORT LAYOUT
# -----------------------------------------------------------------------------

REPORT_COLUMNS: Tuple[str, ...] = (
    "Word",
    "Line Number",
    "Line Row",
    "File Name",
    "File Extension",
    "File Full Path",
)
REPORT_SEPARATOR = ", "
REPORT_SHEET_TITLE = "Findings"

# -----------------------------------------------------------------------------
# SUPPORTED FORMATS
# -----------------------------------------------------------------------------

EXCEL_WORD_LIST_EXTENSIONS: Tuple[str, ...] = (".xlsx", ".xlsm")
DELIMITED_WORD_LIST_EXTENSIONS: Tuple[str, ...] = (".csv", ".tsv")
EXCEL_REPORT_EXTENSIONS: Tuple[str, ...] = (".xlsx",)

ENCODING_ERROR_MODES: Tuple[str, ...] = ("strict", "replace")
