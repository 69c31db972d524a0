from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a sample source tree, word list builders and a
   complete scan configuration dictionary.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
from openpyxl import Workbook

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Create a small source tree exercising the default exclusion rules.

    Structure:
    /project
      app.log              -> 'ERROR' twice
      README               -> no extension, 'TODO'
      logo.png             -> excluded extension, contains 'ERROR'
      /src
        main.py            -> 'TODO' and 'ERROR'
      /bin                 -> excluded directory
        out.txt            -> contains 'ERROR'
      /docs
        /Debug             -> excluded directory (case-insensitive)
          trace.txt        -> contains 'ERROR'
    """
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "bin").mkdir()
    (root / "docs" / "Debug").mkdir(parents=True)

    (root / "app.log").write_text("boot ok\nERROR at init\nretry ERROR ERROR\n", encoding="utf-8")
    (root / "README").write_text("TODO: write docs\n", encoding="utf-8")
    (root / "logo.png").write_text("ERROR inside an image\n", encoding="utf-8")
    (root / "src" / "main.py").write_text("# TODO refactor\nraise ERROR\n", encoding="utf-8")
    (root / "bin" / "out.txt").write_text("ERROR in build output\n", encoding="utf-8")
    (root / "docs" / "Debug" / "trace.txt").write_text("ERROR in trace\n", encoding="utf-8")

    return root


@pytest.fixture
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    """
    Return a builder writing an .xlsx word list.

    The builder takes a list of sheets, each a list of rows, each a list of
    cell values.
    """
    def _build(sheets: List[List[List[Any]]], name: str = "words.xlsx") -> Path:
        wb = Workbook()
        wb.remove(wb.active)
        for i, rows in enumerate(sheets, start=1):
            ws = wb.create_sheet(title=f"Sheet{i}")
            for row in rows:
                ws.append(row)
        path = tmp_path / name
        wb.save(path)
        return path

    return _build


@pytest.fixture
def make_csv(tmp_path: Path) -> Callable[..., Path]:
    """Return a builder writing a UTF-8 delimited word list."""
    def _build(text: str, name: str = "words.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _build


@pytest.fixture
def scan_config(tmp_path: Path, sample_tree: Path, make_workbook) -> Dict[str, Any]:
    """
    Return a valid, complete scan configuration dictionary.

    The word list holds a header row followed by 'ERROR', 'TODO' and
    'MISSING' in column A.
    """
    word_list = make_workbook([[["Term"], ["ERROR"], ["TODO"], ["MISSING"]]])
    return {
        "word_list_path": str(word_list),
        "word_column": "A",
        "header_rows": 1,
        "include_dirs": [str(sample_tree)],
        "output_path": str(tmp_path / "out" / "report.csv"),
        "exclude_dirs": [".git", ".vs", "obj", "bin", "wwwroot", "release", "debug"],
        "exclude_extensions": [".png", ".xlsx"],
        "encoding_errors": "strict",
        "error_log_path": "",
    }


def read_report(path: Path) -> List[str]:
    """Read a delimited report into lines, dropping the BOM."""
    return path.read_text(encoding="utf-8-sig").splitlines()


@pytest.fixture
def report_reader() -> Callable[[Path], List[str]]:
    return read_report


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user data directory at an empty temporary home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("LOCALAPPDATA", str(home))
    return home


@pytest.fixture
def make_raw_named_file() -> Callable[[Path, bytes, bytes], str]:
    """
    Return a builder creating a file whose name is raw, possibly non-UTF-8, bytes.

    The builder returns the path as os.walk reports it, i.e. with undecodable
    bytes carried as surrogate escapes. Tests are skipped on filesystems that
    reject such names.
    """
    if sys.platform in ("win32", "darwin") or sys.getfilesystemencoding().lower() != "utf-8":
        pytest.skip("Filesystem does not store arbitrary byte file names.")

    def _build(directory: Path, raw_name: bytes, content: bytes) -> str:
        target = os.path.join(os.fsencode(str(directory)), raw_name)
        try:
            with open(target, "wb") as f:
                f.write(content)
        except OSError as e:
            pytest.skip(f"Filesystem rejects the file name: {e}")
        return os.fsdecode(target)

    return _build
