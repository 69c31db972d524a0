from __future__ import annotations

"""
Unit tests for the Atomic File Scan Worker.

Verifies that a single file is turned into ordered findings and that read
failures come back as 'read' warnings instead of exceptions.
"""

from pathlib import Path

from termscout.core.pipeline.stages.worker import scan_file_task
from termscout.domain.scan_models import FileRef, Finding


def _ref(path: Path) -> FileRef:
    return FileRef(name=path.name, extension=path.suffix, full_path=str(path))


def test_scan_file_task_collects_findings(tmp_path: Path) -> None:
    target = tmp_path / "app.log"
    target.write_text("boot ok\nERROR at init\nretry ERROR ERROR\n", encoding="utf-8")
    ref = _ref(target)

    result = scan_file_task(ref, ["ERROR", "boot"])

    assert result["ok"] is True
    assert result["warning"] is None
    assert result["lines"] == 3
    assert result["findings"] == [
        ("boot", Finding(file=ref, line=1, column=1)),
        ("ERROR", Finding(file=ref, line=2, column=1)),
        ("ERROR", Finding(file=ref, line=3, column=7)),
        ("ERROR", Finding(file=ref, line=3, column=13)),
    ]


def test_scan_file_task_without_words_finds_nothing(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("ERROR\n", encoding="utf-8")

    result = scan_file_task(_ref(target), [])

    assert result["ok"] is True
    assert result["findings"] == []


def test_undecodable_file_becomes_read_warning(tmp_path: Path) -> None:
    """TC-01: Invalid UTF-8 under the strict policy skips the file."""
    target = tmp_path / "blob.dat"
    target.write_bytes(b"ERROR \xff\xfe\n")

    result = scan_file_task(_ref(target), ["ERROR"])

    assert result["ok"] is False
    assert result["findings"] == []
    assert result["warning"].category == "read"
    assert result["warning"].path == str(target)


def test_undecodable_file_is_scanned_with_replace_policy(tmp_path: Path) -> None:
    target = tmp_path / "blob.dat"
    target.write_bytes(b"ERROR \xff\xfe\n")

    result = scan_file_task(_ref(target), ["ERROR"], encoding_errors="replace")

    assert result["ok"] is True
    assert [(w, f.line, f.column) for w, f in result["findings"]] == [("ERROR", 1, 1)]


def test_vanished_file_becomes_read_warning(tmp_path: Path) -> None:
    ref = _ref(tmp_path / "gone.txt")

    result = scan_file_task(ref, ["ERROR"])

    assert result["ok"] is False
    assert "Cannot read file" in result["warning"].message
