from __future__ import annotations

"""
Integration tests for the scan pipeline.

Runs run_scan() against real directory trees and word lists and verifies
the findings index, the written report, warnings and failure modes.
"""

import os
from pathlib import Path
from typing import List, Tuple

import pytest

from termscout.core.pipeline.engine import run_scan
from termscout.domain.errors import ConfigError, ReportWriteError
from termscout.domain.scan_models import FindingsIndex
from termscout.infra.report_sinks import ReportSink
from termscout.infra.word_sources import WordSource


class _StaticWords(WordSource):
    """In-memory word source for pipeline tests."""

    def __init__(self, words: List[str]) -> None:
        super().__init__("<memory>", "A", 0)
        self._words = tuple(words)

    def load(self) -> Tuple[str, ...]:
        return self._words

    def _iter_column(self, col_idx: int):
        return iter(self._words)


class _CollectingSink(ReportSink):
    def __init__(self) -> None:
        super().__init__("<memory>")
        self.rows = []

    def write(self, index: FindingsIndex) -> int:
        self.rows = list(index.rows())
        return len(self.rows)

    def _write(self, index: FindingsIndex) -> int:
        return 0


class _FailingSink(ReportSink):
    def __init__(self) -> None:
        super().__init__("<memory>")

    def write(self, index: FindingsIndex) -> int:
        raise ReportWriteError("disk full")

    def _write(self, index: FindingsIndex) -> int:
        return 0


def _flat(index: FindingsIndex):
    return [(w, f.file.name, f.line, f.column) for w, f in index.rows()]


def test_sample_tree_scan(scan_config, report_reader) -> None:
    result = run_scan(scan_config)

    assert result.ok, result.error
    assert result.report_written
    assert result.words == ("ERROR", "TODO", "MISSING")
    assert result.findings.is_final
    assert result.findings.words() == ["TODO", "ERROR"]
    assert "MISSING" not in result.findings
    assert _flat(result.findings) == [
        ("TODO", "README", 1, 1),
        ("TODO", "main.py", 1, 3),
        ("ERROR", "app.log", 2, 1),
        ("ERROR", "app.log", 3, 7),
        ("ERROR", "app.log", 3, 13),
        ("ERROR", "main.py", 2, 7),
    ]

    summary = result.summary
    assert summary["words_loaded"] == 3
    assert summary["words_found"] == 2
    assert summary["findings"] == 6
    assert summary["files_scanned"] == 3
    assert summary["files_excluded"] == 1
    assert summary["dirs_excluded"] == 2
    assert summary["warnings"] == 0

    lines = report_reader(Path(scan_config["output_path"]))
    assert len(lines) == 7
    log_path = os.path.join(scan_config["include_dirs"][0], "app.log")
    assert lines[4] == f'ERROR, 3, 7, app.log, .log, "{log_path}"'


def test_round_trip_single_file(tmp_path: Path) -> None:
    root = tmp_path / "a"
    root.mkdir()
    (root / "app.log").write_text("boot ok\nERROR at init\nretry ERROR ERROR\n", encoding="utf-8")
    sink = _CollectingSink()

    result = run_scan(
        {"include_dirs": [str(root)]},
        word_source=_StaticWords(["ERROR"]),
        report_sink=sink,
    )

    assert result.ok
    assert [(f.line, f.column) for _, f in sink.rows] == [(2, 1), (3, 7), (3, 13)]
    assert sink.rows[0][1].file.extension == ".log"


def test_excluded_directory_contributes_nothing(tmp_path: Path) -> None:
    root = tmp_path / "tree"
    (root / "Bin").mkdir(parents=True)
    (root / "Bin" / "x.txt").write_text("secret\n", encoding="utf-8")
    sink = _CollectingSink()

    result = run_scan(
        {"include_dirs": [str(root)], "exclude_dirs": ["bin"]},
        word_source=_StaticWords(["secret"]),
        report_sink=sink,
    )

    assert result.ok
    assert sink.rows == []
    assert len(result.findings) == 0


def test_missing_root_is_a_warning_not_a_failure(tmp_path: Path) -> None:
    good = tmp_path / "good"
    good.mkdir()
    (good / "f.txt").write_text("needle\n", encoding="utf-8")
    sink = _CollectingSink()

    result = run_scan(
        {"include_dirs": [str(tmp_path / "nope"), str(good)]},
        word_source=_StaticWords(["needle"]),
        report_sink=sink,
    )

    assert result.ok
    assert len(sink.rows) == 1
    assert [w.category for w in result.warnings] == ["traversal"]


def test_unreadable_file_is_skipped_and_reported(tmp_path: Path) -> None:
    root = tmp_path / "mixed"
    root.mkdir()
    (root / "bad.bin").write_bytes(b"needle \xff\xfe\n")
    (root / "good.txt").write_text("needle\n", encoding="utf-8")
    error_log = tmp_path / "warnings.txt"

    result = run_scan(
        {"include_dirs": [str(root)], "error_log_path": str(error_log)},
        word_source=_StaticWords(["needle"]),
        report_sink=_CollectingSink(),
    )

    assert result.ok
    assert result.summary["files_failed"] == 1
    assert result.summary["files_scanned"] == 1
    assert [w.category for w in result.warnings] == ["read"]
    assert result.error_log_path == str(error_log)
    assert "bad.bin" in error_log.read_text(encoding="utf-8")


def test_empty_word_list_produces_header_only_report(tmp_path: Path, sample_tree: Path, make_csv, report_reader) -> None:
    words = make_csv("Term\n")
    output = tmp_path / "report.csv"

    result = run_scan({
        "word_list_path": str(words),
        "include_dirs": [str(sample_tree)],
        "output_path": str(output),
    })

    assert result.ok
    assert result.words == ()
    assert len(report_reader(output)) == 1


def test_missing_word_list_fails_without_report(scan_config, tmp_path: Path) -> None:
    scan_config["word_list_path"] = str(tmp_path / "absent.xlsx")

    result = run_scan(scan_config)

    assert not result.ok
    assert result.error.startswith("Word list failure")
    assert not Path(scan_config["output_path"]).exists()


def test_report_failure_is_reported(tmp_path: Path) -> None:
    (tmp_path / "f.txt").write_text("needle\n", encoding="utf-8")

    result = run_scan(
        {"include_dirs": [str(tmp_path)]},
        word_source=_StaticWords(["needle"]),
        report_sink=_FailingSink(),
    )

    assert not result.ok
    assert "disk full" in result.error
    assert result.findings.total_findings == 1


def test_dry_run_skips_report(scan_config) -> None:
    result = run_scan(scan_config, dry_run=True)

    assert result.ok
    assert not result.report_written
    assert result.summary["dry_run"] is True
    assert result.summary["findings"] == 6
    assert not Path(scan_config["output_path"]).exists()


def test_incomplete_config_raises() -> None:
    with pytest.raises(ConfigError):
        run_scan({"word_list_path": "words.xlsx"})


def test_undecodable_file_name_is_written_to_report(tmp_path: Path, make_raw_named_file) -> None:
    """TC-01: A non-UTF-8 file name does not abort the report."""
    root = tmp_path / "names"
    root.mkdir()
    make_raw_named_file(root, b"caf\xe9.txt", b"needle\n")
    (root / "plain.txt").write_text("needle\n", encoding="utf-8")
    output = tmp_path / "report.csv"

    result = run_scan(
        {"include_dirs": [str(root)], "output_path": str(output)},
        word_source=_StaticWords(["needle"]),
    )

    assert result.ok, result.error
    assert result.report_written
    raw = output.read_bytes()
    assert b"needle, 1, 1, caf\xe9.txt, .txt, " in raw
    assert b"plain.txt" in raw


def test_undecodable_file_name_is_written_to_error_log(tmp_path: Path, make_raw_named_file) -> None:
    """TC-02: The warnings report keeps working when a failing file has an odd name."""
    root = tmp_path / "names"
    root.mkdir()
    make_raw_named_file(root, b"bad\xe9.bin", b"needle \xff\xfe\n")
    error_log = tmp_path / "warnings.txt"

    result = run_scan(
        {"include_dirs": [str(root)], "error_log_path": str(error_log)},
        dry_run=True,
        word_source=_StaticWords(["needle"]),
    )

    assert result.ok, result.error
    assert result.error_log_path == str(error_log)
    assert b"bad\xe9.bin" in error_log.read_bytes()
