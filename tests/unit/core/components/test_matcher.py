from __future__ import annotations

"""
Unit tests for the Line Matching Engine.

Verifies:
1. Column numbering and multi-occurrence scanning.
2. The case-sensitive first hit / case-insensitive continuation behavior.
3. Non-overlapping matches and independent matching of distinct words.
4. Result ordering across lines and words.
"""

from termscout.core.pipeline.components.matcher import find_occurrences, fold_case, scan_lines


def columns(line, word):
    return [i + 1 for i in find_occurrences(line, word)]


def test_fold_case_preserves_length():
    """Characters with multi-character upper forms are left untouched."""
    assert fold_case("straße") == "STRAßE"
    assert len(fold_case("ﬁle straße")) == len("ﬁle straße")
    assert fold_case("abc") == "ABC"


def test_exact_case_first_hit_then_case_insensitive_continuation():
    assert columns("foo Foo FOO", "foo") == [1, 5, 9]


def test_first_hit_requires_exact_case():
    """'Foo' at column 1 is skipped; the continuation then accepts 'FOO'."""
    assert columns("Foo foo FOO", "foo") == [5, 9]


def test_no_exact_case_hit_means_no_match_at_all():
    assert columns("FOO Foo", "foo") == []


def test_multiple_occurrences_on_log_lines():
    assert columns("ERROR at init", "ERROR") == [1]
    assert columns("retry ERROR ERROR", "ERROR") == [7, 13]
    assert columns("no issue", "ERROR") == []


def test_same_word_matches_do_not_overlap():
    assert columns("aaaa", "aa") == [1, 3]
    assert columns("aaa", "aa") == [1]


def test_columns_strictly_increase():
    cols = columns("x.x.x.x.x", "x")
    assert cols == sorted(set(cols))
    assert cols == [1, 3, 5, 7, 9]


def test_empty_word_never_matches():
    assert columns("anything", "") == []


def test_match_at_end_of_line():
    assert columns("ends with key", "key") == [11]


def test_scan_lines_orders_by_line_then_word_then_column():
    lines = ["beta alpha beta", "alpha"]
    results = list(scan_lines(lines, ["alpha", "beta"]))

    assert results == [
        ("alpha", 1, 6),
        ("beta", 1, 1),
        ("beta", 1, 12),
        ("alpha", 2, 1),
    ]


def test_scan_lines_matches_overlapping_distinct_words_independently():
    results = list(scan_lines(["configuration"], ["config", "figur", "ration"]))

    assert results == [
        ("config", 1, 1),
        ("figur", 1, 4),
        ("ration", 1, 8),
    ]


def test_scan_lines_numbers_lines_from_one_and_keeps_blank_lines():
    results = list(scan_lines(["", "", "needle"], ["needle"]))
    assert results == [("needle", 3, 1)]


def test_scan_lines_duplicate_terms_are_scanned_twice():
    results = list(scan_lines(["dup"], ["dup", "dup"]))
    assert results == [("dup", 1, 1), ("dup", 1, 1)]


def test_scan_lines_non_ascii_offsets_stay_aligned():
    """Case folding must not shift offsets on lines with non-ASCII text."""
    line = "Straße Café café CAFÉ"
    results = list(scan_lines([line], ["café"]))

    assert [c for _, _, c in results] == [13, 18]
    assert line[12:16] == "café"
    assert line[17:21] == "CAFÉ"
