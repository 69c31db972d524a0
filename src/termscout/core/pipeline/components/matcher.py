from __future__ import annotations

"""
Line Matching Engine.

Locates every literal occurrence of every search term in a sequence of
lines. Matching is plain substring search with one deliberate quirk kept
for report compatibility: within a line, the first occurrence of a term is
found case-sensitively, while the continuation scan for further occurrences
of that term on the same line ignores case.
"""

from typing import Iterable, Iterator, Optional, Sequence, Tuple

# -----------------------------------------------------------------------------
# CASE FOLDING
# -----------------------------------------------------------------------------

def fold_case(text: str) -> str:
    """
    Upper-case a string character by character, preserving its length.

    Characters whose upper-case form expands to several code points (such as
    'ß') are kept as-is, so every offset in the folded string maps to the
    same offset in the original.

    Args:
        text: Input string.

    Returns:
        str: Folded string of identical length.
    """
    if text.isascii():
        return text.upper()

    out = []
    for ch in text:
        up = ch.upper()
        out.append(up if len(up) == 1 else ch)
    return "".join(out)

# -----------------------------------------------------------------------------
# MATCHING
# -----------------------------------------------------------------------------

def find_occurrences(line: str, word: str, folded_line: Optional[str] = None) -> Iterator[int]:
    """
    Yield the 0-based start offset of each occurrence of word in line.

    The first hit uses case-sensitive comparison. Each following hit is
    searched case-insensitively, starting right after the end of the
    previous one, so occurrences never overlap.

    Args:
        line: Line content without terminator.
        word: Search term. Empty terms never match.
        folded_line: Pre-computed fold_case(line), if the caller has one.

    Yields:
        int: Strictly increasing match offsets.
    """
    if not word:
        return

    index = line.find(word)
    if index == -1:
        return

    folded_word = fold_case(word)
    haystack = folded_line if folded_line is not None else fold_case(line)
    step = len(word)

    while index != -1:
        yield index
        index = haystack.find(folded_word, index + step)


def scan_lines(lines: Iterable[str], words: Sequence[str]) -> Iterator[Tuple[str, int, int]]:
    """
    Scan lines for all search terms.

    Results are ordered by line, then by position of the term in the word
    list, then by column.

    Args:
        lines: Line contents in file order.
        words: Search terms in word-list order.

    Yields:
        Tuple[str, int, int]: (word, 1-based line number, 1-based column).
    """
    for line_number, line in enumerate(lines, start=1):
        folded: Optional[str] = None
        for word in words:
            if not word or word not in line:
                continue

            # Fold lazily, once per line, for all terms present on it
            if folded is None:
                folded = fold_case(line)

            for index in find_occurrences(line, word, folded_line=folded):
                yield word, line_number, index + 1
