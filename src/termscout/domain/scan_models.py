from __future__ import annotations

"""
Scan Domain Data Models.

Defines the immutable value objects produced while walking and scanning
(file references, findings, warnings), the word-keyed aggregation root
consumed by report sinks, and the result object returned to interface layers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from termscout.domain.errors import FindingsFinalizedError

# -----------------------------------------------------------------------------
# VALUE OBJECTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileRef:
    """
    Resolved reference to a file discovered by the walker.

    Attributes:
        name: Base name of the file.
        extension: Extension token including the leading dot ('' if none).
        full_path: Absolute filesystem path.
    """
    name: str
    extension: str
    full_path: str


@dataclass(frozen=True)
class Finding:
    """
    One matched occurrence of a search term.

    Attributes:
        file: File in which the term occurs.
        line: 1-based line number.
        column: 1-based character column of the match start.
    """
    file: FileRef
    line: int
    column: int


@dataclass(frozen=True)
class ScanWarning:
    """
    Recoverable problem encountered during the walk.

    Attributes:
        path: Directory or file path the problem relates to.
        category: 'traversal' for directory problems, 'read' for file problems.
        message: Human readable description.
    """
    path: str
    category: str
    message: str


# -----------------------------------------------------------------------------
# AGGREGATION
# -----------------------------------------------------------------------------

@dataclass
class WordFindings:
    """All findings of one exact search term, in discovery order."""
    word: str
    findings: List[Finding] = field(default_factory=list)


class FindingsIndex:
    """
    Word-keyed, insertion-ordered collection of WordFindings.

    The index accumulates findings while the walk is running and is sealed
    with finalize() once it completes. A sealed index is read-only.
    """

    def __init__(self) -> None:
        self._entries: List[WordFindings] = []
        self._by_word: Dict[str, WordFindings] = {}
        self._final = False

    def record(self, word: str, finding: Finding) -> None:
        """
        Append a finding to the bucket of its word.

        The bucket is created at the end of the index the first time a word
        is seen, so entries keep first-seen order.

        Raises:
            FindingsFinalizedError: If the index has already been finalized.
        """
        if self._final:
            raise FindingsFinalizedError(
                f"Cannot record '{word}': findings index is finalized."
            )

        entry = self._by_word.get(word)
        if entry is None:
            entry = WordFindings(word=word)
            self._by_word[word] = entry
            self._entries.append(entry)

        entry.findings.append(finding)

    def finalize(self) -> None:
        """Seal the index; further record() calls raise."""
        self._final = True

    @property
    def is_final(self) -> bool:
        return self._final

    @property
    def total_findings(self) -> int:
        return sum(len(e.findings) for e in self._entries)

    def words(self) -> List[str]:
        return [e.word for e in self._entries]

    def get(self, word: str) -> Optional[WordFindings]:
        return self._by_word.get(word)

    def rows(self) -> Iterator[Tuple[str, Finding]]:
        """Flatten the index into (word, finding) pairs in report order."""
        for entry in self._entries:
            for finding in entry.findings:
                yield entry.word, finding

    def __iter__(self) -> Iterator[WordFindings]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return word in self._by_word


# -----------------------------------------------------------------------------
# RUN RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanResult:
    """
    Unified result object of a complete scan execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        word_list_path: Word list the terms were loaded from.
        include_dirs: Root directories that were requested.
        output_path: Report destination.
        report_written: Whether the report file was produced.
        words: Search terms loaded for the run.
        findings: Final findings index (None when the run aborted early).
        warnings: Recoverable problems collected during the walk.
        error_log_path: Path of the persisted warnings report, if any.
        summary: Execution statistics.
    """
    ok: bool
    error: str

    word_list_path: str
    include_dirs: List[str]
    output_path: str
    report_written: bool = False

    words: Tuple[str, ...] = ()
    findings: Optional[FindingsIndex] = None
    warnings: List[ScanWarning] = field(default_factory=list)
    error_log_path: str = ""

    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Render the result as JSON-compatible data."""
        return {
            "ok": self.ok,
            "error": self.error,
            "word_list_path": self.word_list_path,
            "include_dirs": list(self.include_dirs),
            "output_path": self.output_path,
            "report_written": self.report_written,
            "error_log_path": self.error_log_path,
            "warnings": [
                {"path": w.path, "category": w.category, "message": w.message}
                for w in self.warnings
            ],
            "summary": dict(self.summary),
        }


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        words: Tuple[str, ...] = (),
        warnings: Optional[List[ScanWarning]] = None,
        findings: Optional[FindingsIndex] = None,
        summary_extra: Optional[Dict[str, Any]] = None
) -> ScanResult:
    """
    Create a failed scan result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        words: Terms loaded before the failure, if any.
        warnings: Warnings collected before the failure.
        findings: Findings computed before the failure.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        ScanResult: An immutable error result object.
    """
    return ScanResult(
        ok=False,
        error=error,
        word_list_path=cfg.get("word_list_path", ""),
        include_dirs=list(cfg.get("include_dirs", [])),
        output_path=cfg.get("output_path", ""),
        words=words,
        findings=findings,
        warnings=warnings or [],
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        words: Tuple[str, ...],
        findings: FindingsIndex,
        warnings: List[ScanWarning],
        report_written: bool,
        error_log_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> ScanResult:
    """
    Create a successful scan result instance.

    Args:
        cfg: Final configuration used during execution.
        words: Terms that were searched for.
        findings: Finalized findings index.
        warnings: Recoverable problems encountered during the walk.
        report_written: Whether the report was persisted (False on dry runs).
        error_log_path: Path to the warnings report, if one was saved.
        summary_extra: Final execution metrics.

    Returns:
        ScanResult: An immutable success result object.
    """
    return ScanResult(
        ok=True,
        error="",
        word_list_path=cfg.get("word_list_path", ""),
        include_dirs=list(cfg.get("include_dirs", [])),
        output_path=cfg.get("output_path", ""),
        report_written=report_written,
        words=words,
        findings=findings,
        warnings=list(warnings),
        error_log_path=error_log_path,
        summary=summary_extra or {},
    )
