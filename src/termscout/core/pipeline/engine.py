from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the entire scan workflow:
1. Validates the configuration.
2. Loads the word list from its source.
3. Walks the included directories, scanning each file in turn.
4. Aggregates findings into a FindingsIndex and seals it.
5. Writes the report (skipped on dry runs) and the optional warnings report.

Failures of a single directory or file are recovered where they happen and
surface as warnings. Only a missing word list or an unwritable report fails
the run, in which case the returned result carries ok=False.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from termscout.core.pipeline.components.filters import build_exclusion_policy
from termscout.core.pipeline.stages.validator import require_run_settings, validate_config
from termscout.core.pipeline.stages.worker import scan_file_task
from termscout.core.services.walker import DirectoryWalker, finalize_error_reporting
from termscout.domain.errors import ReportWriteError, WordSourceError
from termscout.domain.scan_models import (
    FindingsIndex,
    ScanResult,
    ScanWarning,
    create_error_result,
    create_success_result,
)
from termscout.infra.report_sinks import ReportSink, open_report_sink
from termscout.infra.word_sources import WordSource, open_word_source

logger = logging.getLogger(__name__)


def run_scan(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
        word_source: Optional[WordSource] = None,
        report_sink: Optional[ReportSink] = None,
) -> ScanResult:
    """
    Execute the full scan pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, scan everything but do not write the report.
        word_source: Override for the word list adapter chosen from config.
        report_sink: Override for the report adapter chosen from config.

    Returns:
        ScanResult: Object containing status, findings, warnings and summary.

    Raises:
        ConfigError: If mandatory settings are missing or malformed.
    """
    started = time.monotonic()
    logger.info("Scan execution started.")

    # -------------------------------------------------------------------------
    # 1) Config Normalization
    # -------------------------------------------------------------------------
    cfg, cfg_warnings = validate_config(config, strict=False)
    for warning in cfg_warnings:
        logger.warning(f"Configuration Warning: {warning}")

    require_run_settings(
        cfg,
        need_word_list=word_source is None,
        need_output=report_sink is None and not dry_run,
    )

    # -------------------------------------------------------------------------
    # 2) Word List
    # -------------------------------------------------------------------------
    try:
        source = word_source or open_word_source(
            cfg["word_list_path"], cfg["word_column"], cfg["header_rows"]
        )
        words = source.load()
    except WordSourceError as e:
        msg = f"Word list failure: {e}"
        logger.error(msg)
        return create_error_result(msg, cfg)

    if not words:
        logger.warning("The word list is empty; no findings can be produced.")

    # -------------------------------------------------------------------------
    # 3) Walk & Scan
    # -------------------------------------------------------------------------
    index, warnings, counters = _scan_directories(cfg, words)

    # -------------------------------------------------------------------------
    # 4) Report
    # -------------------------------------------------------------------------
    summary = _build_summary(words, index, warnings, counters, dry_run, started)

    report_written = False
    if dry_run:
        logger.info("Dry run: skipping report generation.")
    else:
        sink = report_sink or open_report_sink(cfg["output_path"])
        try:
            sink.write(index)
            report_written = True
        except ReportWriteError as e:
            msg = f"Report failure: {e}"
            logger.error(msg)
            return create_error_result(
                msg, cfg, words=words, warnings=warnings, findings=index, summary_extra=summary
            )

    error_log_path = finalize_error_reporting(cfg.get("error_log_path", ""), warnings)

    logger.info(
        f"Scan completed: {summary['findings']} findings for {summary['words_found']} "
        f"of {summary['words_loaded']} words in {summary['files_scanned']} files."
    )
    return create_success_result(
        cfg, words, index, warnings, report_written,
        error_log_path=error_log_path, summary_extra=summary,
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _scan_directories(
        cfg: Dict[str, Any],
        words: Tuple[str, ...],
) -> Tuple[FindingsIndex, List[ScanWarning], Dict[str, int]]:
    """Walk every included directory and fold per-file results into the index."""
    policy = build_exclusion_policy(cfg["exclude_dirs"], cfg["exclude_extensions"])
    walker = DirectoryWalker(cfg["include_dirs"], policy)

    index = FindingsIndex()
    warnings: List[ScanWarning] = []
    seen = 0
    counters = {"files_scanned": 0, "files_failed": 0, "lines_scanned": 0}

    for file_ref in walker.iter_files():
        # Keep traversal and read warnings in the order they happened
        warnings.extend(walker.warnings[seen:])
        seen = len(walker.warnings)

        result = scan_file_task(file_ref, words, encoding_errors=cfg["encoding_errors"])

        if not result["ok"]:
            counters["files_failed"] += 1
            warnings.append(result["warning"])
            continue

        counters["files_scanned"] += 1
        counters["lines_scanned"] += result["lines"]
        for word, finding in result["findings"]:
            index.record(word, finding)

    warnings.extend(walker.warnings[seen:])
    index.finalize()

    counters["files_excluded"] = walker.excluded_files
    counters["dirs_excluded"] = walker.excluded_dirs
    return index, warnings, counters


def _build_summary(
        words: Tuple[str, ...],
        index: FindingsIndex,
        warnings: List[ScanWarning],
        counters: Dict[str, int],
        dry_run: bool,
        started: float,
) -> Dict[str, Any]:
    return {
        "words_loaded": len(words),
        "words_found": len(index),
        "findings": index.total_findings,
        "files_scanned": counters["files_scanned"],
        "files_failed": counters["files_failed"],
        "files_excluded": counters["files_excluded"],
        "dirs_excluded": counters["dirs_excluded"],
        "lines_scanned": counters["lines_scanned"],
        "warnings": len(warnings),
        "dry_run": dry_run,
        "elapsed_seconds": round(time.monotonic() - started, 3),
    }
