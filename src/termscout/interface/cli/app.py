from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, JSON config file and CLI
overrides), scan execution, and result rendering.

Exit codes: 0 success, 1 fatal run failure (word list or report),
2 usage/configuration error, 130 interrupted.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from termscout.core.pipeline.engine import run_scan
from termscout.core.pipeline.stages.validator import require_run_settings, validate_config
from termscout.domain.config import get_default_config, load_config
from termscout.domain.errors import ConfigError
from termscout.domain.scan_models import ScanResult
from termscout.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from termscout.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    encoding = "utf-8" if sys.platform == "win32" else None
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            # Paths holding undecodable bytes are echoed escaped
            stream.reconfigure(encoding=encoding, errors="backslashreplace")

    # 1. Argument parsing phase (argparse exits with 2 on usage errors)
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    # 2. Logging bootstrap
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    try:
        return _run_scan_command(args)
    finally:
        shutdown_logging()


def _run_scan_command(args: Any) -> int:
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (Defaults vs config file)
    try:
        base_conf = get_default_config() if args.use_defaults else load_config(args.config_path)
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    try:
        require_run_settings(clean_conf)
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 6. Scan execution phase
    try:
        result = run_scan(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        msg = "Scan interrupted by user."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except Exception as e:
        msg = f"Scan failed unexpectedly: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    # 7. Output rendering phase
    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged. 'extra_*' exclusion lists extend the
    effective exclusion lists instead of replacing them.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "word_list_path", "word_column", "header_rows", "include_dirs",
        "output_path", "error_log_path", "encoding_errors",
        "exclude_dirs", "exclude_extensions",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]

    extra_map = {
        "extra_exclude_dirs": "exclude_dirs",
        "extra_exclude_extensions": "exclude_extensions",
    }
    for extra_key, target in extra_map.items():
        extra = overrides.get(extra_key)
        if extra:
            out[target] = list(out.get(target) or []) + list(extra)

    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: ScanResult) -> None:
    """
    Format and print the execution result to the standard output.

    Args:
        result: The scan result to render.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    print("SCAN COMPLETE")

    if summary.get("dry_run"):
        print(f"Dry run: report not written (target: {result.output_path})")
    elif result.report_written:
        print(f"Report: {result.output_path}")

    stats_keys = {
        "words_loaded": "Words loaded",
        "words_found": "Words found",
        "findings": "Findings",
        "files_scanned": "Files scanned",
        "files_excluded": "Files excluded",
        "files_failed": "Files unreadable",
        "warnings": "Warnings",
    }
    for key, label in stats_keys.items():
        if key in summary:
            print(f"{label}: {summary[key]}")

    if result.error_log_path:
        print(f"Warnings report: {result.error_log_path}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
