from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema, including help messages,
argument types, and defaults. Provides logic to translate raw argparse
namespaces into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from termscout.domain.constants import ENCODING_ERROR_MODES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the TermScout CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="termscout",
        description="Locate every occurrence of a spreadsheet word list across directory trees.",
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    scan = sub.add_parser(
        "scan",
        help="Scan directories for words taken from a word list column.",
        description=(
            "Search the included directories for the words found in one column of a "
            "word list file and write a report listing the file, line and column of "
            "every occurrence."
        ),
    )

    # --- Mandatory Inputs ---
    required = scan.add_argument_group("required arguments")
    required.add_argument(
        "-w", "--word-list",
        dest="word_list_path",
        required=True,
        metavar="PATH",
        help="Word list file (.xlsx, .xlsm, .csv or .tsv).",
    )
    required.add_argument(
        "-c", "--column",
        dest="word_column",
        required=True,
        metavar="LETTER",
        help="Column letter holding the words (e.g. A).",
    )
    required.add_argument(
        "-r", "--header-rows",
        dest="header_rows",
        required=True,
        type=_non_negative_int,
        metavar="N",
        help="Number of leading rows to skip before words start.",
    )
    required.add_argument(
        "-d", "--include-dir",
        dest="include_dirs",
        required=True,
        action="extend",
        nargs="+",
        metavar="DIR",
        help="Directory to search recursively. Repeat or list several.",
    )
    required.add_argument(
        "-o", "--output",
        dest="output_path",
        required=True,
        metavar="PATH",
        help="Report file to write (.csv text, or .xlsx workbook).",
    )

    # --- Traversal Filters ---
    scan.add_argument(
        "--exclude-dirs",
        dest="exclude_dirs",
        default=None,
        help="Comma-separated directory names to skip, replacing the defaults.",
    )
    scan.add_argument(
        "--exclude-exts",
        dest="exclude_extensions",
        default=None,
        help="Comma-separated file extensions to skip, replacing the defaults.",
    )
    scan.add_argument(
        "--extra-exclude-dirs",
        dest="extra_exclude_dirs",
        default=None,
        help="Comma-separated directory names to skip in addition to the defaults.",
    )
    scan.add_argument(
        "--extra-exclude-exts",
        dest="extra_exclude_extensions",
        default=None,
        help="Comma-separated file extensions to skip in addition to the defaults.",
    )
    scan.add_argument(
        "--encoding-errors",
        dest="encoding_errors",
        choices=ENCODING_ERROR_MODES,
        default=None,
        help="How to treat invalid UTF-8: 'strict' skips the file with a warning, "
             "'replace' scans it with substitution characters.",
    )

    # --- Runtime Behaviour ---
    scan.add_argument(
        "--dry-run",
        action="store_true",
        help="Scan and summarize without writing the report.",
    )
    scan.add_argument(
        "--error-log",
        dest="error_log_path",
        default=None,
        metavar="PATH",
        help="Write traversal and read warnings to this file.",
    )

    # --- Configuration and Diagnostic Tools ---
    scan.add_argument(
        "--config",
        dest="config_path",
        default=None,
        metavar="PATH",
        help="JSON configuration file to load instead of the user default.",
    )
    scan.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore any saved configuration file.",
    )
    scan.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    scan.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON instead of a text summary.",
    )
    scan.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    scan.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        metavar="PATH",
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Keys whose value is None were not given on the command line.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["word_list_path"] = args.word_list_path
    overrides["word_column"] = args.word_column
    overrides["header_rows"] = args.header_rows
    overrides["include_dirs"] = list(args.include_dirs or [])
    overrides["output_path"] = args.output_path
    overrides["error_log_path"] = args.error_log_path
    overrides["encoding_errors"] = args.encoding_errors

    overrides["exclude_dirs"] = _split_csv(args.exclude_dirs)
    overrides["exclude_extensions"] = _split_csv(args.exclude_extensions)
    overrides["extra_exclude_dirs"] = _split_csv(args.extra_exclude_dirs)
    overrides["extra_exclude_extensions"] = _split_csv(args.extra_exclude_extensions)

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or greater, got {number}")
    return number
