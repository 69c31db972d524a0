from __future__ import annotations

"""
File Reading Component.

Loads a file as a list of lines using universal newline handling. The file
is opened, read completely and closed before the caller sees any line, so a
decoding failure half-way through never produces partial results.
"""

from typing import List

# -----------------------------------------------------------------------------
# READ OPERATIONS
# -----------------------------------------------------------------------------

def read_text_lines(file_path: str, errors: str = "strict") -> List[str]:
    """
    Read a UTF-8 text file into a list of lines without line terminators.

    '\\n', '\\r\\n' and '\\r' are all recognized as line boundaries. A
    UTF-8 byte order mark at the start of the file is dropped.

    Args:
        file_path: Absolute path to the target file.
        errors: Decoder error policy ('strict' raises, 'replace' substitutes
                U+FFFD for undecodable bytes).

    Returns:
        List[str]: The lines of the file.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the content is not valid UTF-8 under 'strict'.
    """
    with open(file_path, "r", encoding="utf-8-sig", errors=errors, newline=None) as f:
        content = f.read()

    if not content:
        return []

    lines = content.split("\n")
    # A terminating newline does not open an extra empty line
    if lines[-1] == "":
        lines.pop()
    return lines
