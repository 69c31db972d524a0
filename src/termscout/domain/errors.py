from __future__ import annotations

"""
Domain Exception Hierarchy.

Fatal conditions that make a whole scan meaningless are raised as exceptions
derived from TermScoutError. Recoverable, per-item problems are never raised
across the walk; they travel as ScanWarning values instead.
"""


class TermScoutError(Exception):
    """Base class for all application-level failures."""


class ConfigError(TermScoutError):
    """The run configuration is incomplete or inconsistent."""


class WordSourceError(TermScoutError):
    """The word list could not be opened, parsed or is in an unsupported format."""


class ReportWriteError(TermScoutError):
    """The findings report could not be persisted."""


class FindingsFinalizedError(TermScoutError):
    """A finding was recorded after the index was sealed for reporting."""
