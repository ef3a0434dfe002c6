from __future__ import annotations

"""Exception hierarchy for the phone list cleaner.

The phone engine itself never raises on bad input; these cover the I/O and
addressing boundaries around it.
"""

__all__ = [
    "CleanerError",
    "SourceFileError",
    "ExportError",
    "RowNotFoundError",
]


class CleanerError(Exception):
    """Base exception for all package errors."""


class SourceFileError(CleanerError):
    """Raised when the source file cannot be read or parsed."""


class ExportError(CleanerError):
    """Raised when an export is refused (e.g. no valid rows to write)."""


class RowNotFoundError(CleanerError, KeyError):
    """Raised when a row id does not address any row in the dataset."""

    def __str__(self) -> str:  # KeyError quotes its message otherwise
        return str(self.args[0]) if self.args else ""
