from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Aggregate result models: dataset statistics, batch autofix report, run result."""

__all__ = [
    "DatasetStats",
    "AutofixReport",
    "RunResult",
]


@dataclass(frozen=True)
class DatasetStats:
    """Counts shown to the operator for the current dataset.

    ``valid``, ``invalid`` and ``warnings`` count rows by status. ``duplicates``
    counts repeated occurrences of identical phone text (every row after the
    first with that text), regardless of status.
    """
    total: int
    valid: int
    invalid: int
    duplicates: int
    warnings: int


@dataclass(frozen=True)
class AutofixReport:
    """Outcome of a batch autofix pass."""
    attempted: int  # rows that were INVALID when the pass started
    fixed: int  # of those, rows that validate after autofix


@dataclass(frozen=True)
class RunResult:
    """Everything the CLI needs to print the SUMMARY line."""
    stats: DatasetStats
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    autofix: AutofixReport | None = None
    exported_rows: int = 0
    suggestions: int = 0
