from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..exceptions import ExportError
from ..models.row import Row, RowStatus

"""Export of cleaned rows.

Writes only VALID rows of the (already view-filtered) sequence given, with the
fixed header ``phoneNumber,bundleSize,telco``.
"""

__all__ = [
    "EXPORT_COLUMNS",
    "EXPORT_PREFIX",
    "default_export_path",
    "export_valid_rows",
]

EXPORT_COLUMNS = ["phoneNumber", "bundleSize", "telco"]
EXPORT_PREFIX = "cleaned_"


def default_export_path(source_name: str | None, directory: Path | None = None) -> Path:
    """``cleaned_<source name>``, always with a ``.csv`` suffix."""
    name = source_name or "data.csv"
    stem = Path(name)
    if stem.suffix.lower() != ".csv":
        stem = stem.with_suffix(".csv")
    base = directory if directory is not None else Path(".")
    return base / f"{EXPORT_PREFIX}{stem.name}"


def export_valid_rows(rows: Sequence[Row], path: Path) -> int:
    """Write VALID rows to ``path`` as CSV.

    Returns:
        Number of rows written

    Raises:
        ExportError: when no row is VALID (no file is written)
    """
    candidates = [r for r in rows if r.status is RowStatus.VALID]
    if not candidates:
        raise ExportError("No valid data to export")

    frame = pd.DataFrame(
        [
            {
                "phoneNumber": r.phone_number,
                "bundleSize": r.bundle_size,
                "telco": r.carrier.value,
            }
            for r in candidates
        ],
        columns=EXPORT_COLUMNS,
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False)
    return len(candidates)
