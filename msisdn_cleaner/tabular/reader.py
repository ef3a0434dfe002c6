from __future__ import annotations

import zipfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..exceptions import SourceFileError

"""Source file reader.

Reads a CSV or ``.xlsx`` file into a list of records (column name -> cell text).
The first row is the header. Every cell is read as text so phone numbers keep
their leading zeros, and blank cells stay ``""`` rather than NaN.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "SourceTable",
    "read_table",
    "read_records",
    "extract_field",
]

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


@dataclass
class SourceTable:
    name: str
    columns: list[str]
    rows: list[dict[str, Any]]


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    # openpyxl engine (pandas default for .xlsx)
    return pd.read_excel(path, dtype=str, keep_default_na=False)


def read_table(path: Path) -> SourceTable:
    """Parse a source file.

    Empty CSV lines and empty sheet rows are skipped; a delimiter-only line such
    as ``,`` is kept as a record of blank cells. Column names are stripped of surrounding
    whitespace; cell values are kept as read.

    Raises:
        SourceFileError: missing file, unsupported extension, or any parse failure
    """
    if not path.exists():
        raise SourceFileError(f"file not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise SourceFileError(
            f"unsupported file type '{path.suffix}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )

    try:
        df = _read_frame(path)
    except pd.errors.EmptyDataError as e:
        raise SourceFileError(f"{path.name}: file is empty") from e
    except zipfile.BadZipFile as e:
        raise SourceFileError(f"{path.name}: not a valid .xlsx workbook ({e})") from e
    except (
        pd.errors.ParserError,
        pd.errors.OptionError,
        UnicodeDecodeError,
        ValueError,
        KeyError,
        OSError,
    ) as e:
        raise SourceFileError(f"{path.name}: {e}") from e

    columns = [str(c).strip() for c in df.columns]
    df.columns = columns
    df = df.fillna("")

    rows: list[dict[str, Any]] = df.to_dict(orient="records")
    if path.suffix.lower() == ".xlsx":
        # empty sheet rows; CSV empty lines are already skipped by read_csv
        rows = [r for r in rows if any(str(v) != "" for v in r.values())]

    return SourceTable(name=path.name, columns=columns, rows=rows)


def read_records(path: Path) -> list[dict[str, Any]]:
    """Parse a source file and return only its records."""
    return read_table(path).rows


def extract_field(record: Mapping[str, Any], aliases: Iterable[str]) -> str:
    """Return the first non-empty value among ``aliases``, or ``""``.

    Aliases are probed in order; missing values and ``""`` are skipped, while
    whitespace-only text counts as a value.
    """
    for key in aliases:
        value = record.get(key)
        if value is None:
            continue
        text = str(value)
        if text != "":
            return text
    return ""
