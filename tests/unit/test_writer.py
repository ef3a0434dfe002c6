from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from msisdn_cleaner.exceptions import ExportError
from msisdn_cleaner.models.row import Carrier, Row, RowStatus
from msisdn_cleaner.tabular.writer import EXPORT_COLUMNS, default_export_path, export_valid_rows


def _row(row_id: str, phone: str, status: RowStatus, carrier: Carrier = Carrier.SAFARICOM) -> Row:
    return Row(
        row_id=row_id,
        phone_number=phone,
        bundle_size="5",
        carrier=carrier,
        status=status,
        original_data={"name": "ignored"},
    )


def test_export_writes_only_valid_rows(temp_workdir: Path):
    rows = [
        _row("row-0", "+254712345678", RowStatus.VALID),
        _row("row-1", "+254712345678", RowStatus.DUPLICATE),
        _row("row-2", "12345", RowStatus.INVALID, Carrier.UNKNOWN),
        _row("row-3", "+254733123456", RowStatus.VALID, Carrier.AIRTEL),
    ]
    out = temp_workdir / "out" / "cleaned.csv"
    written = export_valid_rows(rows, out)
    assert written == 2

    df = pd.read_csv(out, dtype=str)
    assert list(df.columns) == EXPORT_COLUMNS
    assert df["phoneNumber"].tolist() == ["+254712345678", "+254733123456"]
    assert df["telco"].tolist() == ["Safaricom", "Airtel"]
    assert df["bundleSize"].tolist() == ["5", "5"]


def test_export_refuses_empty_candidate_set(temp_workdir: Path):
    out = temp_workdir / "cleaned.csv"
    with pytest.raises(ExportError, match="No valid data to export"):
        export_valid_rows([_row("row-0", "12345", RowStatus.INVALID)], out)
    assert not out.exists()

    with pytest.raises(ExportError):
        export_valid_rows([], out)


def test_default_export_path():
    assert default_export_path("customers.csv") == Path("cleaned_customers.csv")
    assert default_export_path("book.xlsx") == Path("cleaned_book.csv")
    assert default_export_path(None) == Path("cleaned_data.csv")
    assert default_export_path("c.csv", Path("out")) == Path("out") / "cleaned_c.csv"
