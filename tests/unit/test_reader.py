from __future__ import annotations

import zipfile
from pathlib import Path

import pandas as pd
import pytest

from msisdn_cleaner.exceptions import SourceFileError
from msisdn_cleaner.tabular.reader import extract_field, read_records, read_table


def test_read_csv_keeps_text_and_leading_zeros(write_csv):
    path = write_csv("c.csv", "phoneNumber,bundleSize\n0712345678,5\n712345678,\n")
    table = read_table(path)
    assert table.name == "c.csv"
    assert table.columns == ["phoneNumber", "bundleSize"]
    assert table.rows == [
        {"phoneNumber": "0712345678", "bundleSize": "5"},
        {"phoneNumber": "712345678", "bundleSize": ""},
    ]


def test_read_csv_keeps_na_like_strings(write_csv):
    path = write_csv("na.csv", "phone,bundle\nNA,N/A\n")
    assert read_records(path) == [{"phone": "NA", "bundle": "N/A"}]


def test_read_csv_skips_only_empty_lines(write_csv):
    path = write_csv("blank.csv", "phone,bundle\n0712345678,1\n\n,\n0733123456,2\n")
    rows = read_records(path)
    assert rows == [
        {"phone": "0712345678", "bundle": "1"},
        {"phone": "", "bundle": ""},
        {"phone": "0733123456", "bundle": "2"},
    ]


def test_read_csv_strips_header_whitespace(write_csv):
    path = write_csv("h.csv", " phone , bundle \n0712345678,1\n")
    assert read_table(path).columns == ["phone", "bundle"]


def test_read_xlsx(temp_workdir: Path):
    path = temp_workdir / "data" / "book.xlsx"
    pd.DataFrame(
        {"Phone Number": ["0712345678", "0733123456"], "Bundle Size": ["5", "10"]}
    ).to_excel(path, index=False)
    rows = read_records(path)
    assert rows[0]["Phone Number"] == "0712345678"
    assert rows[1]["Bundle Size"] == "10"


def test_read_missing_file(temp_workdir: Path):
    with pytest.raises(SourceFileError, match="file not found"):
        read_table(temp_workdir / "data" / "nope.csv")


def test_read_unsupported_extension(write_csv):
    path = write_csv("list.txt", "phone\n0712345678\n")
    with pytest.raises(SourceFileError, match="unsupported file type"):
        read_table(path)


def test_read_empty_file(write_csv):
    path = write_csv("empty.csv", "")
    with pytest.raises(SourceFileError, match="empty"):
        read_table(path)


def test_read_malformed_csv(write_csv):
    path = write_csv("bad.csv", "a,b\n1,2\n3,4,5,6\n")
    with pytest.raises(SourceFileError, match="bad.csv"):
        read_table(path)


def test_read_header_only(write_csv):
    path = write_csv("header.csv", "phone,bundle\n")
    assert read_records(path) == []


def test_extract_field_first_non_empty_alias():
    record = {"phoneNumber": "", "phone": None, "Phone": " 0712 ", "Phone Number": "0733"}
    assert extract_field(record, ["phoneNumber", "phone", "Phone", "Phone Number"]) == " 0712 "


def test_extract_field_no_alias_present():
    assert extract_field({"other": "1"}, ["phone"]) == ""


def test_extract_field_whitespace_only_counts_as_value():
    assert extract_field({"phoneNumber": "  ", "phone": "0712"}, ["phoneNumber", "phone"]) == "  "


def test_read_xlsx_skips_empty_sheet_rows(temp_workdir: Path):
    path = temp_workdir / "data" / "gaps.xlsx"
    pd.DataFrame(
        {"phone": ["0712345678", None, "0733123456"], "bundle": ["1", None, "2"]}
    ).to_excel(path, index=False)
    assert [r["phone"] for r in read_records(path)] == ["0712345678", "0733123456"]


def test_read_corrupt_xlsx(temp_workdir: Path):
    path = temp_workdir / "data" / "broken.xlsx"
    path.write_bytes(b"PK\x03\x04" + b"garbage" * 20)
    with pytest.raises(SourceFileError, match="broken.xlsx"):
        read_table(path)


def test_read_zip_that_is_not_a_workbook(temp_workdir: Path):
    path = temp_workdir / "data" / "notes.xlsx"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("hello.txt", "hello")
    with pytest.raises(SourceFileError, match="notes.xlsx"):
        read_table(path)
