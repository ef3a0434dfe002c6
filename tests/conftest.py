# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest

from msisdn_cleaner.logging.init import APP_LOGGER_NAME, reset_logging


@pytest.fixture(autouse=True)
def clean_logging():
    # handlers bound to a previous test's captured stdout must not leak
    reset_logging()
    yield
    reset_logging()
    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """phone_columns: [phoneNumber, phone, Phone, Phone Number]
bundle_columns: [bundleSize, bundle, Bundle, Bundle Size]
duplicate_policy: ingest_only
error_log_dir: ./logs
suggestion:
  enabled: false
  model: gpt-4o-mini
  timeout_seconds: 5
  api_key_env: OPENAI_API_KEY
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "cleaner.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_records() -> list[dict[str, str]]:
    return [
        {"phoneNumber": "0712345678", "bundleSize": "5", "name": "Alice"},
        {"phone": "254712345678", "bundle": "10", "name": "Bob"},
        {"Phone Number": "12345", "Bundle Size": "1", "name": "Carol"},
        {"phoneNumber": "0733123456", "bundleSize": "abc", "name": "Dan"},
    ]


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, text: str) -> Path:
        p = temp_workdir / "data" / name
        p.write_text(text, encoding="utf-8")
        return p
    return _write


@pytest.fixture()
def customers_csv(write_csv) -> Path:
    return write_csv(
        "customers.csv",
        "phoneNumber,bundleSize,name\n"
        "0712345678,5,Alice\n"
        "+254 722 000 111,10,Bob\n"
        "0733123456,2,Carol\n"
        "12345,1,Dan\n",
    )
