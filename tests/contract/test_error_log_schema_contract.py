from __future__ import annotations

import json

import jsonschema
import pytest

from msisdn_cleaner.logging.error_log import ErrorLogBuffer
from msisdn_cleaner.models.error_record import ErrorRecord

"""Each line of the rejected-row log conforms to a fixed record schema."""

ERROR_LOG_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "required": ["timestamp", "file", "row_id", "phone_number", "error_type", "message"],
    "properties": {
        "timestamp": {"type": "string", "pattern": "Z$"},
        "file": {"type": "string"},
        "row_id": {"type": "string", "pattern": "^(row-[0-9]+|-)$"},
        "phone_number": {"type": "string"},
        "error_type": {"type": "string", "pattern": "^[A-Z][A-Z_]*$"},
        "message": {"type": "string"},
    },
}


def test_error_log_lines_match_schema(tmp_path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("customers.csv", "row-3", "12345", "INVALID_NUMBER", "Must start with +254"))
    buf.append(ErrorRecord.create("customers.csv", "-", "", "SOURCE_FILE_ERROR", "file is empty"))
    path = buf.flush()
    assert path is not None
    for line in path.read_text(encoding="utf-8").splitlines():
        jsonschema.validate(json.loads(line), ERROR_LOG_SCHEMA)


def test_error_log_schema_rejects_extra_key():
    record = json.loads(
        ErrorRecord.create("customers.csv", "row-0", "", "INVALID_NUMBER", "x").to_json_line()
    )
    record["extra"] = "not allowed"
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(record, ERROR_LOG_SCHEMA)
