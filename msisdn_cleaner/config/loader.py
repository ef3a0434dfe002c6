from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..exceptions import CleanerError
from ..models.config_models import (
    CleanerConfig,
    DuplicatePolicy,
    SuggestionConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/cleaner.yml``)
- Validate it against the bundled JSON schema
- Apply defaults for every missing key
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/cleaner.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(CleanerError):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the config
            data fails schema validation (unknown keys, wrong types, bad enum).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_suggestion(raw: dict[str, Any]) -> SuggestionConfig:
    defaults = SuggestionConfig()
    return SuggestionConfig(
        enabled=raw.get("enabled", defaults.enabled),
        endpoint=raw.get("endpoint", defaults.endpoint),
        model=raw.get("model", defaults.model),
        timeout_seconds=float(raw.get("timeout_seconds", defaults.timeout_seconds)),
        api_key_env=raw.get("api_key_env", defaults.api_key_env),
    )


def load_config(path: Path | None = None) -> CleanerConfig:
    """Load configuration from YAML.

    When ``path`` is None the default location is tried and built-in defaults are
    used if it does not exist. An explicitly given path must exist.

    Raises:
        ConfigError: missing explicit file, invalid YAML or schema violation
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return CleanerConfig()
        path = DEFAULT_CONFIG_PATH
    elif not path.exists():
        raise ConfigError(f"config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = CleanerConfig()
    return CleanerConfig(
        phone_columns=tuple(data.get("phone_columns", defaults.phone_columns)),
        bundle_columns=tuple(data.get("bundle_columns", defaults.bundle_columns)),
        duplicate_policy=DuplicatePolicy(
            data.get("duplicate_policy", defaults.duplicate_policy.value)
        ),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
        suggestion=_build_suggestion(data.get("suggestion") or {}),
    )
