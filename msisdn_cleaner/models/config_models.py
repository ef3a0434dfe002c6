from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Config dataclasses for the phone list cleaner.

Loaded from YAML by ``msisdn_cleaner.config.loader``; every field has a default so
the tool runs without a config file.
"""

__all__ = [
    "DEFAULT_PHONE_COLUMNS",
    "DEFAULT_BUNDLE_COLUMNS",
    "DuplicatePolicy",
    "SuggestionConfig",
    "CleanerConfig",
]

# Probed in order; first non-empty value wins.
DEFAULT_PHONE_COLUMNS = ("phoneNumber", "phone", "Phone", "Phone Number")
DEFAULT_BUNDLE_COLUMNS = ("bundleSize", "bundle", "Bundle", "Bundle Size")


class DuplicatePolicy(Enum):
    """When the dataset-wide duplicate pass runs.

    - INGEST_ONLY: only when a file is loaded; edits never rescan
    - RESCAN_ON_EDIT: also after every row edit, autofix and deletion
    """
    INGEST_ONLY = "ingest_only"
    RESCAN_ON_EDIT = "rescan_on_edit"


@dataclass(frozen=True)
class SuggestionConfig:
    """External suggestion service settings. Disabled unless explicitly enabled."""
    enabled: bool = False
    endpoint: str = "https://api.openai.com/v1/chat/completions"
    model: str = "gpt-4o-mini"
    timeout_seconds: float = 10.0
    api_key_env: str = "OPENAI_API_KEY"


@dataclass(frozen=True)
class CleanerConfig:
    """Root configuration object."""
    phone_columns: tuple[str, ...] = DEFAULT_PHONE_COLUMNS
    bundle_columns: tuple[str, ...] = DEFAULT_BUNDLE_COLUMNS
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.INGEST_ONLY
    error_log_dir: str = "./logs"
    suggestion: SuggestionConfig = field(default_factory=SuggestionConfig)
