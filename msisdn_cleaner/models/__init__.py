"""Domain models for the phone list cleaner.

This package contains the dataclasses and enums shared by the phone engine, the
dataset processor and the CLI.
"""

from .config_models import CleanerConfig, DuplicatePolicy, SuggestionConfig
from .error_record import ErrorRecord
from .results import AutofixReport, DatasetStats, RunResult
from .row import Carrier, Row, RowStatus
from .verdict import ValidationVerdict
from .view import ViewFilter, ViewTab

__all__ = [
    # Configuration models
    "CleanerConfig",
    "DuplicatePolicy",
    "SuggestionConfig",
    # Row models
    "Carrier",
    "Row",
    "RowStatus",
    "ValidationVerdict",
    # Results
    "AutofixReport",
    "DatasetStats",
    "RunResult",
    "ErrorRecord",
    # View
    "ViewFilter",
    "ViewTab",
]
