from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Row model and its closed enumerations (Carrier, RowStatus).

A Row is one customer record after it has passed through the phone pipeline.
Rows are frozen: every edit produces a replacement Row with the same ``row_id``.
"""

__all__ = [
    "Carrier",
    "RowStatus",
    "Row",
]


class Carrier(Enum):
    """Mobile network operator inferred from a local prefix.

    Always derived from the current phone number; never stored on its own.
    """
    SAFARICOM = "Safaricom"
    AIRTEL = "Airtel"
    TELKOM = "Telkom"
    UNKNOWN = "Unknown"


class RowStatus(Enum):
    """Per-row validation status.

    - VALID: number passes every structural rule
    - INVALID: at least one rule violated
    - WARNING: reserved; no current rule assigns it
    - DUPLICATE: valid, but the same number occurs in another row
    """
    VALID = "valid"
    INVALID = "invalid"
    WARNING = "warning"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class Row:
    """One record of the dataset.

    Attributes:
        row_id: Stable identity (``row-<source index>``) assigned at ingestion
        phone_number: Current phone text (normalized, or raw if normalization emptied it)
        bundle_size: Bundle size text exactly as read (never coerced)
        carrier: Carrier derived from ``phone_number``
        status: Status derived from ``phone_number`` (and the dataset, for DUPLICATE)
        errors: Validator messages for ``phone_number``
        original_data: Source record, kept untouched for round-trip/export
        suggestion: Optional fix proposed by the external suggestion service
    """
    row_id: str
    phone_number: str
    bundle_size: str
    carrier: Carrier
    status: RowStatus
    errors: tuple[str, ...] = ()
    original_data: dict[str, Any] = field(default_factory=dict, hash=False)
    suggestion: str | None = None
