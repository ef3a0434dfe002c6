from __future__ import annotations

from typing import Any

from ..models.verdict import ValidationVerdict
from .normalizer import CANONICAL_PREFIX, normalize

"""Structural validator for canonical +254 mobile numbers.

All three checks are evaluated independently; a single input can collect every
message. Message strings are a stable contract (export files and downstream
tooling match on them verbatim).
"""

__all__ = [
    "ERR_PREFIX",
    "ERR_LENGTH",
    "ERR_MOBILE",
    "CANONICAL_LENGTH",
    "validate",
]

ERR_PREFIX = "Must start with +254"
ERR_LENGTH = "Must be 13 characters (+254XXXXXXXXX)"
ERR_MOBILE = "Must start with +2547"

CANONICAL_LENGTH = 13  # "+254" + 9 digits
MOBILE_MARKER_INDEX = 4
MOBILE_MARKER = "7"


def validate(number: Any) -> ValidationVerdict:
    """Validate a phone number after re-normalizing it.

    Returns:
        ValidationVerdict with ``is_valid`` True only when no rule was violated.
    """
    cleaned = normalize(number)
    errors: list[str] = []

    if not cleaned.startswith(CANONICAL_PREFIX):
        errors.append(ERR_PREFIX)

    if len(cleaned) != CANONICAL_LENGTH:
        errors.append(ERR_LENGTH)

    # slice so inputs shorter than 5 chars count as a violation
    if cleaned[MOBILE_MARKER_INDEX:MOBILE_MARKER_INDEX + 1] != MOBILE_MARKER:
        errors.append(ERR_MOBILE)

    return ValidationVerdict(is_valid=not errors, errors=tuple(errors))
