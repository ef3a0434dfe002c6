from __future__ import annotations

from typing import Any

from .normalizer import CANONICAL_PREFIX, COUNTRY_CODE, digits_only

"""Heuristic repair of malformed phone number text.

Autofix only proposes a canonical form. It never validates its own output;
callers re-run the validator and classifier on the result. When no rule
applies the original input object is returned unchanged, so "could not fix"
is detected by comparing output to input (see ``was_fixed``).
"""

__all__ = [
    "autofix",
    "was_fixed",
]


def autofix(raw: Any) -> Any:
    """Attempt to turn raw text into a ``+254XXXXXXXXX`` number.

    Steps:
    1. Strip non-digits.
    2. Collapse a run of leading zeros to a single zero (one strip per pass).
    3. ``254...``            -> ``+254...``
    4. ``0`` + 9 digits      -> ``+254`` + 9 digits
    5. exactly 9 digits      -> ``+254`` + 9 digits
    6. ``7`` + 8 digits      -> ``+254`` + 9 digits
    7. otherwise the original input

    Examples:
        >>> autofix("00712345678")
        '+254712345678'
        >>> autofix("12-34")
        '12-34'
    """
    cleaned = digits_only(raw)

    while cleaned.startswith("00"):
        cleaned = cleaned[1:]

    if cleaned.startswith(COUNTRY_CODE):
        return "+" + cleaned
    elif cleaned.startswith("0") and len(cleaned) == 10:
        return CANONICAL_PREFIX + cleaned[1:]
    elif len(cleaned) == 9:
        return CANONICAL_PREFIX + cleaned
    # Shadowed by the 9-digit branch above; kept so the rule order stays explicit.
    elif cleaned.startswith("7") and len(cleaned) == 9:
        return CANONICAL_PREFIX + cleaned

    return raw


def was_fixed(raw: Any, fixed: Any) -> bool:
    """True when ``autofix`` produced something other than its input."""
    return fixed != raw
