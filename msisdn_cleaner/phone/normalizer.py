from __future__ import annotations

import re
from typing import Any

"""Phone number normalizer for the +254 numbering plan.

Reduces raw cell text to a single comparable representation. The function is
total: any input yields a string, and input that cannot be canonicalized is
returned digits-only so the validator can flag it.
"""

__all__ = [
    "COUNTRY_CODE",
    "CANONICAL_PREFIX",
    "digits_only",
    "normalize",
]

COUNTRY_CODE = "254"
CANONICAL_PREFIX = "+" + COUNTRY_CODE

_NON_DIGIT_RE = re.compile(r"[^0-9]")


def digits_only(raw: Any) -> str:
    """Strip every character that is not an ASCII decimal digit.

    ``None`` is treated as empty text; other non-string cells are coerced with ``str()``.
    """
    if raw is None:
        return ""
    return _NON_DIGIT_RE.sub("", str(raw))


def normalize(raw: Any) -> str:
    """Canonicalize raw phone number text.

    Rules (first match wins):
    1. ``254...``            -> ``+254...``
    2. ``0`` + 9 digits      -> ``+254`` + 9 digits
    3. exactly 9 digits      -> ``+254`` + 9 digits
    4. anything else         -> digits unchanged (no prefix)

    Examples:
        >>> normalize("0712 345 678")
        '+254712345678'
        >>> normalize("254712345678")
        '+254712345678'
        >>> normalize("12345")
        '12345'
    """
    cleaned = digits_only(raw)

    if cleaned.startswith(COUNTRY_CODE):
        return "+" + cleaned
    if cleaned.startswith("0") and len(cleaned) == 10:
        return CANONICAL_PREFIX + cleaned[1:]
    if len(cleaned) == 9:
        return CANONICAL_PREFIX + cleaned
    return cleaned
