from __future__ import annotations

from dataclasses import dataclass

"""ValidationVerdict model.

The outcome of validating one phone number: a pass/fail flag and the ordered
list of every rule it violated.
"""

__all__ = [
    "ValidationVerdict",
]


@dataclass(frozen=True)
class ValidationVerdict:
    """Result of ``validate()``.

    ``errors`` keeps rule order (prefix, length, mobile marker) and may hold
    several messages at once. ``is_valid`` is True iff ``errors`` is empty.
    """
    is_valid: bool
    errors: tuple[str, ...] = ()
