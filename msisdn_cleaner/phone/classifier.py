from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from ..models.row import Carrier
from .normalizer import normalize
from .validator import CANONICAL_LENGTH

"""Carrier classification from static local-prefix tables.

Each carrier owns an explicit set of 4-digit local prefixes (trunk ``0`` + the
first three digits after the country code, e.g. ``0712`` for ``+254712...``).
The three sets form a partition: they are checked for overlap once at import
time and merged into a single prefix -> carrier lookup.
"""

__all__ = [
    "SAFARICOM_PREFIXES",
    "AIRTEL_PREFIXES",
    "TELKOM_PREFIXES",
    "PREFIX_TABLE",
    "carrier_prefixes",
    "local_prefix",
    "classify_carrier",
]


def _prefix_range(start: int, end: int) -> frozenset[str]:
    """Inclusive range of local prefixes rendered as 4-char ``0XXX`` strings."""
    return frozenset(f"{n:04d}" for n in range(start, end + 1))


SAFARICOM_PREFIXES: frozenset[str] = (
    _prefix_range(700, 709)
    | _prefix_range(710, 729)
    | _prefix_range(740, 749)
    | _prefix_range(757, 759)
    | _prefix_range(768, 769)
)

AIRTEL_PREFIXES: frozenset[str] = (
    _prefix_range(730, 739)
    | _prefix_range(750, 756)
    | _prefix_range(760, 767)
    | _prefix_range(780, 789)
)

TELKOM_PREFIXES: frozenset[str] = _prefix_range(770, 779)

_CARRIER_TABLES: Mapping[Carrier, frozenset[str]] = MappingProxyType({
    Carrier.SAFARICOM: SAFARICOM_PREFIXES,
    Carrier.AIRTEL: AIRTEL_PREFIXES,
    Carrier.TELKOM: TELKOM_PREFIXES,
})


def _build_prefix_table(tables: Mapping[Carrier, Iterable[str]]) -> Mapping[str, Carrier]:
    """Merge per-carrier tables into one lookup, rejecting overlapping prefixes."""
    merged: dict[str, Carrier] = {}
    for carrier, prefixes in tables.items():
        for prefix in prefixes:
            owner = merged.get(prefix)
            if owner is not None:
                raise ValueError(
                    f"prefix {prefix} assigned to both {owner.value} and {carrier.value}"
                )
            merged[prefix] = carrier
    return MappingProxyType(merged)


PREFIX_TABLE: Mapping[str, Carrier] = _build_prefix_table(_CARRIER_TABLES)


def carrier_prefixes(carrier: Carrier) -> frozenset[str]:
    """Return the local prefix set for a carrier (empty for ``Carrier.UNKNOWN``)."""
    return _CARRIER_TABLES.get(carrier, frozenset())


def local_prefix(number: Any) -> str | None:
    """Return the ``0XXX`` local prefix of a number, or None if it is too short.

    Equivalent to checking whether ``"0" + number[4:8]`` starts with a tabulated
    prefix, since every table entry is exactly four characters.
    """
    cleaned = normalize(number)
    if len(cleaned) < CANONICAL_LENGTH:
        return None
    return "0" + cleaned[4:7]


def classify_carrier(number: Any) -> Carrier:
    """Map a phone number to its carrier.

    The input is re-normalized first. Numbers shorter than the canonical length and
    prefixes outside every table yield ``Carrier.UNKNOWN``.

    Examples:
        >>> classify_carrier("+254712345678").value
        'Safaricom'
        >>> classify_carrier("0770000000").value
        'Telkom'
    """
    prefix = local_prefix(number)
    if prefix is None:
        return Carrier.UNKNOWN
    return PREFIX_TABLE.get(prefix, Carrier.UNKNOWN)
