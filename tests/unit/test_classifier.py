from __future__ import annotations

import pytest

from msisdn_cleaner.models.row import Carrier
from msisdn_cleaner.phone.classifier import (
    AIRTEL_PREFIXES,
    PREFIX_TABLE,
    SAFARICOM_PREFIXES,
    TELKOM_PREFIXES,
    _build_prefix_table,
    carrier_prefixes,
    classify_carrier,
    local_prefix,
)


@pytest.mark.parametrize(
    "number, carrier",
    [
        ("+254712345678", Carrier.SAFARICOM),
        ("+254700000000", Carrier.SAFARICOM),
        ("+254729999999", Carrier.SAFARICOM),
        ("+254745123456", Carrier.SAFARICOM),
        ("+254757123456", Carrier.SAFARICOM),
        ("+254769123456", Carrier.SAFARICOM),
        ("+254733123456", Carrier.AIRTEL),
        ("+254756123456", Carrier.AIRTEL),
        ("+254767123456", Carrier.AIRTEL),
        ("+254785123456", Carrier.AIRTEL),
        ("+254770000000", Carrier.TELKOM),
        ("+254779123456", Carrier.TELKOM),
    ],
)
def test_classify_known_prefixes(number, carrier):
    assert classify_carrier(number) is carrier


def test_classify_renormalizes_local_form():
    assert classify_carrier("0733123456") is Carrier.AIRTEL
    assert classify_carrier("712345678") is Carrier.SAFARICOM


def test_classify_untabulated_prefix_is_unknown():
    # valid per the validator, but 079x is in no table
    assert classify_carrier("+254790123456") is Carrier.UNKNOWN
    assert classify_carrier("+254112345678") is Carrier.UNKNOWN


def test_classify_short_number_is_unknown():
    assert classify_carrier("12345") is Carrier.UNKNOWN
    assert classify_carrier("") is Carrier.UNKNOWN
    assert classify_carrier("+25471234567") is Carrier.UNKNOWN


def test_local_prefix():
    assert local_prefix("+254712345678") == "0712"
    assert local_prefix("+2547") is None


def test_tables_are_disjoint_partition():
    assert not SAFARICOM_PREFIXES & AIRTEL_PREFIXES
    assert not SAFARICOM_PREFIXES & TELKOM_PREFIXES
    assert not AIRTEL_PREFIXES & TELKOM_PREFIXES
    assert len(PREFIX_TABLE) == len(SAFARICOM_PREFIXES) + len(AIRTEL_PREFIXES) + len(TELKOM_PREFIXES)


def test_prefix_table_is_read_only():
    with pytest.raises(TypeError):
        PREFIX_TABLE["0790"] = Carrier.TELKOM  # type: ignore[index]


def test_overlapping_tables_are_rejected():
    with pytest.raises(ValueError, match="0712"):
        _build_prefix_table({
            Carrier.SAFARICOM: {"0712"},
            Carrier.AIRTEL: {"0712", "0733"},
        })


def test_carrier_prefixes_lookup():
    assert carrier_prefixes(Carrier.TELKOM) == TELKOM_PREFIXES
    assert carrier_prefixes(Carrier.UNKNOWN) == frozenset()
