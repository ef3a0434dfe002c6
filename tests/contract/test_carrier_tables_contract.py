from __future__ import annotations

from msisdn_cleaner.models.row import Carrier
from msisdn_cleaner.phone.classifier import (
    AIRTEL_PREFIXES,
    PREFIX_TABLE,
    SAFARICOM_PREFIXES,
    TELKOM_PREFIXES,
    classify_carrier,
)

"""Exact membership of the carrier prefix tables."""

SAFARICOM = [
    '0700', '0701', '0702', '0703', '0704', '0705', '0706', '0707', '0708', '0709',
    '0710', '0711', '0712', '0713', '0714', '0715', '0716', '0717', '0718', '0719',
    '0720', '0721', '0722', '0723', '0724', '0725', '0726', '0727', '0728', '0729',
    '0740', '0741', '0742', '0743', '0744', '0745', '0746', '0747', '0748', '0749',
    '0757', '0758', '0759', '0768', '0769',
]
AIRTEL = [
    '0730', '0731', '0732', '0733', '0734', '0735', '0736', '0737', '0738', '0739',
    '0750', '0751', '0752', '0753', '0754', '0755', '0756',
    '0760', '0761', '0762', '0763', '0764', '0765', '0766', '0767',
    '0780', '0781', '0782', '0783', '0784', '0785', '0786', '0787', '0788', '0789',
]
TELKOM = ['0770', '0771', '0772', '0773', '0774', '0775', '0776', '0777', '0778', '0779']


def test_safaricom_table():
    assert SAFARICOM_PREFIXES == frozenset(SAFARICOM)


def test_airtel_table():
    assert AIRTEL_PREFIXES == frozenset(AIRTEL)


def test_telkom_table():
    assert TELKOM_PREFIXES == frozenset(TELKOM)


def test_every_mobile_prefix_outside_tables_is_unknown():
    tabulated = set(SAFARICOM) | set(AIRTEL) | set(TELKOM)
    for n in range(700, 800):
        prefix = f"0{n}"
        number = f"+254{n}123456"
        expected = PREFIX_TABLE.get(prefix, Carrier.UNKNOWN)
        assert classify_carrier(number) is expected
        if prefix not in tabulated:
            assert expected is Carrier.UNKNOWN


def test_carrier_names():
    assert [c.value for c in Carrier] == ["Safaricom", "Airtel", "Telkom", "Unknown"]
