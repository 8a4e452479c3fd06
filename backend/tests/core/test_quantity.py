"""Quantity Parsing — tests for kube-style quantity conversion.

Tests cover:
    - binary and decimal suffixes, exponents, plain numbers
    - byte and millicore values round up
    - invalid, boolean and negative inputs rejected
    - millicores render as cores
"""

from decimal import Decimal

import pytest

from vm_admission.core.quantity import (
    format_milli_cpu,
    parse_bytes,
    parse_milli_cpu,
    parse_quantity,
)


# ─── parse_quantity ──────────────────────────────────────────────

def test_parse_quantity_binary_suffixes():
    assert parse_quantity("1Ki") == 1024
    assert parse_quantity("1Gi") == 1 << 30
    assert parse_quantity("1.5Mi") == 1536 * 1024


def test_parse_quantity_decimal_suffixes():
    assert parse_quantity("250m") == Decimal("0.25")
    assert parse_quantity("2k") == 2000
    assert parse_quantity("1G") == 10**9


def test_parse_quantity_exponent():
    assert parse_quantity("1e3") == 1000
    assert parse_quantity("5e-1") == Decimal("0.5")


def test_parse_quantity_uppercase_e_alone_is_exa_suffix():
    assert parse_quantity("1E") == 10**18


def test_parse_quantity_plain_numbers():
    assert parse_quantity(3) == 3
    assert parse_quantity(0.25) == Decimal("0.25")
    assert parse_quantity(" 42 ") == 42


@pytest.mark.parametrize("value", ["", "Gi", "1 Gi", "1Xi", "abc", "1.2.3"])
def test_parse_quantity_rejects_malformed_strings(value):
    with pytest.raises(ValueError):
        parse_quantity(value)


def test_parse_quantity_rejects_booleans():
    with pytest.raises(ValueError):
        parse_quantity(True)


def test_parse_quantity_rejects_other_types():
    with pytest.raises(ValueError):
        parse_quantity([1])


# ─── parse_bytes / parse_milli_cpu ───────────────────────────────

def test_parse_bytes_rounds_up_fractional_bytes():
    assert parse_bytes("500m") == 1
    assert parse_bytes("1.5") == 2


def test_parse_bytes_rejects_negative():
    with pytest.raises(ValueError):
        parse_bytes("-1Gi")


def test_parse_milli_cpu_from_cores_and_millis():
    assert parse_milli_cpu(1) == 1000
    assert parse_milli_cpu(0.25) == 250
    assert parse_milli_cpu("250m") == 250
    assert parse_milli_cpu("1.5") == 1500


def test_parse_milli_cpu_rounds_up_below_one_milli():
    assert parse_milli_cpu("0.0001") == 1


def test_parse_milli_cpu_rejects_negative():
    with pytest.raises(ValueError):
        parse_milli_cpu(-1)


# ─── format_milli_cpu ────────────────────────────────────────────

def test_format_milli_cpu_whole_cores():
    assert format_milli_cpu(2000) == "2"
    assert format_milli_cpu(0) == "0"


def test_format_milli_cpu_fractional_cores():
    assert format_milli_cpu(250) == "0.25"
    assert format_milli_cpu(1500) == "1.5"
