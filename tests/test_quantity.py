from decimal import Decimal

import pytest

from kubegetinfo.extraction.quantity import format_quantity, parse_quantity, sum_quantities


@pytest.mark.parametrize("raw, expected", [
    ("1", (Decimal(1), "")),
    ("500m", (Decimal("0.5"), "m")),
    ("1Ki", (Decimal(1024), "Ki")),
    ("2k", (Decimal(2000), "k")),
    ("1e3", (Decimal(1000), "")),
    ("1E", (Decimal("1e18"), "E")),
])
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1Xi", "m", "1.2.3", None, 5])
def test_parse_quantity_rejects_invalid(raw):
    assert parse_quantity(raw) is None


@pytest.mark.parametrize("values, expected", [
    (["1", "500m"], "1500m"),
    (["250m", "250m"], "500m"),
    (["128Mi", "1Gi"], "1152Mi"),
    (["1", "2"], "3"),
    (["1e3", "1"], "1001"),
])
def test_sum_quantities_uses_finest_suffix(values, expected):
    assert sum_quantities(values) == expected


def test_sum_quantities_is_none_when_any_input_is_invalid():
    assert sum_quantities(["1", "lots"]) is None
    assert sum_quantities([]) is None


def test_format_quantity_trims_trailing_zeros():
    assert format_quantity(Decimal("1.50"), "") == "1.5"
    assert format_quantity(Decimal(2) ** 30, "Gi") == "1Gi"


@pytest.mark.parametrize("raw", ["NaN", "Infinity", "1_000", "1ki"])
def test_parse_quantity_rejects_non_quantity_numbers(raw):
    assert parse_quantity(raw) is None


def test_parse_quantity_ignores_surrounding_whitespace():
    assert parse_quantity(" 2Mi ") == (Decimal(2 * 2 ** 20), "Mi")
