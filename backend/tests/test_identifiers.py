import math

import pytest

from core.exceptions import InvalidIdentifier
from services.picker.identifiers import coerce_identifier, matches_filter, parse_int_param

CAP = 2**53 - 1


@pytest.mark.parametrize("raw, expected", [
    (7, 7),
    (7.0, 7),
    ("7", 7),
    (" 42 ", 42),
    ("1e3", 1000),
    (CAP, CAP),
])
def test_coerce_accepts_integral_values(raw, expected):
    assert coerce_identifier(raw, CAP) == expected


@pytest.mark.parametrize("raw", [
    0, -3, 1.5, "x", "", "  ", None, True, False, [1], {"id": 1},
    math.nan, math.inf, "inf", "1_000", CAP + 1, str(CAP + 2),
])
def test_coerce_rejects_invalid_values(raw):
    with pytest.raises(InvalidIdentifier) as exc_info:
        coerce_identifier(raw, CAP)
    assert exc_info.value.raw is raw


def test_parse_int_param_reads_leading_integer():
    assert parse_int_param("12abc", 20) == 12
    assert parse_int_param("  -5", 0) == -5
    assert parse_int_param("abc", 20) == 20
    assert parse_int_param("", 20) == 20
    assert parse_int_param(None, 0) == 0


def test_matches_filter_is_a_substring_test_on_decimal_text():
    assert matches_filter("", 123)
    assert matches_filter("1", 10)
    assert matches_filter("23", 1234)
    assert not matches_filter("32", 1234)
