import pytest

from app.verticals.sales.errors import MissingParameterError, ParameterValidationError
from app.verticals.sales.params import (
    parse_limit,
    parse_month,
    parse_optional_id,
    parse_optional_year,
    parse_year,
    require_id,
)


@pytest.mark.parametrize("raw,expected", [("2024", 2024), (" 2000 ", 2000), ("2100", 2100), ("2024.0", 2024)])
def test_parse_year_ok(raw, expected):
    assert parse_year(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "1999", "2101", "abc", "2024.5", "nan", "inf"])
def test_parse_year_rejects(raw):
    with pytest.raises(ParameterValidationError) as exc:
        parse_year(raw, name="ref")
    assert exc.value.param == "ref"
    assert exc.value.status_code == 400


def test_parse_optional_year():
    assert parse_optional_year(None) is None
    assert parse_optional_year("") is None
    assert parse_optional_year("2023") == 2023


@pytest.mark.parametrize("raw", ["0", "13", None, "x"])
def test_parse_month_rejects(raw):
    with pytest.raises(ParameterValidationError):
        parse_month(raw)


def test_parse_month_ok():
    assert parse_month("1") == 1
    assert parse_month("12") == 12


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 10), ("", 10), ("0", 1), ("-4", 1), ("999", 50), ("25", 25), ("50", 50)],
)
def test_parse_limit_clamps(raw, expected):
    assert parse_limit(raw) == expected


def test_parse_limit_rejects_garbage():
    with pytest.raises(ParameterValidationError):
        parse_limit("ten")


def test_ids():
    assert parse_optional_id("  c1 ") == "c1"
    assert parse_optional_id("") is None
    assert require_id("p1", name="productId") == "p1"
    with pytest.raises(MissingParameterError) as exc:
        require_id(None, name="productId")
    assert exc.value.code == "MISSING_PARAMETER"
