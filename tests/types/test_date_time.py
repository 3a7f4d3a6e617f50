"""Tests for DATE-TIME and DATE values."""

import datetime

import pytest

from icaltree.types.date_time import DateTimeValue, parse_date, parse_date_time


def test_utc_date_time() -> None:
    """Test a DATE-TIME with a trailing Z is an instant in UTC."""
    result = parse_date_time("19970610T172345Z")
    assert result.utc
    assert result.value == datetime.datetime(
        1997, 6, 10, 17, 23, 45, tzinfo=datetime.timezone.utc
    )
    assert result.timestamp() == 865963425


def test_lowercase_utc_marker() -> None:
    """Test the UTC marker is accepted in lower case."""
    assert parse_date_time("19970610T172345z").utc


def test_local_date_time() -> None:
    """Test a DATE-TIME without Z is a local wall clock time."""
    result = parse_date_time("19970610T172345")
    assert not result.utc
    assert (
        result.value.year,
        result.value.month,
        result.value.day,
        result.value.hour,
        result.value.minute,
        result.value.second,
    ) == (1997, 6, 10, 17, 23, 45)
    assert result.value.tzinfo is not None
    assert result.timestamp() == result.value.replace(tzinfo=None).timestamp()


@pytest.mark.parametrize(
    "value",
    [
        "",
        "19970610",
        "19970610T1723",
        "19970610T172345ZZ",
        "19970610 172345",
        "1997-06-10T17:23:45",
        "19971310T172345Z",
        "19970632T172345Z",
        "19970610T256000Z",
        "-PT15M",
    ],
)
def test_invalid_date_time(value: str) -> None:
    """Test values that are not a DATE-TIME."""
    with pytest.raises(ValueError):
        parse_date_time(value)


def test_date_time_value_is_frozen() -> None:
    """Test the scanned value can't be modified."""
    result = parse_date_time("19970610T172345Z")
    assert isinstance(result, DateTimeValue)
    with pytest.raises(AttributeError):
        result.utc = False  # type: ignore[misc]


def test_date() -> None:
    """Test parsing a DATE value."""
    assert parse_date("20070501") == datetime.date(2007, 5, 1)
    with pytest.raises(ValueError):
        parse_date("20070501T000000")
    with pytest.raises(ValueError):
        parse_date("20070231")
