from datetime import date, datetime

import pytest

from seal_codec.types import FormatError, ValidationError
from seal_codec.utils.dates import (
    bytes_to_date,
    date_to_bytes,
    expand_two_digit_year,
    mrz_to_date,
    parse_date,
)


def test_seal_date_vector():
    """Test the packed MMDDYYYY seal date."""
    assert date_to_bytes(date(1957, 3, 25)) == bytes([0x31, 0x9E, 0xF5])
    assert bytes_to_date(bytes([0x31, 0x9E, 0xF5])) == date(1957, 3, 25)


def test_seal_date_round_trip():
    """Test dates across the calendar survive packing."""
    for value in (date(2007, 4, 15), date(1999, 12, 31), date(2000, 1, 1), date(2099, 2, 28)):
        assert bytes_to_date(date_to_bytes(value)) == value


def test_bytes_to_date_rejects_invalid():
    """Test packed values that are not calendar dates."""
    with pytest.raises(FormatError):
        bytes_to_date((13322023).to_bytes(3, "big"))

    with pytest.raises(FormatError):
        bytes_to_date(b"\x01\x02")


def test_parse_date():
    """Test coercion of dates, datetimes and ISO strings."""
    assert parse_date("2023-09-29") == date(2023, 9, 29)
    assert parse_date(datetime(2023, 9, 29, 12, 30)) == date(2023, 9, 29)
    assert parse_date(date(2023, 9, 29)) == date(2023, 9, 29)
    with pytest.raises(ValidationError):
        parse_date("29/09/2023")
    with pytest.raises(ValidationError):
        parse_date(20230929)


def test_expand_two_digit_year():
    """Test the exclusive and inclusive pivot rules."""
    assert expand_two_digit_year(60, 60) == 2060
    assert expand_two_digit_year(61, 60) == 1961
    assert expand_two_digit_year(32, 32, inclusive=True) == 1932
    assert expand_two_digit_year(31, 32, inclusive=True) == 2031


def test_mrz_to_date():
    """Test parsing YYMMDD fields."""
    assert mrz_to_date("740812", 60) == date(1974, 8, 12)
    assert mrz_to_date("120415", 60) == date(2012, 4, 15)
    assert mrz_to_date("740812", 0, century=2000) == date(2074, 8, 12)
    with pytest.raises(FormatError):
        mrz_to_date("74081", 60)
    with pytest.raises(FormatError):
        mrz_to_date("741332", 60)
    with pytest.raises(FormatError):
        mrz_to_date("<<<<<<", 60)
