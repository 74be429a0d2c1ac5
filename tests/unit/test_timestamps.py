"""Tests for the two-format timestamp codec."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest  # type: ignore

from bitflyer_client.errors import DecodeError
from bitflyer_client.timestamps import parse_optional_timestamp, parse_timestamp


def test_offsetless_timestamp_is_read_as_utc() -> None:
    ts = parse_timestamp("2015-07-08T02:50:59.97")
    assert ts == datetime(2015, 7, 8, 2, 50, 59, 970000, tzinfo=timezone.utc)
    assert ts.utcoffset() == timedelta(0)


def test_offset_timestamp_is_normalised_to_utc() -> None:
    ts = parse_timestamp("2015-07-08T02:50:59.97+09:00")
    assert ts == datetime(2015, 7, 7, 17, 50, 59, 970000, tzinfo=timezone.utc)
    assert ts.tzinfo == timezone.utc


def test_zulu_suffix_is_accepted() -> None:
    assert parse_timestamp("2015-07-08T02:50:59Z") == datetime(2015, 7, 8, 2, 50, 59, tzinfo=timezone.utc)


def test_invalid_timestamp_carries_offending_string() -> None:
    with pytest.raises(DecodeError) as excinfo:
        parse_timestamp("not-a-date")
    assert excinfo.value.value == "not-a-date"
    assert "not-a-date" in str(excinfo.value)


def test_non_string_is_rejected() -> None:
    with pytest.raises(DecodeError):
        parse_timestamp(["2015-07-08"])


def test_optional_timestamp_maps_null_to_none() -> None:
    assert parse_optional_timestamp(None) is None
    assert parse_optional_timestamp("2015-07-08T02:50:59.97") == parse_timestamp("2015-07-08T02:50:59.97")
    with pytest.raises(DecodeError):
        parse_optional_timestamp("yesterday")


@pytest.mark.parametrize("text", ["1436323859", "1436323859.5", "2015-07-08", "02:50:59"])
def test_epoch_numbers_and_partial_values_are_rejected(text) -> None:
    with pytest.raises(DecodeError) as excinfo:
        parse_timestamp(text)
    assert excinfo.value.value == text
