"""
Tests for time helpers.
"""
from datetime import date, datetime, timezone

import pytest

from helpers.time_helpers import parse_timestamp, to_epoch, format_date, format_print_timestamp


def test_parse_timestamp_iso():
    assert parse_timestamp('2024-01-15T12:30:45') == datetime(2024, 1, 15, 12, 30, 45)


def test_parse_timestamp_space_separator():
    assert parse_timestamp('2024-01-15 12:30:45') == datetime(2024, 1, 15, 12, 30, 45)


def test_parse_timestamp_zulu_suffix():
    parsed = parse_timestamp('2024-01-15T12:30:45.000Z')
    assert parsed == datetime(2024, 1, 15, 12, 30, 45, tzinfo=timezone.utc)


def test_parse_timestamp_passthrough_and_dates():
    moment = datetime(2024, 1, 15, 8)
    assert parse_timestamp(moment) is moment
    assert parse_timestamp(date(2024, 1, 15)) == datetime(2024, 1, 15)


@pytest.mark.parametrize('value', [None, '', '   ', 'not a date', 42])
def test_parse_timestamp_invalid(value):
    with pytest.raises(ValueError):
        parse_timestamp(value)


def test_to_epoch():
    assert to_epoch('1970-01-02') == 86400.0
    assert to_epoch('1970-01-01T00:00:00Z') == 0.0
    assert to_epoch(datetime(1970, 1, 1, 0, 1)) == 60.0


@pytest.mark.parametrize('value', ['Bob', None, 12, 3.5, True, {'a': 1}])
def test_to_epoch_rejects_non_dates(value):
    assert to_epoch(value) is None


def test_format_date():
    assert format_date('2024-01-15') == 'Jan 15, 2024'
    assert format_date('2024-01-15', 'long') == 'January 15, 2024'
    assert format_date('2024-01-15T14:30:00', 'datetime') == 'Jan 15, 2024, 02:30 PM'
    assert format_date(date(2024, 1, 15), 'unknown') == 'Jan 15, 2024'


def test_format_date_empty_and_invalid():
    assert format_date(None) == 'N/A'
    assert format_date('') == 'N/A'
    assert format_date('soon') == 'Invalid Date'


def test_format_print_timestamp():
    assert format_print_timestamp(datetime(2024, 1, 15, 9, 5, 7)) == '2024-01-15 09:05:07'
