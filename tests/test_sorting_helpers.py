"""
Unit tests for unified sorting helper.
"""
from datetime import datetime, timezone
from decimal import Decimal

from helpers.sorting_helpers import compare_values, sort_records, sort_table_data


def _names(rows):
    return [row['n'] for row in rows]


def test_sort_numeric_ascending():
    """Test numeric sorting in ascending order."""
    data = [
        {'id': 1, 'count': 10},
        {'id': 2, 'count': 5},
        {'id': 3, 'count': 20}
    ]
    result = sort_records(data, 'count', 'asc')
    assert [row['count'] for row in result] == [5, 10, 20]


def test_sort_numeric_descending():
    """Test numeric sorting in descending order."""
    data = [
        {'id': 1, 'count': 10},
        {'id': 2, 'count': 5},
        {'id': 3, 'count': 20}
    ]
    result = sort_records(data, 'count', 'desc')
    assert [row['count'] for row in result] == [20, 10, 5]


def test_sort_mixed_numeric_types():
    """Ints, floats and Decimals compare numerically."""
    data = [{'v': Decimal('2.5')}, {'v': 10}, {'v': 1.25}]
    result = sort_records(data, 'v', 'asc')
    assert [row['v'] for row in result] == [1.25, Decimal('2.5'), 10]


def test_sort_string_case_insensitive():
    """Test that string sorting is case-insensitive."""
    data = [
        {'title': 'banana'},
        {'title': 'Apple'},
        {'title': 'cherry'}
    ]
    result = sort_records(data, 'title', 'asc')
    assert [row['title'] for row in result] == ['Apple', 'banana', 'cherry']


def test_sort_dates_by_timestamp():
    """ISO strings, 'Z' suffixed strings and datetimes compare as points in time."""
    data = [
        {'n': 'march', 'd': '2024-03-01'},
        {'n': 'dec', 'd': '2023-12-31T10:00:00.000Z'},
        {'n': 'jan', 'd': datetime(2024, 1, 1, tzinfo=timezone.utc)},
    ]
    assert _names(sort_records(data, 'd', 'asc')) == ['dec', 'jan', 'march']
    assert _names(sort_records(data, 'd', 'desc')) == ['march', 'jan', 'dec']


def test_sort_none_values_last_in_both_directions():
    """Test that None values sort to the end regardless of direction."""
    data = [
        {'n': 'a', 'count': 10},
        {'n': 'b', 'count': None},
        {'n': 'c', 'count': 5},
        {'n': 'd'}
    ]
    asc = sort_records(data, 'count', 'asc')
    assert [row.get('count') for row in asc] == [5, 10, None, None]
    assert _names(asc)[2:] == ['b', 'd']

    desc = sort_records(data, 'count', 'desc')
    assert [row.get('count') for row in desc] == [10, 5, None, None]
    assert _names(desc)[2:] == ['b', 'd']


def test_sort_is_stable_in_both_directions():
    """Equal keys keep input order, ascending and descending."""
    rows = [
        {'n': 'Bob', 'age': 30},
        {'n': 'Ann', 'age': 30},
        {'n': 'Cid', 'age': 25}
    ]
    assert _names(sort_records(rows, 'age', 'asc')) == ['Cid', 'Bob', 'Ann']
    assert _names(sort_records(rows, 'age', 'desc')) == ['Bob', 'Ann', 'Cid']


def test_sort_is_idempotent():
    rows = [
        {'n': 'Bob', 'age': 30},
        {'n': 'Ann', 'age': 30},
        {'n': 'Cid', 'age': 25}
    ]
    once = sort_records(rows, 'age', 'desc')
    twice = sort_records(once, 'age', 'desc')
    assert once == twice


def test_sort_by_dot_path():
    data = [
        {'n': 'x', 'branch': {'name': 'South'}},
        {'n': 'y', 'branch': None},
        {'n': 'z', 'branch': {'name': 'north'}},
    ]
    assert _names(sort_records(data, 'branch.name', 'asc')) == ['z', 'x', 'y']


def test_sort_does_not_mutate_input():
    data = [{'v': 3}, {'v': 1}, {'v': 2}]
    original = list(data)
    result = sort_records(data, 'v', 'asc')
    assert data == original
    assert result is not data


def test_sort_without_key_keeps_order():
    data = [{'v': 3}, {'v': 1}]
    result = sort_records(data, None)
    assert result == data
    assert result is not data


def test_sort_none_records():
    assert sort_records(None, 'v') == []


def test_booleans_sort_as_strings():
    """Booleans are not numbers; they compare as 'false' < 'true'."""
    data = [{'v': True}, {'v': False}]
    assert [row['v'] for row in sort_records(data, 'v', 'asc')] == [False, True]


def test_decimal_nan_sorts_as_string_without_raising():
    data = [{'v': Decimal('NaN')}, {'v': Decimal('1')}, {'v': Decimal('-2')}]
    result = [row['v'] for row in sort_records(data, 'v', 'asc')]
    assert result[:2] == [Decimal('-2'), Decimal('1')]
    assert result[2].is_nan()


def test_float_nan_sorts_after_digits():
    data = [{'v': float('nan')}, {'v': 3}, {'v': 1.5}]
    result = [row['v'] for row in sort_records(data, 'v', 'asc')]
    assert result[:2] == [1.5, 3]
    assert compare_values(float('nan'), 1) > 0


def test_compare_values_mixed_types_fall_back_to_strings():
    assert compare_values(10, 'abc') < 0
    assert compare_values('abc', 10) > 0
    assert compare_values(None, None) == 0
    assert compare_values(None, 1, 'desc') > 0
    assert compare_values(1, None, 'desc') < 0


def test_sort_table_data_maps_column_names():
    """Public column names map to record keys."""
    data = [
        {'ha_name': 'Zed'},
        {'ha_name': 'amy'},
    ]
    result = sort_table_data(data, 'name', 'asc', {'name': 'ha_name'})
    assert [row['ha_name'] for row in result] == ['amy', 'Zed']


def test_sort_table_data_invalid_direction_defaults_to_asc():
    data = [{'count': 2}, {'count': 1}]
    result = sort_table_data(data, 'count', 'sideways', {'count': 'count'})
    assert [row['count'] for row in result] == [1, 2]


def test_sort_table_data_unknown_column_uses_first_mapping():
    data = [{'a': 2, 'b': 1}, {'a': 1, 'b': 2}]
    result = sort_table_data(data, 'missing', 'asc', {'a': 'a', 'b': 'b'})
    assert [row['a'] for row in result] == [1, 2]
