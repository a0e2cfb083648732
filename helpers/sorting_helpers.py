"""
Unified sorting helper for consistent table sorting across all tables.
"""
import math
from decimal import Decimal
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Optional

from helpers.record_helpers import resolve_path, is_number, display_string
from helpers.time_helpers import to_epoch


def _direction_sign(direction: str) -> int:
    return -1 if str(direction).lower() == 'desc' else 1


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def compare_values(a: Any, b: Any, direction: str = 'asc') -> int:
    """
    Compare two resolved cell values the way table columns sort.

    None always sorts after any value, whatever the direction. Date-like
    pairs compare by timestamp, numeric pairs numerically, anything else as
    lower-cased strings.

    Returns:
        Negative, zero or positive like a classic cmp function
    """
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1

    sign = _direction_sign(direction)

    a_time, b_time = to_epoch(a), to_epoch(b)
    if a_time is not None and b_time is not None:
        return sign * ((a_time > b_time) - (a_time < b_time))

    if is_number(a) and is_number(b) and not (_is_nan(a) or _is_nan(b)):
        return sign * ((a > b) - (a < b))

    a_str = display_string(a).lower()
    b_str = display_string(b).lower()
    return sign * ((a_str > b_str) - (a_str < b_str))


def sort_records(records: Optional[Iterable[Dict[str, Any]]], column_key: Optional[str],
                 direction: str = 'asc') -> List[Dict[str, Any]]:
    """
    Sort records by a (possibly dotted) column key.

    The sort is stable in both directions: descending order negates the
    comparison instead of reversing the result, so equal rows keep their
    input order. The input is never mutated.

    Args:
        records: Iterable of record dicts
        column_key: Key or dot-path to sort by; falsy keeps input order
        direction: 'asc' or 'desc' (anything else sorts ascending)

    Returns:
        New sorted list

    Examples:
        >>> rows = [{'n': 'Bob', 'age': 30}, {'n': 'Ann', 'age': 30}, {'n': 'Cid', 'age': 25}]
        >>> [r['n'] for r in sort_records(rows, 'age', 'asc')]
        ['Cid', 'Bob', 'Ann']
    """
    if records is None:
        return []
    rows = list(records)
    if not column_key:
        return rows

    def compare_rows(left, right):
        return compare_values(
            resolve_path(left, column_key),
            resolve_path(right, column_key),
            direction
        )

    return sorted(rows, key=cmp_to_key(compare_rows))


def sort_table_data(data: list, sort_by: str, sort_dir: str, sort_key_map: dict) -> list:
    """
    Sort table data by a public column name.

    Args:
        data: List of dicts to sort
        sort_by: Column name to sort by (as used in query strings)
        sort_dir: 'asc' or 'desc'
        sort_key_map: Map of column names to record keys/dot-paths

    Returns:
        New sorted list
    """
    sort_key = sort_key_map.get(sort_by, list(sort_key_map.values())[0] if sort_key_map else '')
    direction = 'desc' if sort_dir == 'desc' else 'asc'
    return sort_records(data, sort_key, direction)
