"""
Search helpers for table data.

Case-insensitive substring search over record fields, plus the small
utilities the table filter drop-downs use.
"""
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from helpers.record_helpers import resolve_path, is_container, display_string


def _matches(value: Any, term: str) -> bool:
    if value is None:
        return False
    return term in display_string(value).lower()


def _field_text(value: Any) -> Any:
    """Searchable text of a configured field; lists join their items with ','."""
    if isinstance(value, (list, tuple)):
        return ','.join(display_string(item) for item in value)
    if isinstance(value, Mapping):
        return None
    return value


def record_matches(record: Dict[str, Any], term: str, fields: Sequence[str] = ()) -> bool:
    """
    Check whether one record contains an already-normalized search term.

    Args:
        record: Record dict
        term: Lower-cased, stripped search term
        fields: Keys/dot-paths to search; empty searches every top-level value

    Returns:
        True if any searched value contains the term
    """
    if not fields:
        values = record.values() if hasattr(record, 'values') else ()
        return any(_matches(value, term) for value in values if not is_container(value))

    return any(_matches(_field_text(resolve_path(record, field)), term) for field in fields)


def filter_records(records: Optional[Iterable[Dict[str, Any]]], term: Optional[str],
                   fields: Sequence[str] = ()) -> List[Dict[str, Any]]:
    """
    Filter records to those containing the search term.

    A blank term returns the input unchanged (the same object). Matching is
    plain substring containment, case-insensitive. Missing and None values
    never match.

    Args:
        records: Records to filter
        term: Search term from the search box
        fields: Keys/dot-paths to search; empty searches all top-level values

    Returns:
        Filtered list (or the input itself for a blank term)

    Examples:
        >>> rows = [{'name': 'Bob'}, {'name': 'Ann'}, {'name': 'Cid'}]
        >>> filter_records(rows, 'an', ['name'])
        [{'name': 'Ann'}]
    """
    if records is None:
        return []
    if term is None or not str(term).strip():
        return records

    needle = str(term).strip().lower()
    return [record for record in records if record_matches(record, needle, fields)]


def get_unique_values(records: Optional[Iterable[Dict[str, Any]]], field: str) -> List[Any]:
    """
    Collect the distinct non-empty values of a field, sorted.

    Used to populate filter drop-downs (e.g. status, dentist, branch).

    Examples:
        >>> get_unique_values([{'s': 'PAID'}, {'s': 'PENDING'}, {'s': 'PAID'}, {'s': ''}], 's')
        ['PAID', 'PENDING']
    """
    if records is None:
        return []

    seen = {}
    for record in records:
        value = resolve_path(record, field)
        if value is None or value == '' or is_container(value):
            continue
        seen.setdefault(value, None)

    values = list(seen)
    try:
        return sorted(values)
    except TypeError:
        # Mixed types: order by their display strings
        return sorted(values, key=display_string)


def apply_filters(records: Optional[Iterable[Dict[str, Any]]],
                  predicates: Optional[Iterable[Callable[[Dict[str, Any]], bool]]] = None) -> List[Dict[str, Any]]:
    """
    Apply a chain of predicate functions; non-callables are skipped.

    Examples:
        >>> rows = [{'age': 30}, {'age': 25}]
        >>> apply_filters(rows, [lambda r: r['age'] > 26])
        [{'age': 30}]
    """
    if records is None:
        return []
    result = list(records)
    for predicate in predicates or ():
        if callable(predicate):
            result = [record for record in result if predicate(record)]
    return result
