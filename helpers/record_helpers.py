"""
Record access helpers shared by the sort, search and export helpers.

Records are plain mappings as returned by the clinic API. Nested fields are
addressed with dot-paths such as 'patient.name' or 'branch.address.city'.
"""
import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Union

_MISSING = object()


def resolve_path(record: Any, path: str) -> Any:
    """
    Resolve a column key against a record.

    Keys without a dot are read directly. Dotted keys are walked one segment
    at a time; integer segments index into lists. Any missing or
    non-traversable step resolves to None.

    Examples:
        >>> resolve_path({'branch': {'name': 'North'}}, 'branch.name')
        'North'

        >>> resolve_path({'branch': None}, 'branch.name') is None
        True

        >>> resolve_path({'teeth': [11, 12]}, 'teeth.1')
        12
    """
    if not path:
        return None
    if '.' not in path:
        return _step(record, path)

    current = record
    for segment in path.split('.'):
        current = _step(current, segment)
        if current is None:
            return None
    return current


def _step(container: Any, segment: str) -> Any:
    if isinstance(container, Mapping):
        value = container.get(segment, _MISSING)
        return None if value is _MISSING else value
    if isinstance(container, Sequence) and not isinstance(container, (str, bytes)):
        if segment.lstrip('-').isdigit():
            index = int(segment)
            if -len(container) <= index < len(container):
                return container[index]
    return None


def is_number(value: Any) -> bool:
    """True for real numbers; booleans are not numbers here."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_container(value: Any) -> bool:
    """True for nested mappings and lists, which shallow search skips."""
    if isinstance(value, Mapping):
        return True
    return isinstance(value, (list, tuple, set, frozenset))


def display_string(value: Any) -> str:
    """
    Coerce a value to the string used for searching, sorting and export.

    Examples:
        >>> display_string(None)
        ''
        >>> display_string(True)
        'true'
        >>> display_string(30.0)
        '30'
        >>> display_string(Decimal('12.50'))
        '12.50'
    """
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, 'f')
    return str(value)


def to_json_string(value: Any) -> str:
    """
    Serialize a nested value for a single table cell.

    Raises:
        ValueError: on circular references
        TypeError: on values json cannot encode even with str() fallback
    """
    return json.dumps(value, default=display_string, ensure_ascii=False)


def row_identity(record: Any, index: int) -> Union[Any, int]:
    """
    Identity of a row for selection: its 'id' field, else its position.

    Examples:
        >>> row_identity({'id': 'p-1'}, 3)
        'p-1'
        >>> row_identity({'name': 'Ann'}, 3)
        3
    """
    if isinstance(record, Mapping):
        row_id = record.get('id')
        if row_id is not None:
            return row_id
    return index
