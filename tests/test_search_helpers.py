"""
Tests for search helpers.
"""
from helpers.search_helpers import filter_records, get_unique_values, apply_filters


PATIENTS = [
    {'id': 1, 'name': 'Ann Lee', 'phone': '555-0101', 'age': 34,
     'branch': {'name': 'North'}, 'tags': ['vip']},
    {'id': 2, 'name': 'Bob Stone', 'phone': None, 'age': 51,
     'branch': {'name': 'South'}, 'tags': []},
    {'id': 3, 'name': 'Cid Park', 'phone': '555-0199', 'age': 150,
     'branch': None},
]


def _ids(rows):
    return [row['id'] for row in rows]


def test_blank_term_returns_same_collection():
    assert filter_records(PATIENTS, '') is PATIENTS
    assert filter_records(PATIENTS, '   ') is PATIENTS
    assert filter_records(PATIENTS, None) is PATIENTS


def test_match_is_case_insensitive_substring():
    assert _ids(filter_records(PATIENTS, 'ANN')) == [1]
    assert _ids(filter_records(PATIENTS, 'st')) == [2]


def test_term_is_trimmed():
    assert _ids(filter_records(PATIENTS, '  park ')) == [3]


def test_numbers_match_by_string_form():
    assert _ids(filter_records(PATIENTS, '15')) == [3]


def test_fields_restrict_search():
    assert _ids(filter_records(PATIENTS, '555', ['name'])) == []
    assert _ids(filter_records(PATIENTS, '555', ['phone'])) == [1, 3]


def test_fields_resolve_dot_paths():
    assert _ids(filter_records(PATIENTS, 'south', ['branch.name'])) == [2]


def test_list_field_matches_joined_items():
    records = [{'id': 1, 'allergies': ['Penicillin', 'Latex']}, {'id': 2, 'allergies': []}]
    assert _ids(filter_records(records, 'penic', ['allergies'])) == [1]
    assert _ids(filter_records(records, 'penicillin,latex', ['allergies'])) == [1]
    assert _ids(filter_records(PATIENTS, 'vip', ['tags'])) == [1]


def test_mapping_field_is_not_searched():
    assert filter_records(PATIENTS, 'north', ['branch']) == []


def test_shallow_search_skips_nested_values():
    """Without fields, nested mappings and lists are not searched."""
    assert filter_records(PATIENTS, 'north') == []
    assert filter_records(PATIENTS, 'vip') == []


def test_none_values_never_match():
    assert filter_records([{'phone': None}], 'none') == []
    assert filter_records([{'phone': None}], 'none', ['phone']) == []


def test_missing_fields_do_not_raise():
    assert filter_records(PATIENTS, 'x', ['does.not.exist']) == []


def test_filter_none_records():
    assert filter_records(None, 'ann') == []


def test_filter_does_not_mutate_input():
    rows = list(PATIENTS)
    filter_records(rows, 'ann')
    assert rows == PATIENTS


def test_get_unique_values():
    rows = [{'s': 'PAID'}, {'s': 'PENDING'}, {'s': 'PAID'}, {'s': ''}, {'s': None}, {}]
    assert get_unique_values(rows, 's') == ['PAID', 'PENDING']


def test_get_unique_values_nested_and_mixed():
    assert get_unique_values(PATIENTS, 'branch.name') == ['North', 'South']
    assert get_unique_values([{'v': 2}, {'v': 'a'}, {'v': 1}], 'v') == [1, 2, 'a']


def test_apply_filters_chains_predicates():
    result = apply_filters(PATIENTS, [lambda r: r['age'] > 40, None, lambda r: r['id'] != 3])
    assert _ids(result) == [2]


def test_apply_filters_without_predicates_copies():
    result = apply_filters(PATIENTS)
    assert result == PATIENTS
    assert result is not PATIENTS
