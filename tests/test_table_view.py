"""
Tests for the table orchestrator.
"""
import json

import pytest

from error_handler import ValidationError
from helpers.template import TableColumn
from table_view import TableView, new_table_id


COLUMNS = [
    TableColumn('name', 'Name'),
    TableColumn('age', 'Age'),
    TableColumn('branch.name', 'Branch'),
    TableColumn('notes', 'Notes', sortable=False, searchable=False),
]


def make_records(count=25):
    return [
        {'id': f'p-{i}', 'name': f'Patient {i:02d}', 'age': 20 + (i % 5),
         'branch': {'name': 'North' if i % 2 else 'South'}, 'notes': 'hidden'}
        for i in range(1, count + 1)
    ]


@pytest.fixture
def table():
    return TableView(make_records(), COLUMNS, title='Patients', page_size=10)


def _names(view):
    return [record['name'] for record in view.records]


def test_table_id_is_generated_per_instance():
    first = TableView([], COLUMNS)
    second = TableView([], COLUMNS)
    assert first.table_id.startswith('datatable-')
    assert first.table_id != second.table_id
    assert TableView([], COLUMNS, table_id='fixed').table_id == 'fixed'
    assert new_table_id() != new_table_id()


def test_duplicate_columns_rejected():
    with pytest.raises(ValidationError):
        TableView([], [TableColumn('a'), TableColumn('a')])


def test_initial_view(table):
    view = table.view()
    assert view.pagination.current_page == 1
    assert view.pagination.total_pages == 3
    assert len(view.rows) == 10
    assert view.sort_by is None
    assert view.status_message == 'Showing 10 of 25 results'
    assert _names(view)[0] == 'Patient 01'


def test_search_filters_and_resets_page(table):
    table.go_to_page(3)
    table.set_search('patient 1')
    view = table.view()
    assert table.page == 1
    assert view.pagination.total_items == 10  # 10..19
    assert view.search == 'patient 1'
    assert view.status_message == 'Showing 10 of 10 results (filtered)'


def test_search_uses_dot_path_columns(table):
    table.set_search('south')
    assert table.view().pagination.total_items == 12


def test_search_ignores_non_searchable_columns(table):
    table.set_search('hidden')
    assert table.view().is_empty


def test_clear_search(table):
    table.set_search('zzz')
    assert table.view().is_empty
    table.clear_search()
    assert table.view().pagination.total_items == 25


def test_search_covers_every_field_when_no_column_is_searchable():
    columns = [TableColumn('name', searchable=False)]
    table = TableView([{'name': 'Ann', 'city': 'Irbid'}, {'name': 'Bob', 'city': 'Amman'}], columns)
    table.set_search('ann')
    view = table.view()
    assert view.pagination.total_items == 1
    assert view.search == 'ann'

    table.set_search('irbid')
    assert [record['name'] for record in table.view().records] == ['Ann']


def test_search_disabled():
    table = TableView([{'name': 'Ann'}, {'name': 'Bob'}], [TableColumn('name')], searchable=False)
    table.set_search('ann')
    assert table.view().pagination.total_items == 2


def test_search_without_columns_searches_all_fields():
    table = TableView([{'name': 'Ann', 'city': 'Irbid'}, {'name': 'Bob', 'city': 'Amman'}])
    table.set_search('irb')
    view = table.view()
    assert _names(view) == ['Ann']
    assert [column.key for column in view.columns] == ['name', 'city']


def test_toggle_sort_cycles_direction(table):
    table.toggle_sort('age')
    assert (table.sort_by, table.sort_dir) == ('age', 'asc')
    table.toggle_sort('age')
    assert (table.sort_by, table.sort_dir) == ('age', 'desc')
    table.toggle_sort('age')
    assert (table.sort_by, table.sort_dir) == ('age', 'asc')


def test_toggle_sort_new_column_starts_ascending(table):
    table.toggle_sort('age')
    table.toggle_sort('age')
    table.toggle_sort('name')
    assert (table.sort_by, table.sort_dir) == ('name', 'asc')


def test_toggle_sort_resets_page(table):
    table.go_to_page(2)
    table.toggle_sort('name')
    assert table.page == 1


def test_toggle_sort_ignores_unsortable_and_unknown(table):
    table.toggle_sort('notes')
    table.toggle_sort('missing')
    assert table.sort_by is None


def test_toggle_sort_disabled():
    table = TableView([], COLUMNS, sortable=False)
    table.toggle_sort('name')
    assert table.sort_by is None


def test_sort_applies_before_pagination(table):
    table.toggle_sort('name')
    table.toggle_sort('name')
    view = table.view()
    assert _names(view)[0] == 'Patient 25'
    assert view.sort_by == 'name'
    assert view.sort_dir == 'desc'


def test_sorted_ties_keep_input_order(table):
    table.toggle_sort('age')
    view = table.view()
    # ages cycle 21,22,23,24,20; age 20 rows are 5, 10, 15, 20, 25
    assert _names(view)[:5] == ['Patient 05', 'Patient 10', 'Patient 15', 'Patient 20', 'Patient 25']


def test_page_is_clamped_on_view(table):
    table.go_to_page(99)
    view = table.view()
    assert view.pagination.current_page == 3
    assert table.page == 3
    assert len(view.rows) == 5


def test_page_clamped_after_filter_shrinks(table):
    table.go_to_page(3)
    table.set_records(make_records(5))
    assert table.view().pagination.current_page == 1


def test_next_and_prev_page(table):
    table.next_page()
    assert table.view().pagination.current_page == 2
    table.next_page()
    table.next_page()
    assert table.view().pagination.current_page == 3
    table.prev_page()
    table.prev_page()
    table.prev_page()
    assert table.view().pagination.current_page == 1


def test_unpaginated_table_shows_everything():
    table = TableView(make_records(), COLUMNS, paginated=False, page_size=10)
    view = table.view()
    assert len(view.rows) == 25
    assert view.pagination.total_pages == 1


def test_empty_table():
    view = TableView([], COLUMNS).view()
    assert view.is_empty
    assert view.rows == []
    assert view.pagination.current_page == 1
    assert view.status_message == 'No data available'


def test_empty_table_custom_message():
    view = TableView([{'name': 'Ann'}], COLUMNS, empty_message='No patients found').view()
    assert view.status_message != 'No patients found'

    table = TableView([{'name': 'Ann'}], COLUMNS, empty_message='No patients found')
    table.set_search('zzz')
    view = table.view()
    assert view.status_message == 'No patients found'
    assert view.to_dict()['status_message'] == 'No patients found'


def test_rows_carry_identity_and_selection(table):
    table.select_row('p-2')
    rows = table.view().rows
    assert rows[0].id == 'p-1'
    assert not rows[0].selected
    assert rows[1].selected


def test_row_identity_falls_back_to_position():
    records = [{'name': 'Bob'}, {'name': 'Ann'}]
    table = TableView(records, [TableColumn('name')])
    table.toggle_sort('name')
    assert [row.id for row in table.view().rows] == [1, 0]


def test_select_all_selects_current_page(table):
    table.go_to_page(2)
    table.select_all()
    assert [record['id'] for record in table.selected_rows] == [f'p-{i}' for i in range(11, 21)]
    table.select_all(False)
    assert table.selected_rows == []


def test_deselect_row(table):
    table.select_row('p-1')
    table.select_row('p-1', False)
    assert table.selected_rows == []


def test_set_records_clears_selection_keeps_state(table):
    table.select_row('p-1')
    table.set_search('patient')
    table.toggle_sort('age')
    table.set_records(make_records(3))
    assert table.selected_rows == []
    assert table.search_term == 'patient'
    assert table.sort_by == 'age'


def test_view_to_dict_is_json_serializable(table):
    data = table.view().to_dict()
    encoded = json.loads(json.dumps(data))
    assert encoded['table_id'] == table.table_id
    assert encoded['pagination']['total_items'] == 25
    assert 'items' not in encoded['pagination']
    assert encoded['page_numbers'] == [1, 2, 3]
    assert encoded['sort'] == {'by': None, 'dir': 'asc'}
    assert len(encoded['rows']) == 10
    assert [column['key'] for column in encoded['columns']] == ['name', 'age', 'branch.name', 'notes']


def test_export_csv_uses_all_filtered_rows(table):
    table.set_search('north')
    table.toggle_sort('name')
    table.toggle_sort('name')
    result = table.export_csv()
    assert result.kind == 'csv'
    lines = result.content.lstrip('﻿').split('\n')
    assert lines[0] == 'Name,Age,Branch,Notes'
    assert len(lines) == 14  # header + 13 odd-numbered patients
    assert lines[1].startswith('Patient 25,')


def test_export_csv_empty_returns_notice():
    result = TableView([], COLUMNS).export_csv()
    assert not result.ok
    assert result.notice == 'No data to export'


def test_export_csv_after_search_with_no_hits(table):
    table.set_search('nobody')
    result = table.export_csv()
    assert result.kind == 'error'


def test_export_pdf_fallback(monkeypatch, table):
    import helpers.export_helpers as export_helpers
    monkeypatch.setattr(export_helpers, 'pdf_engine_available', lambda: False)
    result = table.export_pdf()
    assert result.kind == 'print'
    assert result.notice
    assert f'<table id="{table.table_id}">' in result.content


def test_print_document(table):
    table.set_search('patient 0')
    result = table.print_document()
    assert result.kind == 'print'
    assert '<title>Patients</title>' in result.content
    assert 'Patient 09' in result.content
    assert 'Patient 10' not in result.content
