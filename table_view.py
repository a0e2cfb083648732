"""
Table orchestrator: holds search, sort, page and selection state for one
table and derives the visible view from a record collection.

Usage:
    from table_view import TableView
    from helpers.table_columns import get_patient_columns

    table = TableView(patients, get_patient_columns(), title='Patients')
    table.set_search('ann')
    table.toggle_sort('name')
    view = table.view()
    csv_result = table.export_csv()
"""
import secrets
from typing import Any, Dict, Iterable, List, Optional, Sequence

from constants import DEFAULT_PAGE_SIZE, DEFAULT_TABLE_TITLE, EMPTY_TABLE_MESSAGE
from error_handler import ExportError, log_and_suppress
from helpers.export_helpers import ExportResult, export_csv, export_pdf, print_records
from helpers.pagination_helpers import PageResult, paginate_records, generate_page_numbers
from helpers.record_helpers import row_identity
from helpers.search_helpers import filter_records
from helpers.sorting_helpers import sort_records
from helpers.template import TableColumn, TableRow, build_table_row, validate_columns, format_count_message
from logging_helper import LoggingHelper, LogType

logger = LoggingHelper.get_logger(LogType.MAIN)


def new_table_id() -> str:
    """Opaque per-table handle, e.g. 'datatable-3f9a1c0b7e21'."""
    return f"datatable-{secrets.token_hex(6)}"


class DerivedView:
    """
    Read-only snapshot of what a table currently shows.

    Args:
        table_id: Handle of the table this view was derived from
        title: Table title
        columns: Column specifications
        rows: TableRow objects for the visible page
        records: The raw records on the visible page
        pagination: PageResult for the visible page
        sort_by: Sorted column key or None
        sort_dir: 'asc' or 'desc'
        search: Active search term ('' when not searching)
        empty_message: Status text for an empty view
    """

    def __init__(self, table_id: str, title: str, columns: List[TableColumn],
                 rows: List[TableRow], records: List[Dict[str, Any]], pagination: PageResult,
                 sort_by: Optional[str], sort_dir: str, search: str,
                 empty_message: str = EMPTY_TABLE_MESSAGE):
        self.table_id = table_id
        self.title = title
        self.columns = columns
        self.rows = rows
        self.records = records
        self.pagination = pagination
        self.sort_by = sort_by
        self.sort_dir = sort_dir
        self.search = search
        self.empty_message = empty_message

    @property
    def is_empty(self) -> bool:
        return self.pagination.total_items == 0

    @property
    def page_numbers(self) -> List[Any]:
        return generate_page_numbers(self.pagination.current_page, self.pagination.total_pages)

    @property
    def status_message(self) -> str:
        if self.is_empty:
            return self.empty_message
        return format_count_message(len(self.records), self.pagination.total_items,
                                    filtered=bool(self.search))

    def to_dict(self) -> Dict[str, Any]:
        pagination = self.pagination.to_dict()
        pagination.pop('items')
        return {
            'table_id': self.table_id,
            'title': self.title,
            'columns': [column.to_dict() for column in self.columns],
            'rows': [row.to_dict() for row in self.rows],
            'pagination': pagination,
            'page_numbers': self.page_numbers,
            'sort': {'by': self.sort_by, 'dir': self.sort_dir},
            'search': self.search,
            'status_message': self.status_message,
            'empty': self.is_empty
        }


class TableView:
    """
    One table session over a record collection.

    Derivation order is always filter, then sort, then paginate. Exports work
    on the filtered and sorted collection before pagination.

    Args:
        records: Record collection (list of mappings)
        columns: Column specifications; empty means every top-level field
        title: Table title used in exports and the print document
        page_size: Rows per page
        searchable: Enables the search box
        sortable: Enables header sorting
        paginated: When False every row is on one page
        table_id: Optional handle; generated when omitted
        empty_message: Status text shown when no row matches
    """

    def __init__(self, records: Optional[Sequence[Dict[str, Any]]] = None,
                 columns: Optional[Iterable[TableColumn]] = None, *,
                 title: str = DEFAULT_TABLE_TITLE, page_size: int = DEFAULT_PAGE_SIZE,
                 searchable: bool = True, sortable: bool = True, paginated: bool = True,
                 table_id: Optional[str] = None,
                 empty_message: str = EMPTY_TABLE_MESSAGE):
        self.columns = validate_columns(columns or [])
        self.title = title or DEFAULT_TABLE_TITLE
        self.page_size = page_size
        self.searchable = searchable
        self.sortable = sortable
        self.paginated = paginated
        self.table_id = table_id or new_table_id()
        self.empty_message = empty_message or EMPTY_TABLE_MESSAGE

        self.search_term = ''
        self.sort_by: Optional[str] = None
        self.sort_dir = 'asc'
        self.page = 1
        self._selected = set()
        self._records: List[Dict[str, Any]] = []
        self._positions: Dict[int, int] = {}
        self.set_records(records)

    # =========================================================================
    # State changes
    # =========================================================================

    def set_records(self, records: Optional[Sequence[Dict[str, Any]]]) -> None:
        """Replace the collection. Search, sort and page are kept; selection is cleared."""
        self._records = list(records or [])
        self._positions = {id(record): index for index, record in enumerate(self._records)}
        self._selected.clear()

    def set_search(self, term: Optional[str]) -> None:
        self.search_term = term or ''
        self.page = 1

    def clear_search(self) -> None:
        self.set_search('')

    def toggle_sort(self, column_key: str) -> None:
        """
        Sort by a column, or flip the direction when it is already sorted.

        Ignored when sorting is disabled or the column is unknown or not
        sortable.
        """
        if not self.sortable:
            return
        column = self._column(column_key)
        if self.columns and (column is None or not column.sortable):
            logger.debug(f"Ignoring sort on non-sortable column '{column_key}'")
            return

        if self.sort_by == column_key:
            self.sort_dir = 'desc' if self.sort_dir == 'asc' else 'asc'
        else:
            self.sort_by = column_key
            self.sort_dir = 'asc'
        self.page = 1

    def go_to_page(self, page: Any) -> None:
        self.page = page

    def next_page(self) -> None:
        pagination = self._paginate(self._derived_records())
        if pagination.has_next_page:
            self.page = pagination.current_page + 1

    def prev_page(self) -> None:
        pagination = self._paginate(self._derived_records())
        self.page = max(1, pagination.current_page - 1)

    # =========================================================================
    # Derivation
    # =========================================================================

    def _column(self, key: str) -> Optional[TableColumn]:
        for column in self.columns:
            if column.key == key:
                return column
        return None

    def _search_fields(self) -> List[str]:
        return [column.key for column in self.columns if column.searchable]

    def _active_search(self) -> str:
        if not self.searchable:
            return ''
        return self.search_term.strip()

    def _derived_records(self) -> List[Dict[str, Any]]:
        """Filtered and sorted collection, before pagination."""
        filtered = filter_records(self._records, self._active_search(), self._search_fields())
        if self.sortable and self.sort_by:
            return sort_records(filtered, self.sort_by, self.sort_dir)
        return list(filtered)

    def _paginate(self, records: List[Dict[str, Any]]) -> PageResult:
        if not self.paginated:
            return paginate_records(records, 1, max(len(records), 1))
        return paginate_records(records, self.page, self.page_size)

    def _display_columns(self) -> List[TableColumn]:
        if self.columns:
            return self.columns
        if not self._records:
            return []
        return [TableColumn(key) for key in self._records[0].keys()]

    def row_id(self, record: Dict[str, Any]) -> Any:
        """Row identity: the record id, else its position in the collection."""
        return row_identity(record, self._positions.get(id(record), -1))

    def view(self) -> DerivedView:
        """Derive the visible page: filter -> sort -> paginate."""
        pagination = self._paginate(self._derived_records())
        self.page = pagination.current_page

        columns = self._display_columns()
        rows = []
        for record in pagination.items:
            record_id = self.row_id(record)
            rows.append(build_table_row(record, columns, record_id, record_id in self._selected))

        return DerivedView(
            table_id=self.table_id,
            title=self.title,
            columns=columns,
            rows=rows,
            records=pagination.items,
            pagination=pagination,
            sort_by=self.sort_by,
            sort_dir=self.sort_dir,
            search=self._active_search(),
            empty_message=self.empty_message
        )

    # =========================================================================
    # Selection
    # =========================================================================

    def select_row(self, row_id: Any, checked: bool = True) -> None:
        if checked:
            self._selected.add(row_id)
        else:
            self._selected.discard(row_id)

    def select_all(self, checked: bool = True) -> None:
        """Select or clear every row on the current page."""
        page_ids = [self.row_id(record) for record in self._paginate(self._derived_records()).items]
        for row_id in page_ids:
            self.select_row(row_id, checked)

    @property
    def selected_rows(self) -> List[Dict[str, Any]]:
        return [record for record in self._records if self.row_id(record) in self._selected]

    # =========================================================================
    # Export
    # =========================================================================

    def _export(self, export_func, export_format: str) -> ExportResult:
        try:
            return export_func(self._derived_records(), self._display_columns(), self.title)
        except ExportError as e:
            log_and_suppress(e, f"{export_format.upper()} export of '{self.title}' failed",
                             level='warning', log_traceback=False)
            return ExportResult.failure(str(e))

    def export_csv(self) -> ExportResult:
        """CSV of every filtered and sorted row (not just the visible page)."""
        return self._export(export_csv, 'csv')

    def export_pdf(self) -> ExportResult:
        """PDF of every filtered and sorted row; falls back to print with a notice."""
        return self._export(
            lambda records, columns, title: export_pdf(records, columns, title, self.table_id),
            'pdf'
        )

    def print_document(self) -> ExportResult:
        return self._export(
            lambda records, columns, title: print_records(records, columns, title, self.table_id),
            'print'
        )
