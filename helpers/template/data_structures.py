"""
Data structures for clinic tables.

Column specifications plus the cell/row containers the table views hand to
the front end.
"""

import html
from typing import Any, Callable, Dict, Iterable, List, Optional

from error_handler import ValidationError
from helpers.record_helpers import resolve_path, display_string
from .sanitization import sanitize_html

RenderFn = Callable[[Any, Dict[str, Any]], Any]


class TableColumn:
    """
    Describes one column of a table: which record field it shows and how.

    Args:
        key: Record key or dot-path (e.g. 'branch.name'); unique per table
        label: Display name for the column header (falls back to key)
        sortable: Whether clicking the header sorts by this column
        searchable: Whether the search box looks at this column
        exportable: Whether CSV/PDF/print output includes this column
        render: Optional (value, record) -> HTML used only by the UI
        export_value: Optional (value, record) -> plain value used by exports
        resizable: Whether this column can be resized by dragging
        width: Optional CSS width value (e.g., "200px", "20%")
    """

    def __init__(self, key: str, label: Optional[str] = None, sortable: bool = True,
                 searchable: bool = True, exportable: bool = True,
                 render: Optional[RenderFn] = None, export_value: Optional[RenderFn] = None,
                 resizable: bool = True, width: Optional[str] = None):
        if not key:
            raise ValidationError("Column key must be a non-empty string")
        self.key = key
        self.label = label or key
        self.sortable = sortable
        self.searchable = searchable
        self.exportable = exportable
        self.render = render
        self.export_value = export_value
        self.resizable = resizable
        self.width = width

    def value_for(self, record: Dict[str, Any]) -> Any:
        """Resolve this column's raw value from a record."""
        return resolve_path(record, self.key)

    def export_for(self, record: Dict[str, Any]) -> Any:
        """Value written to exports: export_value() when set, else the raw value."""
        value = self.value_for(record)
        if self.export_value is not None:
            return self.export_value(value, record)
        return value

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'label': self.label,
            'sortable': self.sortable,
            'searchable': self.searchable,
            'exportable': self.exportable,
            'resizable': self.resizable,
            'width': self.width
        }

    def __repr__(self) -> str:
        return f"TableColumn({self.key!r}, {self.label!r})"


def validate_columns(columns: Iterable[TableColumn]) -> List[TableColumn]:
    """
    Check a column list and return it as a list.

    Raises:
        ValidationError: if an entry is not a TableColumn or a key repeats
    """
    checked = []
    seen = set()
    for column in columns:
        if not isinstance(column, TableColumn):
            raise ValidationError(f"Expected TableColumn, got {type(column).__name__}")
        if column.key in seen:
            raise ValidationError(f"Duplicate column key: {column.key}")
        seen.add(column.key)
        checked.append(column)
    return checked


def exportable_columns(columns: Iterable[TableColumn]) -> List[TableColumn]:
    return [column for column in columns if column.exportable]


class TableCell:
    """
    Represents a table cell with value and optional formatting.

    Automatically sanitizes HTML content to prevent XSS attacks while preserving
    safe formatting elements like links, spans, and basic text formatting.

    Args:
        value: The plain text value of the cell
        display_html: Optional HTML content (will be sanitized)
        style: Optional CSS style string
        title: Optional title attribute for hover tooltips
    """

    def __init__(self, value: Any, display_html: Optional[str] = None,
                 style: Optional[str] = None, title: Optional[str] = None):
        self.value = display_string(value)

        if display_html:
            self.html = sanitize_html(display_html)
        else:
            self.html = None

        self.style = html.escape(style) if style else None
        self.title = html.escape(title) if title else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'value': self.value,
            'html': self.html,
            'style': self.style,
            'title': self.title
        }


class TableRow:
    """
    Represents a table row with cells and selection state.

    Args:
        cells: List of TableCell objects for each column
        row_id: Row identity (record id, or position when the record has none)
        selected: Whether the row is currently selected
    """

    def __init__(self, cells: List[TableCell], row_id: Any = None, selected: bool = False):
        self.cells = cells
        self.id = row_id
        self.selected = selected

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'selected': self.selected,
            'cells': [cell.to_dict() for cell in self.cells]
        }


def build_table_row(record: Dict[str, Any], columns: List[TableColumn], row_id: Any,
                    selected: bool = False) -> TableRow:
    """Build a TableRow, applying each column's UI renderer when it has one."""
    cells = []
    for column in columns:
        value = column.value_for(record)
        display_html = column.render(value, record) if column.render else None
        cells.append(TableCell(value, display_html))
    return TableRow(cells, row_id=row_id, selected=selected)
