"""
Template helpers for clinic tables.

Column specifications, cell/row containers, HTML sanitization and the cell
formatters used by the column presets.
"""

# Data structures
from .data_structures import (
    TableColumn,
    TableCell,
    TableRow,
    build_table_row,
    validate_columns,
    exportable_columns
)

# Formatters
from .formatters import (
    format_badge,
    format_currency,
    format_status_text,
    format_status_badge,
    format_phone_link,
    format_date_cell,
    format_count_message,
    truncate_text
)

# Sanitization
from .sanitization import (
    sanitize_html
)

__all__ = [
    # Data structures
    'TableColumn',
    'TableCell',
    'TableRow',
    'build_table_row',
    'validate_columns',
    'exportable_columns',
    # Formatters
    'format_badge',
    'format_currency',
    'format_status_text',
    'format_status_badge',
    'format_phone_link',
    'format_date_cell',
    'format_count_message',
    'truncate_text',
    # Sanitization
    'sanitize_html',
]
