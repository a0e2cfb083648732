"""
Helper utilities for clinic tables.
Sort, search, pagination and export engines plus their shared utilities.
"""

# Export all helpers for easy importing
from .record_helpers import resolve_path, display_string, row_identity
from .sorting_helpers import sort_records, sort_table_data
from .search_helpers import filter_records, get_unique_values, apply_filters
from .pagination_helpers import PageResult, paginate_records, generate_page_numbers
from .export_helpers import ExportResult, records_to_csv, export_csv, export_pdf, render_print_document
from .response_helpers import error_response, success_response, export_response
from .time_helpers import parse_timestamp, format_date
from .validation_helpers import validate_page_param

__all__ = [
    # Record helpers
    'resolve_path',
    'display_string',
    'row_identity',
    # Sorting helpers
    'sort_records',
    'sort_table_data',
    # Search helpers
    'filter_records',
    'get_unique_values',
    'apply_filters',
    # Pagination helpers
    'PageResult',
    'paginate_records',
    'generate_page_numbers',
    # Export helpers
    'ExportResult',
    'records_to_csv',
    'export_csv',
    'export_pdf',
    'render_print_document',
    # Response helpers
    'error_response',
    'success_response',
    'export_response',
    # Time helpers
    'parse_timestamp',
    'format_date',
    # Validation helpers
    'validate_page_param',
]
