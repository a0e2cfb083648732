"""
Table routes blueprint: derived table views, column metadata, exports and
print documents for clinic resources.
"""
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, Response, request

from constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from error_handler import APIError, AuthenticationError
from helpers.pagination_helpers import build_pagination_url
from helpers.response_helpers import error_response, export_response, success_response
from helpers.table_columns import get_table_preset
from helpers.validation_helpers import (
    validate_export_format,
    validate_page_param,
    validate_page_size_param,
    validate_sort_params
)
from logging_helper import LoggingHelper, LogType
from table_view import DerivedView, TableView

logger = LoggingHelper.get_logger(LogType.MAIN)

# Create blueprint
bp = Blueprint('tables', __name__)

# Query parameters consumed by the table itself; anything else is forwarded
# to the clinic API (e.g. branchId, date ranges)
TABLE_ARGS = {'search', 'sort_by', 'sort_dir', 'page', 'page_size', 'format'}

# Record source will be injected
_record_source = None
_default_page_size = DEFAULT_PAGE_SIZE
_max_page_size = MAX_PAGE_SIZE


def init_table_routes(record_source, default_page_size: int = DEFAULT_PAGE_SIZE,
                      max_page_size: int = MAX_PAGE_SIZE):
    """
    Initialize the table routes with a record source.

    Args:
        record_source: Object with get_records(resource, params) such as
                       ClinicAPI; None answers every table request with 503
        default_page_size: Page size when the request does not give one
        max_page_size: Upper bound for requested page sizes
    """
    global _record_source, _default_page_size, _max_page_size
    _record_source = record_source
    _default_page_size = default_page_size
    _max_page_size = max_page_size


def _upstream_params() -> Dict[str, Any]:
    return {key: value for key, value in request.args.items() if key not in TABLE_ARGS}


def _load_table(resource: str) -> Tuple[Optional[TableView], Optional[Tuple[Response, int]]]:
    """
    Fetch records for a resource and apply search/sort from the query string.

    Returns:
        (TableView, None) on success or (None, error_response)
    """
    preset = get_table_preset(resource)
    if preset is None:
        return None, error_response(f"Unknown table: {resource}", 404)

    if _record_source is None:
        return None, error_response("Clinic API is not configured", 503)

    try:
        records = _record_source.get_records(resource, _upstream_params())
    except AuthenticationError as e:
        return None, error_response(e.message, 401)
    except APIError as e:
        logger.error(f"Failed to load '{resource}' records: {e.message}")
        return None, error_response(f"Failed to load {resource}: {e.message}", 502)

    table = TableView(records, preset['columns'], title=preset['title'],
                      page_size=_default_page_size)

    search = request.args.get('search', '')
    if search:
        table.set_search(search)

    sort_by, sort_dir = validate_sort_params(request.args, table.columns)
    if sort_by:
        table.sort_by, table.sort_dir = sort_by, sort_dir

    return table, None


def _page_links(view: DerivedView) -> Dict[str, Optional[str]]:
    """Next/previous page URLs carrying the current search, sort and page size."""
    filters = dict(request.args)
    filters.pop('page', None)
    pagination = view.pagination
    return {
        'next': build_pagination_url(request.path, pagination.current_page + 1, filters)
        if pagination.has_next_page else None,
        'prev': build_pagination_url(request.path, pagination.current_page - 1, filters)
        if pagination.has_prev_page else None
    }


@bp.route('/api/tables/<resource>', methods=['GET'])
def get_table(resource: str) -> Response:
    """
    Derived view of a resource table.

    Query args: search, sort_by, sort_dir, page, page_size.
    """
    page, error = validate_page_param(request.args)
    if error:
        return error
    page_size, error = validate_page_size_param(
        request.args, default=_default_page_size, max_value=_max_page_size)
    if error:
        return error

    table, error = _load_table(resource)
    if error:
        return error

    table.page_size = page_size
    table.go_to_page(page)
    view = table.view()
    return success_response({'view': view.to_dict(), 'links': _page_links(view)})


@bp.route('/api/tables/<resource>/columns', methods=['GET'])
def get_table_columns(resource: str) -> Response:
    """Column metadata for a resource table."""
    preset = get_table_preset(resource)
    if preset is None:
        return error_response(f"Unknown table: {resource}", 404)
    return success_response({
        'title': preset['title'],
        'columns': [column.to_dict() for column in preset['columns']]
    })


@bp.route('/api/tables/<resource>/export', methods=['GET'])
def export_table(resource: str) -> Response:
    """
    Export the filtered and sorted table as CSV or PDF.

    When PDF is unavailable the print document is returned instead, with the
    reason in the X-Export-Notice header.
    """
    export_format, error = validate_export_format(request.args)
    if error:
        return error

    table, error = _load_table(resource)
    if error:
        return error

    result = table.export_pdf() if export_format == 'pdf' else table.export_csv()
    return export_response(result)


@bp.route('/tables/<resource>/print', methods=['GET'])
def print_table(resource: str) -> Response:
    """Standalone print document for the filtered and sorted table."""
    table, error = _load_table(resource)
    if error:
        return error

    return export_response(table.print_document())
