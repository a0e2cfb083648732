"""
Parameter validation helper utilities.

Validates the query parameters table endpoints accept.
"""
from typing import Tuple, Optional, List
from flask import Response
from constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, SORT_DIRECTIONS, EXPORT_FORMATS
from helpers.response_helpers import error_response as create_error_response
from helpers.template.data_structures import TableColumn


def validate_page_size_param(
    request_args,
    param_name: str = 'page_size',
    default: int = DEFAULT_PAGE_SIZE,
    min_value: int = 1,
    max_value: int = MAX_PAGE_SIZE
) -> Tuple[Optional[int], Optional[Tuple[Response, int]]]:
    """
    Validate and clamp a page size parameter from request arguments.

    Args:
        request_args: Flask request.args object
        param_name: Name of the parameter to validate
        default: Default value if parameter not provided
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive)

    Returns:
        Tuple of (validated_value, error_response)
        - (int, None) if validation succeeds (out of range values are clamped)
        - (None, Response) if the value is not a number

    Usage:
        page_size, error = validate_page_size_param(request.args)
        if error:
            return error
    """
    try:
        value = int(request_args.get(param_name, default))
        value = max(min_value, min(value, max_value))
        return value, None
    except (ValueError, TypeError):
        return None, create_error_response(f'Invalid {param_name} parameter')


def validate_page_param(
    request_args,
    param_name: str = 'page',
    default: int = 1,
    max_page: int = 10000
) -> Tuple[Optional[int], Optional[Tuple[Response, int]]]:
    """
    Validate and sanitize a page number parameter from request arguments.

    Pages beyond the last one are not an error here; the paginator clamps
    them.

    Args:
        request_args: Flask request.args object
        param_name: Name of the parameter to validate (default: 'page')
        default: Default value if parameter not provided (default: 1)
        max_page: Maximum allowed page number

    Returns:
        Tuple of (validated_value, error_response)
        - (int, None) if validation succeeds
        - (None, Response) if validation fails

    Examples:
        >>> # request.args.get('page') = '0'
        >>> page, error = validate_page_param(request.args)
        >>> # page = None, error = <Response with 400 status>
    """
    raw_value = request_args.get(param_name)
    if raw_value is None or raw_value == '':
        return default, None

    try:
        value = int(raw_value)
        if value < 1:
            return None, create_error_response(f'{param_name.capitalize()} must be at least 1')
        if value > max_page:
            return None, create_error_response(f'{param_name.capitalize()} exceeds maximum allowed value of {max_page}')
        return value, None
    except (ValueError, TypeError):
        return None, create_error_response(f'Invalid {param_name} parameter: must be a positive integer')


def validate_sort_params(
    request_args,
    columns: List[TableColumn]
) -> Tuple[Optional[str], str]:
    """
    Read sort_by/sort_dir, ignoring unknown or unsortable columns.

    Invalid values never fail the request; they fall back to "unsorted"
    and ascending.

    Returns:
        (column_key or None, 'asc'|'desc')
    """
    sortable_keys = {column.key for column in columns if column.sortable}
    sort_by = request_args.get('sort_by') or None
    if sort_by not in sortable_keys:
        sort_by = None

    sort_dir = (request_args.get('sort_dir') or 'asc').lower()
    if sort_dir not in SORT_DIRECTIONS:
        sort_dir = 'asc'
    return sort_by, sort_dir


def validate_export_format(
    request_args,
    param_name: str = 'format'
) -> Tuple[Optional[str], Optional[Tuple[Response, int]]]:
    """
    Validate the export format parameter (csv or pdf, default csv).
    """
    export_format = (request_args.get(param_name) or 'csv').lower()
    if export_format not in EXPORT_FORMATS:
        return None, create_error_response(
            f"Unsupported export format '{export_format}'. Use one of: {', '.join(EXPORT_FORMATS)}"
        )
    return export_format, None
