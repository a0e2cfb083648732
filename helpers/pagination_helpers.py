"""
Pagination helper utilities.

Slices table data into pages and builds the page controls shown under a
table.
"""
import math
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import urlencode


class PageResult:
    """
    One page of a collection plus the metadata the page controls need.

    Args:
        items: Records on the current page
        total_pages: Number of pages (0 for an empty collection)
        current_page: Clamped 1-based page number
        total_items: Size of the whole collection
    """

    def __init__(self, items: List[Any], total_pages: int, current_page: int, total_items: int):
        self.items = items
        self.total_pages = total_pages
        self.current_page = current_page
        self.total_items = total_items

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': self.items,
            'total_pages': self.total_pages,
            'current_page': self.current_page,
            'total_items': self.total_items,
            'has_next_page': self.has_next_page,
            'has_prev_page': self.has_prev_page
        }


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def paginate_records(records: Optional[Sequence[Any]], page: Any = 1, page_size: Any = 10) -> PageResult:
    """
    Slice records into one page.

    Never raises for odd input: a page size below 1 (or not a number) is
    treated as 1, a page that is not a number as 1, and the page is clamped
    into [1, total_pages].

    Args:
        records: Filtered/sorted records
        page: Requested 1-based page
        page_size: Items per page

    Returns:
        PageResult for the clamped page

    Examples:
        >>> result = paginate_records(['a', 'b', 'c'], page=1, page_size=2)
        >>> result.items, result.total_pages, result.has_next_page
        (['a', 'b'], 2, True)

        >>> paginate_records([], page=5).current_page
        1
    """
    rows = list(records) if records is not None else []
    page_size = max(1, _as_int(page_size, 1))
    page = _as_int(page, 1)

    total_items = len(rows)
    total_pages = math.ceil(total_items / page_size)
    current_page = max(1, min(page, total_pages)) if total_pages else 1

    start = (current_page - 1) * page_size
    end = start + page_size
    return PageResult(rows[start:end], total_pages, current_page, total_items)


def generate_page_numbers(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """
    Generate smart pagination numbers with ellipsis for large page counts.

    Logic:
    - If 10 or fewer pages: show all page numbers
    - If more than 10 pages: show first, last, and pages around current with ellipsis

    Args:
        current_page: Current page number (1-indexed)
        total_pages: Total number of pages

    Returns:
        List of page numbers and ellipsis strings
        Example: [1, '...', 8, 9, 10, 11, 12, '...', 50]

    Examples:
        >>> generate_page_numbers(1, 5)
        [1, 2, 3, 4, 5]

        >>> generate_page_numbers(10, 50)
        [1, '...', 8, 9, 10, 11, 12, '...', 50]

        >>> generate_page_numbers(1, 50)
        [1, 2, 3, '...', 50]
    """
    if total_pages < 1:
        return [1]

    current_page = max(1, min(current_page, total_pages))

    if total_pages <= 10:
        return list(range(1, total_pages + 1))

    pages = {1, total_pages}
    start = max(1, current_page - 2)
    end = min(total_pages, current_page + 2)
    pages.update(range(start, end + 1))

    sorted_pages = sorted(pages)

    result = []
    for i, page in enumerate(sorted_pages):
        if i > 0 and sorted_pages[i] - sorted_pages[i-1] > 1:
            result.append('...')
        result.append(page)

    return result


def build_pagination_url(base_path: str, page: int, filters: Optional[Dict[str, Any]] = None) -> str:
    """
    Build a pagination URL with query parameters.

    Args:
        base_path: Base URL path (e.g., '/api/tables/patients')
        page: Page number
        filters: Optional search/sort parameters to carry over

    Returns:
        Complete URL with query parameters

    Examples:
        >>> build_pagination_url('/api/tables/patients', 2)
        '/api/tables/patients?page=2'

        >>> build_pagination_url('/api/tables/patients', 2, {'search': 'ann', 'sort_by': ''})
        '/api/tables/patients?page=2&search=ann'
    """
    params = {'page': str(page)}

    if filters:
        for key, value in filters.items():
            if value is not None and value != '':
                params[key] = str(value)

    return f"{base_path}?{urlencode(params)}"
