"""
Formatting functions for clinic table cells.

Renderers return small HTML fragments for the UI; the *_text variants
return the plain values used by exports.
"""

import html
from decimal import Decimal, InvalidOperation
from typing import Any

from constants import APPOINTMENT_STATUSES, PAYMENT_STATUSES
from helpers.time_helpers import format_date


def format_badge(text: str, badge_type: str = 'default') -> str:
    """Format a badge/pill element."""
    badge_classes = {
        'success': 'badge-success',
        'error': 'badge-error',
        'warning': 'badge-warning',
        'info': 'badge-info',
        'count': 'badge-count'
    }

    if badge_type not in badge_classes and badge_type != 'default':
        badge_type = 'default'

    css_class = badge_classes.get(badge_type, 'badge')
    escaped_text = html.escape(str(text))
    return f'<span class="badge {css_class}">{escaped_text}</span>'


def format_currency(amount: Any, symbol: str = '$') -> str:
    """
    Format a money amount for display.

    The clinic API sends money as decimal strings; anything that is not a
    number renders as zero.

    Example:
        >>> format_currency('1234.5')
        '$1,234.50'
        >>> format_currency(None)
        '$0.00'
        >>> format_currency(-5)
        '-$5.00'
    """
    if amount is None or isinstance(amount, bool):
        return f'{symbol}0.00'
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return f'{symbol}0.00'
    if not value.is_finite():
        return f'{symbol}0.00'

    sign = '-' if value < 0 else ''
    return f'{sign}{symbol}{abs(value):,.2f}'


def format_status_text(status: Any, kind: str = 'appointment') -> str:
    """
    Human label for an appointment or payment status code.

    Example:
        >>> format_status_text('NO_SHOW')
        'No Show'
        >>> format_status_text('PARTIAL', 'payment')
        'Partial'
    """
    if not status:
        return ''
    labels = PAYMENT_STATUSES if kind == 'payment' else APPOINTMENT_STATUSES
    code = str(status).upper()
    return labels.get(code, code.replace('_', ' ').title())


def format_status_badge(status: Any, kind: str = 'appointment') -> str:
    """
    Format an appointment/payment status as a badge.

    Example:
        >>> format_status_badge('COMPLETED')
        '<span class="badge badge-success">Completed</span>'
    """
    badge_types = {
        'COMPLETED': 'success',
        'PAID': 'success',
        'CONFIRMED': 'info',
        'SCHEDULED': 'info',
        'IN_PROGRESS': 'warning',
        'PARTIAL': 'warning',
        'PENDING': 'warning',
        'CANCELLED': 'error',
        'NO_SHOW': 'error',
        'REFUNDED': 'default',
    }
    code = str(status or '').upper()
    return format_badge(format_status_text(status, kind) or '-', badge_types.get(code, 'default'))


def format_phone_link(phone: Any) -> str:
    """Format a phone number as a tel: link."""
    if not phone:
        return '-'
    escaped = html.escape(str(phone))
    return f'<a href="tel:{escaped}">{escaped}</a>'


def format_date_cell(value: Any, fmt: str = 'short') -> str:
    """Date cell renderer; blank dates show as a dash."""
    if value is None or value == '':
        return '-'
    return html.escape(format_date(value, fmt))


def truncate_text(text: str, max_length: int = 80, suffix: str = '...') -> str:
    """
    Truncate text with optional suffix.

    Args:
        text: The text to truncate
        max_length: Maximum length before truncation
        suffix: Suffix to add when truncating

    Returns:
        Truncated text with suffix if needed
    """
    if not text or not isinstance(text, str):
        return text or ''

    if len(text) <= max_length:
        return text

    return text[:max_length] + suffix


def format_count_message(shown: int, total: int, item_type: str = 'results',
                         filtered: bool = False) -> str:
    """
    Status line shown above a table.

    Example:
        >>> format_count_message(10, 42)
        'Showing 10 of 42 results'
        >>> format_count_message(2, 2, filtered=True)
        'Showing 2 of 2 results (filtered)'
    """
    message = f"Showing {shown:,} of {total:,} {item_type}"
    if filtered:
        message += " (filtered)"
    return message
