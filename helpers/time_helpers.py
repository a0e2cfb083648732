"""
Time utility functions for clinic tables.

Parses the timestamps the clinic API returns and formats dates for display
and export.
"""
from datetime import date, datetime, timezone
from typing import Any, Optional, Union


def parse_timestamp(timestamp_str: Union[str, datetime, date]) -> datetime:
    """
    Parse timestamp string into datetime object, or return datetime if already a datetime.

    Handles ISO format timestamps, timestamps with space instead of 'T' and
    the trailing 'Z' the clinic API (JavaScript toISOString) emits. Plain
    date objects are promoted to midnight.

    Args:
        timestamp_str: Timestamp string in ISO format (or with space instead of 'T'),
                      or a datetime/date object

    Returns:
        datetime object

    Raises:
        ValueError: If timestamp_str is None, empty, or cannot be parsed

    Examples:
        >>> parse_timestamp("2024-01-15T12:30:45")
        datetime(2024, 1, 15, 12, 30, 45)

        >>> parse_timestamp("2024-01-15 12:30:45")
        datetime(2024, 1, 15, 12, 30, 45)

        >>> parse_timestamp("2024-01-15T12:30:45.000Z")
        datetime(2024, 1, 15, 12, 30, 45, tzinfo=timezone.utc)

        >>> parse_timestamp(None)
        ValueError: Invalid timestamp: None
    """
    if timestamp_str is None:
        raise ValueError("Invalid timestamp: None")

    if isinstance(timestamp_str, datetime):
        return timestamp_str
    if isinstance(timestamp_str, date):
        return datetime(timestamp_str.year, timestamp_str.month, timestamp_str.day)

    if not isinstance(timestamp_str, str):
        raise ValueError(f"Invalid timestamp: expected string or datetime, got {type(timestamp_str).__name__}")
    value = timestamp_str.strip()
    if not value:
        raise ValueError("Invalid timestamp: empty string")

    if value.endswith(('Z', 'z')):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value.replace(' ', 'T', 1))


def to_epoch(value: Any) -> Optional[float]:
    """
    Convert a date-like value to a POSIX timestamp.

    Naive datetimes are treated as UTC so mixed naive/aware values still
    compare. Returns None for anything parse_timestamp rejects.

    Examples:
        >>> to_epoch("1970-01-02")
        86400.0

        >>> to_epoch("Bob") is None
        True
    """
    if not isinstance(value, (str, datetime, date)):
        return None
    try:
        parsed = parse_timestamp(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


_DATE_FORMATS = {
    'short': '%b %d, %Y',
    'long': '%B %d, %Y',
    'datetime': '%b %d, %Y, %I:%M %p',
}


def format_date(value: Any, fmt: str = 'short') -> str:
    """
    Format a date for table display.

    Args:
        value: datetime, date or ISO timestamp string
        fmt: 'short' (Jan 15, 2024), 'long' (January 15, 2024) or
             'datetime' (Jan 15, 2024, 02:30 PM); unknown formats use 'short'

    Returns:
        Formatted string, 'N/A' for empty input, 'Invalid Date' when unparseable
    """
    if value is None or value == '':
        return 'N/A'
    try:
        parsed = parse_timestamp(value)
    except ValueError:
        return 'Invalid Date'
    return parsed.strftime(_DATE_FORMATS.get(fmt, _DATE_FORMATS['short']))


def format_print_timestamp(moment: Optional[datetime] = None) -> str:
    """Format the 'Printed on' line of the print document."""
    moment = moment or datetime.now()
    return moment.strftime('%Y-%m-%d %H:%M:%S')
