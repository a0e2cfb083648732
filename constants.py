"""
Common constants used across the clinic tables service.
"""

# Values that are considered "false" for boolean environment variables
# Include empty string to handle unset or blank environment variables
FALSE_VALUES = {'false', '0', 'no', 'off', ''}

# Table defaults
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 500
SORT_DIRECTIONS = ('asc', 'desc')
DEFAULT_TABLE_TITLE = 'Data Table'
EMPTY_TABLE_MESSAGE = 'No data available'

# Export formats served by the export endpoint
EXPORT_FORMATS = ('csv', 'pdf')
CSV_MIMETYPE = 'text/csv; charset=utf-8'
PDF_MIMETYPE = 'application/pdf'
HTML_MIMETYPE = 'text/html; charset=utf-8'
UTF8_BOM = '﻿'

# Clinic REST API
API_PATH_SUFFIX = '/api'
DEFAULT_API_TIMEOUT = 10  # seconds
DEFAULT_MAX_RETRIES = 3
RETRY_BACKOFF_FACTOR = 1.0  # 1s, 2s, 4s ...
RETRY_BACKOFF_MAX = 10.0
RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

# Public resource name -> path under the API base URL
RESOURCE_PATHS = {
    'patients': 'patients',
    'appointments': 'appointments',
    'payments': 'payments',
    'treatments': 'treatments',
    'branches': 'branches',
    'users': 'users',
}

# Appointment / payment status labels shown in table badges
APPOINTMENT_STATUSES = {
    'SCHEDULED': 'Scheduled',
    'CONFIRMED': 'Confirmed',
    'IN_PROGRESS': 'In Progress',
    'COMPLETED': 'Completed',
    'CANCELLED': 'Cancelled',
    'NO_SHOW': 'No Show',
}

PAYMENT_STATUSES = {
    'PAID': 'Paid',
    'PARTIAL': 'Partial',
    'PENDING': 'Pending',
    'REFUNDED': 'Refunded',
}
