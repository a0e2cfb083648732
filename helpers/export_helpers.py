"""
Export helpers for table data.

CSV serialization, the standalone print document and PDF export. PDF is
best effort: when no PDF engine is available the export falls back to the
print document and says so in the result's notice.
"""
import csv
import importlib.util
import io
import re
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from constants import CSV_MIMETYPE, PDF_MIMETYPE, HTML_MIMETYPE, UTF8_BOM, DEFAULT_TABLE_TITLE
from error_handler import ExportError, NothingToExportError, env_flag
from helpers.record_helpers import display_string, is_container, to_json_string
from helpers.template.data_structures import TableColumn, exportable_columns
from helpers.time_helpers import format_print_timestamp
from logging_helper import LoggingHelper, LogType

logger = LoggingHelper.get_logger(LogType.MAIN)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / 'templates'
PRINT_TEMPLATE = 'print_table.html'

PDF_FALLBACK_NOTICE = (
    "PDF export is not available on this server. Using print instead; "
    "choose 'Save as PDF' in the print dialog."
)
PDF_FAILED_NOTICE = "PDF export failed. Using print instead."

_jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(['html'])
)


class ExportResult:
    """
    Outcome of an export request.

    Args:
        kind: 'csv', 'pdf', 'print' or 'error'
        content: str or bytes payload (None for errors)
        filename: Suggested download filename
        mimetype: Content type of the payload
        notice: User-visible message (fallbacks and failures)
    """

    def __init__(self, kind: str, content: Any = None, filename: Optional[str] = None,
                 mimetype: Optional[str] = None, notice: Optional[str] = None):
        self.kind = kind
        self.content = content
        self.filename = filename
        self.mimetype = mimetype
        self.notice = notice

    @property
    def ok(self) -> bool:
        return self.kind != 'error'

    @property
    def is_fallback(self) -> bool:
        return self.kind == 'print' and bool(self.notice)

    @classmethod
    def failure(cls, notice: str) -> 'ExportResult':
        return cls('error', notice=notice)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'filename': self.filename,
            'mimetype': self.mimetype,
            'notice': self.notice
        }


# =============================================================================
# CSV
# =============================================================================

def format_export_value(value: Any) -> str:
    """
    Turn one resolved cell value into CSV text.

    Raises:
        ExportError: if a nested value cannot be serialized (e.g. circular)
    """
    if value is None:
        return ''
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_container(value):
        if isinstance(value, (set, frozenset)):
            value = sorted(value, key=display_string)
        try:
            return to_json_string(value)
        except (TypeError, ValueError) as e:
            raise ExportError(f"Cannot serialize cell value: {e}") from e
    return display_string(value)


def _check_exportable(records: Any) -> None:
    if not isinstance(records, (list, tuple)) or not records:
        raise NothingToExportError()


def _export_rows(records: Sequence[Mapping], columns: List[TableColumn]) -> List[List[str]]:
    return [
        [format_export_value(column.export_for(record)) for column in columns]
        for record in records
    ]


def records_to_csv(records: Sequence[Mapping], columns: Sequence[TableColumn]) -> str:
    """
    Serialize records to CSV text.

    The header uses column labels; only exportable columns are written.
    Cells containing a comma, a double quote, a carriage return or a newline
    are quoted with inner quotes doubled. Records are separated by a newline
    and the result starts with a UTF-8 byte-order mark so spreadsheet tools
    detect the encoding.

    Args:
        records: Filtered/sorted records (not just the visible page)
        columns: Column specifications

    Returns:
        CSV text including the BOM

    Raises:
        NothingToExportError: if records is empty or not a list
        ExportError: if a cell value cannot be serialized
    """
    _check_exportable(records)
    export_columns = exportable_columns(columns)

    rows = [[column.label for column in export_columns]]
    rows.extend(_export_rows(records, export_columns))
    return UTF8_BOM + '\n'.join(_csv_line(row) for row in rows)


def _csv_line(row: List[str]) -> str:
    # A '\r\n' terminator makes the writer quote cells holding either character
    buffer = io.StringIO()
    csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator='\r\n').writerow(row)
    return buffer.getvalue()[:-2]


def export_filename(base: str, extension: str, today: Optional[date] = None) -> str:
    """
    Build a download filename like 'patients_2024-01-15.csv'.

    Example:
        >>> export_filename('Patient List', 'csv', date(2024, 1, 15))
        'patient_list_2024-01-15.csv'
    """
    slug = re.sub(r'[^A-Za-z0-9_-]+', '_', base or '').strip('_').lower() or 'export'
    today = today or date.today()
    return f"{slug}_{today.isoformat()}.{extension}"


def export_csv(records: Sequence[Mapping], columns: Sequence[TableColumn],
               title: str = DEFAULT_TABLE_TITLE) -> ExportResult:
    """CSV export wrapped in an ExportResult."""
    content = records_to_csv(records, columns)
    LoggingHelper.log_export(title, 'csv', len(records))
    return ExportResult('csv', content, export_filename(title, 'csv'), CSV_MIMETYPE)


# =============================================================================
# Print
# =============================================================================

def build_print_context(records: Sequence[Mapping], columns: Sequence[TableColumn],
                        title: str = DEFAULT_TABLE_TITLE, table_id: str = 'datatable',
                        printed_at: Optional[datetime] = None) -> Dict[str, Any]:
    """Template context for the print document."""
    export_columns = exportable_columns(columns)
    return {
        'title': title,
        'table_id': table_id,
        'printed_at': format_print_timestamp(printed_at),
        'headers': [column.label for column in export_columns],
        'rows': _export_rows(list(records or []), export_columns),
    }


def render_print_document(records: Sequence[Mapping], columns: Sequence[TableColumn],
                          title: str = DEFAULT_TABLE_TITLE, table_id: str = 'datatable',
                          printed_at: Optional[datetime] = None) -> str:
    """
    Render a standalone, printable HTML document for the given rows.

    The document contains only the title, a "Printed on" line and the table,
    and opens the browser print dialog when loaded.
    """
    context = build_print_context(records, columns, title, table_id, printed_at)
    return _jinja_env.get_template(PRINT_TEMPLATE).render(**context)


def print_records(records: Sequence[Mapping], columns: Sequence[TableColumn],
                  title: str = DEFAULT_TABLE_TITLE, table_id: str = 'datatable',
                  notice: Optional[str] = None) -> ExportResult:
    """Print document wrapped in an ExportResult."""
    document = render_print_document(records, columns, title, table_id)
    LoggingHelper.log_export(title, 'print', len(records or []), notice)
    return ExportResult('print', document, export_filename(title, 'html'), HTML_MIMETYPE, notice)


# =============================================================================
# PDF
# =============================================================================

def pdf_engine_available() -> bool:
    """True when PDF export is enabled and ReportLab is installed."""
    if not env_flag('PDF_EXPORT_ENABLED', True):
        return False
    return importlib.util.find_spec('reportlab') is not None


def _render_pdf(headers: List[str], rows: List[List[str]], title: str) -> bytes:
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4, landscape
    from reportlab.lib.styles import getSampleStyleSheet
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    buffer = io.BytesIO()
    document = SimpleDocTemplate(buffer, pagesize=landscape(A4), title=title)
    styles = getSampleStyleSheet()

    table = Table([headers] + rows, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f2f2f2')),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#dddddd')),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ]))

    document.build([
        Paragraph(title, styles['Title']),
        Paragraph(f"Generated: {format_print_timestamp()}", styles['Normal']),
        Spacer(1, 12),
        table,
    ])
    return buffer.getvalue()


def export_pdf(records: Sequence[Mapping], columns: Sequence[TableColumn],
               title: str = DEFAULT_TABLE_TITLE, table_id: str = 'datatable') -> ExportResult:
    """
    Export records as PDF, or fall back to the print document.

    Returns:
        ExportResult with kind 'pdf', or kind 'print' with a notice when no
        PDF engine is available or rendering failed

    Raises:
        NothingToExportError: if records is empty or not a list
    """
    _check_exportable(records)
    export_columns = exportable_columns(columns)

    if not pdf_engine_available():
        logger.info(f"PDF engine unavailable, falling back to print for '{title}'")
        return print_records(records, columns, title, table_id, notice=PDF_FALLBACK_NOTICE)

    headers = [column.label for column in export_columns]
    rows = _export_rows(records, export_columns)
    try:
        content = _render_pdf(headers, rows, title)
    except Exception as e:
        LoggingHelper.log_error_with_trace(f"PDF rendering failed for '{title}'", e)
        return print_records(records, columns, title, table_id, notice=PDF_FAILED_NOTICE)

    LoggingHelper.log_export(title, 'pdf', len(records))
    return ExportResult('pdf', content, export_filename(title, 'pdf'), PDF_MIMETYPE)
