"""
Column presets for the clinic resources served as tables.

Each preset pairs a UI renderer (HTML, sanitized later by TableCell) with a
plain export value so CSV/PDF output never contains markup.
"""
from typing import Dict, List, Optional, Callable

from helpers.template import (
    TableColumn,
    format_currency,
    format_date_cell,
    format_phone_link,
    format_status_badge,
    format_status_text,
    truncate_text
)
from helpers.time_helpers import format_date


def _date_column(key: str, label: str, fmt: str = 'short') -> TableColumn:
    return TableColumn(
        key, label,
        render=lambda value, record: format_date_cell(value, fmt),
        export_value=lambda value, record: format_date(value, fmt) if value else ''
    )


def _money_column(key: str, label: str) -> TableColumn:
    return TableColumn(
        key, label,
        render=lambda value, record: format_currency(value),
        export_value=lambda value, record: format_currency(value)
    )


def _status_column(key: str, label: str, kind: str = 'appointment') -> TableColumn:
    return TableColumn(
        key, label,
        render=lambda value, record: format_status_badge(value, kind),
        export_value=lambda value, record: format_status_text(value, kind)
    )


def get_patient_columns() -> List[TableColumn]:
    return [
        TableColumn('cardNo', 'Card Number'),
        TableColumn('name', 'Name'),
        TableColumn('phone', 'Phone', render=lambda value, record: format_phone_link(value)),
        TableColumn('email', 'Email'),
        TableColumn('gender', 'Gender'),
        _date_column('dateOfBirth', 'Date of Birth'),
        TableColumn('address', 'Address', sortable=False,
                    render=lambda value, record: truncate_text(value, 40)),
        TableColumn('branch.name', 'Branch'),
        _date_column('createdAt', 'Date Added'),
    ]


def get_appointment_columns() -> List[TableColumn]:
    return [
        _date_column('date', 'Date & Time', 'datetime'),
        TableColumn('patientName', 'Patient'),
        TableColumn('patient.phone', 'Phone'),
        TableColumn('dentist.name', 'Dentist'),
        _status_column('status', 'Status'),
        TableColumn('visitReason', 'Reason', sortable=False),
        TableColumn('id', 'ID', sortable=False, searchable=False, exportable=False),
    ]


def get_payment_columns() -> List[TableColumn]:
    return [
        _date_column('paymentDate', 'Date'),
        TableColumn('patientName', 'Patient'),
        TableColumn('patient.phone', 'Phone'),
        TableColumn('dentist', 'Dentist'),
        _money_column('amount', 'Amount'),
        _money_column('paidAmount', 'Paid'),
        _status_column('paymentStatus', 'Status', 'payment'),
        TableColumn('paymentMethod', 'Payment Method'),
    ]


def get_treatment_columns() -> List[TableColumn]:
    return [
        _date_column('createdAt', 'Date'),
        TableColumn('patient.name', 'Patient'),
        TableColumn('dentist.name', 'Dentist'),
        TableColumn('diagnosis', 'Diagnosis'),
        TableColumn('diagnosisCode', 'Code'),
        _status_column('status', 'Status'),
        TableColumn('treatmentPlan', 'Plan', sortable=False,
                    render=lambda value, record: truncate_text(value, 60)),
    ]


def get_branch_columns() -> List[TableColumn]:
    return [
        TableColumn('code', 'Code'),
        TableColumn('name', 'Name'),
        TableColumn('address', 'Address', sortable=False),
        TableColumn('taxNumber', 'Tax Number'),
        _date_column('createdAt', 'Created'),
    ]


def get_user_columns() -> List[TableColumn]:
    return [
        TableColumn('name', 'Name'),
        TableColumn('phone', 'Phone'),
        TableColumn('role', 'Role'),
        TableColumn('branch.name', 'Branch'),
        _date_column('createdAt', 'Created'),
    ]


TABLE_PRESETS: Dict[str, Dict] = {
    'patients': {'title': 'Patients', 'columns': get_patient_columns},
    'appointments': {'title': 'Appointments', 'columns': get_appointment_columns},
    'payments': {'title': 'Payments', 'columns': get_payment_columns},
    'treatments': {'title': 'Treatments', 'columns': get_treatment_columns},
    'branches': {'title': 'Branches', 'columns': get_branch_columns},
    'users': {'title': 'Users', 'columns': get_user_columns},
}


def get_table_preset(resource: str) -> Optional[Dict]:
    """
    Look up the title and a fresh column list for a resource.

    Returns:
        {'title': str, 'columns': List[TableColumn]} or None for unknown resources
    """
    preset = TABLE_PRESETS.get(resource)
    if preset is None:
        return None
    columns_factory: Callable[[], List[TableColumn]] = preset['columns']
    return {'title': preset['title'], 'columns': columns_factory()}
