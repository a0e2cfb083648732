"""
Tests for JSON envelopes and export responses.
"""
import pytest
from flask import Flask

from helpers.export_helpers import ExportResult, PDF_FALLBACK_NOTICE
from helpers.response_helpers import (
    EXPORT_NOTICE_HEADER,
    error_response,
    export_response,
    success_response
)


@pytest.fixture
def app_context():
    app = Flask(__name__)
    with app.app_context():
        yield


def test_error_response_envelope(app_context):
    response, status = error_response('Unknown table: xrays', 404)
    assert status == 404
    assert response.get_json() == {'success': False, 'message': 'Unknown table: xrays'}


def test_success_response_merges_payload(app_context):
    response, status = success_response({'view': {'title': 'Patients'}, 'links': {}})
    assert status == 200
    assert response.get_json() == {'success': True, 'view': {'title': 'Patients'}, 'links': {}}


def test_export_response_failure(app_context):
    response, status = export_response(ExportResult.failure('No data to export'))
    assert status == 400
    assert response.get_json()['message'] == 'No data to export'


def test_export_response_csv_attachment(app_context):
    result = ExportResult('csv', 'Name\nAnn', 'patients_2024-01-15.csv', 'text/csv; charset=utf-8')
    response, status = export_response(result)
    assert status == 200
    assert response.headers['Content-Disposition'] == 'attachment; filename="patients_2024-01-15.csv"'
    assert EXPORT_NOTICE_HEADER not in response.headers


def test_export_response_print_fallback_carries_notice(app_context):
    result = ExportResult('print', '<html></html>', None, 'text/html; charset=utf-8',
                          notice=PDF_FALLBACK_NOTICE)
    response, status = export_response(result)
    assert status == 200
    assert response.headers[EXPORT_NOTICE_HEADER] == PDF_FALLBACK_NOTICE
    assert 'Content-Disposition' not in response.headers


def test_export_response_plain_print_has_no_notice(app_context):
    result = ExportResult('print', '<html></html>', None, 'text/html; charset=utf-8')
    response, _ = export_response(result)
    assert EXPORT_NOTICE_HEADER not in response.headers
