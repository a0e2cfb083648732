"""
Response helpers for the table endpoints.

JSON answers use the clinic API envelope (`success` plus `message` on
failure) so the same client code unwraps both services.
"""
from typing import Any, Dict, Tuple

from flask import jsonify, Response

from helpers.export_helpers import ExportResult

EXPORT_NOTICE_HEADER = 'X-Export-Notice'


def error_response(message: str, status_code: int = 400) -> Tuple[Response, int]:
    """Failure envelope: {'success': False, 'message': ...}."""
    return jsonify({'success': False, 'message': message}), status_code


def success_response(payload: Dict[str, Any], status_code: int = 200) -> Tuple[Response, int]:
    """Success envelope with the payload keys at the top level."""
    return jsonify({'success': True, **payload}), status_code


def export_response(result: ExportResult) -> Tuple[Response, int]:
    """
    Turn an ExportResult into an HTTP answer.

    Failed exports become a 400 envelope. Print documents (including the PDF
    fallback) are served inline with the fallback reason in a header. CSV and
    PDF files are sent as attachments.
    """
    if not result.ok:
        return error_response(result.notice, 400)

    if result.kind == 'print':
        response = Response(result.content, mimetype=result.mimetype)
        if result.notice:
            response.headers[EXPORT_NOTICE_HEADER] = result.notice
        return response, 200

    response = Response(
        result.content,
        mimetype=result.mimetype,
        headers={'Content-Disposition': f'attachment; filename="{result.filename}"'}
    )
    return response, 200
