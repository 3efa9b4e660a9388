"""
Response envelope for the recruitment API.

Every rendered body has the shape:
{
    "status": "success" | "error",
    "message": "human readable text or empty",
    "data": {...} | [...] | null
}

Views keep returning plain payloads; the renderer wraps them. Permission
denials produced by the access control decorators carry a
`required_permission` entry, which is kept under `data` so the browser can
tell which page or menu token was missing.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status as http_status
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

ENVELOPE_KEYS = ('status', 'message', 'data')

# Error keys surfaced to the client as structured data rather than text
STRUCTURED_ERROR_KEYS = ('required_permission',)


def custom_exception_handler(exc, context):
    """
    Run DRF's handler, then convert the body into the error envelope.

    Model-level django ValidationErrors (raised by Role.delete, UserRole.clean
    and friends when a view does not catch them) become 400 responses instead
    of server errors.
    """
    if isinstance(exc, DjangoValidationError):
        logger.info("Model validation error: %s", exc.messages)
        return Response(
            format_error_response({'detail': '; '.join(exc.messages)}),
            status=http_status.HTTP_400_BAD_REQUEST
        )

    response = exception_handler(exc, context)
    if response is not None:
        response.data = format_error_response(response.data)
    return response


def format_error_response(errors):
    """
    Flatten DRF error payloads into a single message.

    {"email": ["Taken."]}               -> "email: Taken."
    {"detail": "Not found."}            -> "Not found."
    {"error": "Permission denied", ...} -> "Permission denied"
    ["a", "b"]                          -> "a, b"
    """
    message = ''
    data = None

    if isinstance(errors, dict):
        parts = []
        for field, value in errors.items():
            if field in ('detail', 'error'):
                if not message:
                    message = str(value)
                elif field == 'detail':
                    parts.append(str(value))
            elif field in STRUCTURED_ERROR_KEYS:
                data = data or {}
                data[field] = value
            else:
                parts.append(f"{field}: {_join_errors(value)}")
        if parts:
            message = '; '.join([message] + parts) if message else '; '.join(parts)
    elif isinstance(errors, list):
        message = ', '.join(str(e) for e in errors)
    elif errors is not None:
        message = str(errors)

    return {
        'status': 'error',
        'message': message,
        'data': data,
    }


def _join_errors(value):
    if isinstance(value, list):
        return ', '.join(_join_errors(v) for v in value)
    if isinstance(value, dict):
        return '; '.join(f"{k}: {_join_errors(v)}" for k, v in value.items())
    return str(value)


class StandardizedJSONRenderer(JSONRenderer):
    """
    JSON renderer that wraps bodies in the envelope unless they already are.
    204 responses render empty.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = renderer_context.get('response') if renderer_context else None

        if response is not None:
            if response.status_code == http_status.HTTP_204_NO_CONTENT:
                return b''
            if not self.is_already_formatted(data):
                if response.status_code >= 400:
                    data = format_error_response(data)
                else:
                    data = self.format_success_response(data)

        return super().render(data, accepted_media_type, renderer_context)

    def is_already_formatted(self, data):
        return isinstance(data, dict) and all(key in data for key in ENVELOPE_KEYS)

    def format_success_response(self, data):
        message = ''
        if isinstance(data, dict) and 'message' in data:
            # login/logout/change-password style bodies carry their own message
            message = str(data['message'])
            data = {k: v for k, v in data.items() if k != 'message'} or None
        elif data is None or data == {}:
            data = None

        return {
            'status': 'success',
            'message': message,
            'data': data,
        }
