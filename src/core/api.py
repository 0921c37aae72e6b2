"""
Shared helpers for the REST API.

Every response uses the envelope {"ok": true, ...} or
{"ok": false, "error": "..."}; the exception handler below puts DRF's
own errors (authentication, permissions, parse errors) in that envelope too.
"""

import logging
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def format_validation_error(detail: Any) -> str:
    """
    Flattens DRF or Django validation errors into one readable message.

    Example:
        >>> format_validation_error({"oppervlakte": ["Oppervlakte moet groter dan 0 zijn"]})
        'oppervlakte: Oppervlakte moet groter dan 0 zijn'
    """
    if isinstance(detail, DjangoValidationError):
        if hasattr(detail, "error_dict"):
            return format_validation_error(detail.message_dict)
        return "; ".join(detail.messages)

    if isinstance(detail, dict):
        parts = []
        for field, errors in detail.items():
            message = format_validation_error(errors)
            parts.append(message if field == "non_field_errors" else f"{field}: {message}")
        return "; ".join(parts)

    if isinstance(detail, (list, tuple)):
        return "; ".join(format_validation_error(item) for item in detail)

    return str(detail)


def envelope_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and "detail" in data and len(data) == 1:
        message = str(data["detail"])
    else:
        message = format_validation_error(data)

    response.data = {"ok": False, "error": message}
    return response


def get_request_company(request):
    """The company of the request: the tenant resolved by django-tenants."""
    return getattr(request, "tenant", None)
