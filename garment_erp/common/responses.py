import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from garment_erp.common.exceptions import BusinessError

logger = logging.getLogger(__name__)


def success_response(data=None, status_code=status.HTTP_200_OK, **extra):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return Response(body, status=status_code)


def error_response(exc):
    """Uniform failure body for a `BusinessError`."""
    logger.info(f"{exc.__class__.__name__}: {exc.message}")
    return Response({"success": False, "error": exc.message}, status=exc.status_code)


def _first_message(detail):
    if isinstance(detail, dict):
        if not detail:
            return ""
        field, value = next(iter(detail.items()))
        message = _first_message(value)
        return message if field in ("non_field_errors", "detail") else f"{field}: {message}"
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc, context):
    """
    REST_FRAMEWORK["EXCEPTION_HANDLER"]: every error leaves the API as
    `{"success": false, "error": ...}`. Serializer errors keep the per-field
    detail under `errors`.
    """
    if isinstance(exc, BusinessError):
        return error_response(exc)

    response = exception_handler(exc, context)
    if response is None:
        return None

    body = {"success": False, "error": _first_message(response.data)}
    if isinstance(exc, DRFValidationError):
        body["errors"] = response.data
    logger.info(f"{exc.__class__.__name__} on {getattr(context.get('request'), 'path', '')}: {body['error']}")
    response.data = body
    return response
