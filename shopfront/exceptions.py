"""
Translate exceptions raised inside API views into JSON error responses.

Every error body has the same shape::

    {"status": "error", "status_code": 404, "message": "..."}

Validation errors additionally carry ``errors`` (the serializer's field
errors) and, when DEBUG is on, unexpected failures carry ``stack``.
"""
import logging
import traceback

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A record with these values already exists."
    default_code = "conflict"


def message_from_detail(detail):
    if isinstance(detail, (list, tuple)) and detail:
        return message_from_detail(detail[0])
    if isinstance(detail, dict):
        if "detail" in detail:
            return message_from_detail(detail["detail"])
        return "Invalid input data. Please check your request."
    return str(detail)


def api_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error in %s: %s", _view_name(context), exc)
        exc = Conflict()
    elif isinstance(exc, ObjectDoesNotExist):
        exc = exceptions.NotFound(str(exc) or "Record not found.")

    response = exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled error in %s", _view_name(context), exc_info=exc)
        body = {
            "status": "error",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "message": "Internal Server Error",
        }
        if settings.DEBUG:
            body["error"] = str(exc)
            body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = {
        "status": "error",
        "status_code": response.status_code,
        "message": message_from_detail(response.data),
    }
    if isinstance(exc, exceptions.ValidationError):
        body["message"] = "Invalid input data. Please check your request."
        body["errors"] = response.data
    response.data = body
    return response


def _view_name(context):
    view = context.get("view") if context else None
    return view.__class__.__name__ if view is not None else "unknown view"
