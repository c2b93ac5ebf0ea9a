# apps/api/common/exceptions.py
"""
Error vocabulary shared by every domain.

Services raise DRF exceptions (NotFound, PermissionDenied, ValidationError)
plus the two kinds DRF lacks, Conflict and UpstreamError. The handler below
renders all of them as ``{"success": false, "message": ...}``.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


class UpstreamError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "An upstream service failed."
    default_code = "upstream_error"


def _message_from(detail) -> str:
    if isinstance(detail, dict):
        if "detail" in detail:
            return str(detail["detail"])
        return "Validation failed"
    if isinstance(detail, list):
        return str(detail[0]) if detail else "Validation failed"
    return str(detail)


def exception_handler(exc, context):
    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s",
            view.__class__.__name__ if view is not None else "unknown view",
        )
        return Response(
            {"success": False, "message": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    payload = {"success": False, "message": _message_from(response.data)}
    if isinstance(exc, ValidationError) and isinstance(response.data, dict):
        payload["errors"] = response.data
    response.data = payload
    return response
