# apps/api/common/responses.py
from rest_framework import status as http_status
from rest_framework.response import Response


def success(message: str, *, status: int = http_status.HTTP_200_OK, **payload) -> Response:
    """Envelope every successful API response as {success, message, ...}."""
    return Response({"success": True, "message": message, **payload}, status=status)
