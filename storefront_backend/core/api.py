# core/api.py

"""
API ERROR NORMALIZATION

One canonical error envelope for every storefront endpoint:

    {"error": {"kind": "...", "code": "...", "message": "..."}}
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response

from core.results import ErrorKind, OperationResult

KIND_TO_HTTP_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.POLICY_VIOLATION: status.HTTP_409_CONFLICT,
}


def error_response(*, code: str, message: str, http_status: int, kind: str | None = None):
    """
    Canonical API error response.
    """
    body = {"code": code, "message": message}
    if kind:
        body["kind"] = kind
    return Response({"error": body}, status=http_status)


def failed_result_response(result: OperationResult):
    kind = result.error_kind or ErrorKind.INVALID_INPUT
    return error_response(
        code=result.code or "ERROR",
        message=result.message or "Request failed",
        http_status=KIND_TO_HTTP_STATUS.get(kind, status.HTTP_400_BAD_REQUEST),
        kind=kind.value,
    )
