from __future__ import annotations

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from roadmap_ai.ai_core.common.errors import ErrorKind, RoadmapServiceError

logger = logging.getLogger(__name__)

_KIND_BY_API_EXCEPTION = (
    (exceptions.ValidationError, ErrorKind.INVALID_REQUEST),
    (exceptions.ParseError, ErrorKind.INVALID_REQUEST),
    (exceptions.NotAuthenticated, ErrorKind.UNAUTHENTICATED),
    (exceptions.AuthenticationFailed, ErrorKind.UNAUTHENTICATED),
    (exceptions.NotFound, ErrorKind.NOT_FOUND),
)

_KIND_BY_STATUS = {
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHENTICATED,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
}


def api_exception_handler(exc, context):
    """
    DRF EXCEPTION_HANDLER rendering every error as {"error", "kind"}.

    @param exc Raised exception.
    @param context DRF handler context.
    @returns Response; unhandled exceptions become 500 "internal".
    """
    if isinstance(exc, RoadmapServiceError):
        if exc.status_code >= 500:
            logger.error("Request failed", extra={"kind": exc.kind.value, "error": exc.message})
        return Response({"error": exc.message, "kind": exc.kind.value}, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        logger.exception("Unhandled server error", exc_info=exc)
        return Response(
            {"error": "Internal server error", "kind": ErrorKind.INTERNAL.value},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    kind = next((kind for exc_type, kind in _KIND_BY_API_EXCEPTION if isinstance(exc, exc_type)), None)
    payload = {"error": _message(exc, response), "kind": (kind or _kind_for_status(response.status_code)).value}
    if isinstance(exc, exceptions.ValidationError):
        payload["details"] = response.data
    response.data = payload
    return response


def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code >= 500:
        return ErrorKind.INTERNAL
    return _KIND_BY_STATUS.get(status_code, ErrorKind.INVALID_REQUEST)


def _message(exc, response: Response) -> str:
    if isinstance(exc, exceptions.ValidationError):
        return "Invalid request"
    # Http404 and PermissionDenied arrive without .detail
    detail = getattr(exc, "detail", None) or (response.data or {}).get("detail", "Request failed")
    return str(detail) if not isinstance(detail, (list, dict)) else "Request failed"
