"""Error taxonomy and the handler that renders it as `{"message": ...}`."""

import logging
from typing import Any

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = "Authentication credentials were not provided or are invalid, or the token was revoked."
FORBIDDEN_MESSAGE = "You do not have permission to perform this action on this resource."
SERVER_ERROR_MESSAGE = "Server error"


class Conflict(APIException):
    """A unique field (e.g. email) is already held by another record."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists."
    default_code = "conflict"


class InvalidStatus(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid status value supplied."
    default_code = "invalid_status"


class InvalidCategory(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid category supplied."
    default_code = "invalid_category"


class AuthServiceUnavailable(APIException):
    """The token blocklist could not be consulted, so no token is trusted."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Authentication service unavailable."
    default_code = "auth_unavailable"


def flatten_detail(detail: Any) -> str:
    """Reduce DRF's nested error detail to a single human-readable string.

    Field errors are prefixed with the field name, e.g. ``"email: Enter a
    valid email address."``.
    """

    if isinstance(detail, dict):
        if not detail:
            return ""
        key, value = next(iter(detail.items()))
        message = flatten_detail(value)
        if key in ("non_field_errors", "detail"):
            return message
        return f"{key}: {message}"
    if isinstance(detail, (list, tuple)):
        return flatten_detail(detail[0]) if detail else ""
    return str(detail)


def error_response(message: str, status_code: int) -> Response:
    return Response({"message": message}, status=status_code)


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Map every error raised inside a view onto `{ "message": ... }`.

    - Uses DRF's default handler for APIException, Http404 and PermissionDenied.
    - Forces 401 for authentication errors regardless of DRF's default mapping.
    - Anything DRF does not know about is logged and surfaced as a generic 500.
    """

    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else "view", exc_info=exc
        )
        return error_response(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code == status.HTTP_401_UNAUTHORIZED:
        if getattr(settings, "DEBUG_AUTH_ERRORS", False):
            message = flatten_detail(response.data)
        else:
            message = UNAUTHENTICATED_MESSAGE
    elif response.status_code == status.HTTP_403_FORBIDDEN:
        message = FORBIDDEN_MESSAGE
    else:
        message = flatten_detail(response.data)

    response.data = {"message": message}
    return response


__all__ = [
    "AuthServiceUnavailable",
    "Conflict",
    "InvalidStatus",
    "InvalidCategory",
    "custom_exception_handler",
    "error_response",
    "flatten_detail",
]
