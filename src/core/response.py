"""Response helpers and base classes shared by the API views."""

import uuid
from typing import Any

from rest_framework import viewsets
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response


def api_response(payload: dict[str, Any] | None = None, status: int = 200, message: str | None = None) -> Response:
    """Return a JSON object body, optionally led by a human-readable message.

    ``api_response({"article": data}, message="Article updated")`` renders
    ``{"message": "Article updated", "article": {...}}``.
    """

    body: dict[str, Any] = {}
    if message is not None:
        body["message"] = message
    if payload:
        body.update(payload)
    return Response(body, status=status)


def parse_object_id(value: Any) -> uuid.UUID | None:
    """Return ``value`` as a UUID, or None when it is not a well-formed id."""

    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def parse_positive_int(value: Any, name: str, default: int | None = None) -> int | None:
    """Parse an optional positive integer query parameter."""

    if value in (None, ""):
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError({name: "Must be a positive integer."})
    if parsed < 1:
        raise ValidationError({name: "Must be a positive integer."})
    return parsed


class BaseViewSet(viewsets.ViewSet):
    """ViewSet whose detail routes treat malformed ids as missing resources."""

    not_found_message = "Not found."

    def get_object_id(self) -> uuid.UUID:
        """Return the ``pk`` URL kwarg as a UUID, raising 404 if it is malformed."""
        object_id = parse_object_id(self.kwargs.get("pk"))
        if object_id is None:
            raise NotFound(self.not_found_message)
        return object_id


__all__ = ["api_response", "parse_object_id", "parse_positive_int", "BaseViewSet"]
