"""Readiness probe and JSON fallbacks for Django-level errors."""

import logging
from typing import Any

from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import SERVER_ERROR_MESSAGE

logger = logging.getLogger(__name__)


class HealthView(APIView):
    """Report whether the database connection can be established."""

    permission_classes: list[Any] = []
    authentication_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        try:
            connection.ensure_connection()
        except DatabaseError:
            logger.exception("Readiness check failed: database unreachable")
            return Response({"status": "unavailable"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response({"status": "ok"})


def not_found(request, exception=None):
    return JsonResponse({"message": "Not found."}, status=status.HTTP_404_NOT_FOUND)


def server_error(request):
    return JsonResponse({"message": SERVER_ERROR_MESSAGE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
