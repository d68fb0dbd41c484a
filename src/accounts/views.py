"""Login/logout, profile self-service, and admin account management endpoints."""

import logging
from typing import Any

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import AuthenticationFailed, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from core.response import BaseViewSet, api_response, parse_positive_int

from .models import Account
from .permissions import IsAdmin, IsAuthenticatedAccount
from .serializers import (
    AccountCreateSerializer,
    AccountSerializer,
    AccountUpdateSerializer,
    LoginSerializer,
    PasswordChangeSerializer,
    ProfileUpdateSerializer,
    SessionAccountSerializer,
)
from .services import TokenService, generate_password

logger = logging.getLogger(__name__)


class LoginView(APIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Authenticate and issue an access token."""
        serializer = LoginSerializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except AuthenticationFailed:
            logger.warning("Failed login for %r", request.data.get("email"))
            raise
        account = serializer.validated_data["account"]
        token = TokenService.generate_token(account)
        return api_response({"token": token, "user": SessionAccountSerializer(account).data})


class LogoutView(APIView):
    """Invalidate the current access token by blocklisting its jti."""

    permission_classes = [IsAuthenticatedAccount]

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Blocklist the bearer access token and return 204 No Content."""
        payload = request.auth_payload
        TokenService.block_token(payload["jti"], payload["exp"])
        # 204 responses must not include a body.
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(APIView):
    permission_classes = [IsAuthenticatedAccount]

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Return the current account's profile."""
        return api_response({"editor": AccountSerializer(request.user).data})

    # noinspection PyMethodMayBeStatic
    def put(self, request):
        """Update name and/or email for the current account."""
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return api_response(
            {"editor": AccountSerializer(request.user).data},
            message="Profile updated successfully",
        )


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticatedAccount]

    # noinspection PyMethodMayBeStatic
    def put(self, request):
        """Replace the caller's password after verifying the current one."""
        serializer = PasswordChangeSerializer(data=request.data, context={"account": request.user})
        serializer.is_valid(raise_exception=True)
        request.user.set_password(serializer.validated_data["new_password"])
        request.user.save(update_fields=["password_hash", "updated_at"])
        return api_response(message="Password updated successfully")


class EditorAdminViewSet(BaseViewSet):
    """Admin-only management of editor accounts."""

    permission_classes = [IsAdmin]
    not_found_message = "Editor not found"

    def get_account(self) -> Account:
        account = Account.objects.filter(pk=self.get_object_id()).first()
        if account is None:
            raise NotFound(self.not_found_message)
        return account

    def list(self, request):
        """List accounts newest first, optionally capped by ``limit``."""
        limit = parse_positive_int(request.query_params.get("limit"), "limit")
        accounts = Account.objects.order_by("-created_at")
        if limit:
            accounts = accounts[:limit]
        return api_response({"editors": AccountSerializer(accounts, many=True).data})

    def create(self, request):
        """Create an account; a generated password is returned exactly once."""
        serializer = AccountCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        generated = None
        if not serializer.validated_data.get("password"):
            generated = generate_password()
            serializer.validated_data["password"] = generated
        account = serializer.save()
        logger.info("Account %s (%s) created by %s", account.email, account.role, request.user.email)

        payload: dict[str, Any] = {"editor": AccountSerializer(account).data}
        if generated is not None:
            payload["password"] = generated
        return api_response(payload, status=status.HTTP_201_CREATED, message="Editor created successfully")

    def update(self, request, pk=None):
        """Update name, email or role; omitted fields are left untouched."""
        account = self.get_account()
        serializer = AccountUpdateSerializer(account, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return api_response({"editor": AccountSerializer(account).data}, message="Editor updated successfully")

    def destroy(self, request, pk=None):
        """Delete an account other than the caller's own."""
        object_id = self.get_object_id()
        if object_id == request.user.pk:
            raise ValidationError("You cannot delete your own admin account")
        account = self.get_account()
        account.delete()
        logger.info("Account %s deleted by %s", account.email, request.user.email)
        return api_response(message="Editor deleted successfully")

    @action(detail=True, methods=["put"], url_path="reset-password")
    def reset_password(self, request, pk=None):
        """Set a fresh random password and return it once in plaintext."""
        account = self.get_account()
        new_password = generate_password()
        account.set_password(new_password)
        account.save(update_fields=["password_hash", "updated_at"])
        logger.info("Password for %s reset by %s", account.email, request.user.email)
        return api_response(
            {"email": account.email, "new_password": new_password},
            message="Password reset successfully",
        )


__all__ = [
    "LoginView",
    "LogoutView",
    "MeView",
    "ChangePasswordView",
    "EditorAdminViewSet",
]
