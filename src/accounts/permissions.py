"""Permission classes gating editor and admin endpoints by account role."""

from rest_framework import permissions

from core.exceptions import AuthServiceUnavailable

from .models import Account


class IsAuthenticatedAccount(permissions.BasePermission):
    """Allow any account that authenticated through the JWT middleware.

    If the blocklist could not be checked the token is untrusted and the
    request fails with 500 rather than 401.
    """

    message = "Authentication required."

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if isinstance(user, Account) and user.is_authenticated:
            return True
        if getattr(request, "blocklist_unavailable", False):
            raise AuthServiceUnavailable()
        return False


class IsAdmin(IsAuthenticatedAccount):
    """Require the ``admin`` role on top of authentication.

    DRF answers unauthenticated callers with 401 and authenticated
    non-admins with 403.
    """

    message = "Admin access only."

    def has_permission(self, request, view) -> bool:
        if not super().has_permission(request, view):
            return False
        return request.user.role == Account.Role.ADMIN


__all__ = ["IsAuthenticatedAccount", "IsAdmin"]
