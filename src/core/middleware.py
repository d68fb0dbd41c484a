"""Middleware to authenticate requests via JWT and the Redis blocklist."""

import logging
from typing import Optional

from django.contrib.auth.models import AnonymousUser
from django.utils.deprecation import MiddlewareMixin
from rest_framework.exceptions import AuthenticationFailed

from accounts.models import Account
from accounts.services import BlocklistUnavailable, TokenService
from core.response import parse_object_id

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(MiddlewareMixin):
    """Decode the access JWT, check the blocklist, and attach request.user.

    A missing, invalid, expired or revoked token leaves the request
    anonymous. Rejection is left to the permission classes of protected
    views, so public reads and login keep working for a client holding a
    stale token.
    """

    def process_request(self, request):  # type: ignore[override]
        """Authenticate request using a Bearer access token if present."""
        request.user = AnonymousUser()
        request.auth_payload = None
        request.blocklist_unavailable = False

        auth_header = request.META.get("HTTP_AUTHORIZATION", "")
        if not auth_header.startswith("Bearer "):
            return None

        token = auth_header.split(" ", 1)[1]

        try:
            payload = TokenService.decode_token(token, expected_type="access")
            jti = payload.get("jti")
            if not jti:
                raise AuthenticationFailed("Token has no jti")
            if TokenService.is_token_blocked(jti):
                raise AuthenticationFailed("Token has been revoked")

            account = self._get_account(payload.get("sub"))
            if account is None:
                raise AuthenticationFailed("Account no longer exists")
        except AuthenticationFailed as exc:
            logger.debug("Ignoring bearer token: %s", exc.detail)
            return None
        except BlocklistUnavailable:
            logger.exception("Token blocklist unavailable")
            request.blocklist_unavailable = True
            return None

        request.user = account
        request.auth_payload = payload
        return None

    @staticmethod
    def _get_account(account_id: Optional[str]) -> Optional[Account]:
        parsed = parse_object_id(account_id)
        if parsed is None:
            return None
        return Account.objects.filter(id=parsed).first()


__all__ = ["JWTAuthMiddleware"]
