"""DRF authenticator for accounts resolved by ``JWTAuthMiddleware``.

Bearer tokens are verified once, in middleware, for every request. Views
only need to learn which ``Account`` (if any) the middleware settled on.
"""

from typing import Optional, Tuple

from rest_framework.authentication import BaseAuthentication

from accounts.models import Account


class MiddlewareUserAuthentication(BaseAuthentication):
    """Hand the middleware's ``Account`` to DRF; anyone else stays anonymous."""

    def authenticate(self, request) -> Optional[Tuple[Account, None]]:
        user = getattr(getattr(request, "_request", None), "user", None)
        if isinstance(user, Account):
            return user, None
        return None

    def authenticate_header(self, request) -> str:
        # Lets DRF answer NotAuthenticated with 401 and a WWW-Authenticate header.
        return 'Bearer realm="api"'


__all__ = ["MiddlewareUserAuthentication"]
