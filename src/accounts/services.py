"""Token issuance, blocklist checks, password generation, and admin bootstrap."""

import logging
import secrets
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed

from core.redis_client import get_redis_client

from .models import Account

logger = logging.getLogger(__name__)

# No 0/O/1/l/I so a reset password can be read aloud or copied by hand.
PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789!@#$%"
GENERATED_PASSWORD_LENGTH = 10


class BlocklistUnavailable(Exception):
    """Raised when Redis blocklist cannot be checked (fail-closed)."""


class TokenService:
    """Handle JWT issuance, decoding, and blocklist operations."""

    ALGORITHM = "HS256"
    BLOCKLIST_PREFIX = "blocklist:token:"

    @classmethod
    def access_ttl(cls) -> timedelta:
        return timedelta(minutes=settings.JWT_ACCESS_TTL_MINUTES)

    @classmethod
    def generate_token(cls, account) -> str:
        """Generate a signed access token for the given account."""

        now = datetime.now(timezone.utc)
        payload = cls._build_payload(account, "access", now, cls.access_ttl())
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=cls.ALGORITHM)

    @classmethod
    def _build_payload(cls, account, token_type: str, issued_at: datetime, ttl: timedelta) -> dict[str, Any]:
        exp = issued_at + ttl
        return {
            "sub": str(account.id),
            "jti": str(uuid.uuid4()),
            "exp": int(exp.timestamp()),
            "iat": int(issued_at.timestamp()),
            "email": account.email,
            "role": account.role,
            "type": token_type,
        }

    @classmethod
    def decode_token(cls, token: str, expected_type: str | None = None) -> dict[str, Any]:
        """Decode and validate a JWT; optionally enforce token type."""

        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[cls.ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationFailed("Invalid token") from exc

        if expected_type and payload.get("type") != expected_type:
            raise AuthenticationFailed("Invalid token type")

        return payload

    @classmethod
    def block_token(cls, jti: str, exp: int) -> None:
        """Add token jti to blocklist until its expiration timestamp."""

        client = get_redis_client()
        ttl_seconds = max(1, exp - int(time.time()))
        try:
            client.setex(f"{cls.BLOCKLIST_PREFIX}{jti}", ttl_seconds, "1")
        except Exception as exc:  # pragma: no cover - network failure
            raise BlocklistUnavailable("Redis unavailable while blocklisting") from exc

    @classmethod
    def is_token_blocked(cls, jti: str) -> bool:
        """Check if a token jti is present in the blocklist."""

        client = get_redis_client()
        try:
            return client.get(f"{cls.BLOCKLIST_PREFIX}{jti}") is not None
        except Exception as exc:  # pragma: no cover - network failure
            raise BlocklistUnavailable("Redis unavailable while checking blocklist") from exc


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    """Return a random password drawn from ``PASSWORD_ALPHABET``."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def ensure_initial_admin() -> tuple[Account, bool]:
    """Create the bootstrap admin unless an admin account already exists.

    Returns ``(admin, created)``.
    """

    existing = Account.objects.filter(role=Account.Role.ADMIN).order_by("created_at").first()
    if existing is not None:
        logger.info("Admin already exists: %s", existing.email)
        return existing, False

    admin = Account.objects.create_admin(
        email=settings.INITIAL_ADMIN_EMAIL,
        password=settings.INITIAL_ADMIN_PASSWORD,
        name=settings.INITIAL_ADMIN_NAME,
    )
    if settings.INITIAL_ADMIN_PASSWORD == "Admin@123":
        logger.warning("Admin %s created with the default password; change it", admin.email)
    else:
        logger.info("Admin %s created", admin.email)
    return admin, True


__all__ = [
    "TokenService",
    "BlocklistUnavailable",
    "generate_password",
    "ensure_initial_admin",
]
