"""Account manager handling email normalization and bcrypt hashing."""

import uuid

import bcrypt
from django.conf import settings
from django.contrib.auth.base_user import BaseUserManager


# bcrypt only hashes the first 72 bytes and newer releases reject anything longer.
MAX_PASSWORD_BYTES = 72


def password_too_long(raw_password: str) -> bool:
    return len(raw_password.encode()) > MAX_PASSWORD_BYTES


def normalize_account_email(email: str) -> str:
    """Lower-case and trim an email; login, create and update all use this."""
    return (email or "").strip().lower()


class AccountManager(BaseUserManager):
    """Manager to create accounts with bcrypt password hashes."""

    use_in_migrations = True

    def _create_account(self, email: str, password: str, **extra_fields):
        if not email:
            raise ValueError("The Email must be set")
        email = normalize_account_email(email)
        account = self.model(id=uuid.uuid4(), email=email, **extra_fields)
        account.password_hash = self.hash_password(password)
        account.save(using=self._db)
        return account

    def create_account(self, email: str, password: str | None = None, **extra_fields):
        """Create an editor (role ``user``) unless another role is given."""
        extra_fields.setdefault("role", "user")
        if password is None:
            raise ValueError("Password must be provided")
        return self._create_account(email, password, **extra_fields)

    def create_admin(self, email: str, password: str, **extra_fields):
        """Create an account holding the admin role."""
        extra_fields["role"] = "admin"
        return self._create_account(email, password, **extra_fields)

    def get_by_natural_key(self, email):
        return self.get(email=normalize_account_email(email))

    @staticmethod
    def hash_password(raw_password: str) -> str:
        """Hash a raw password using bcrypt and return the utf-8 string."""
        salt = bcrypt.gensalt(rounds=getattr(settings, "BCRYPT_ROUNDS", 12))
        hashed = bcrypt.hashpw(raw_password.encode(), salt)
        return hashed.decode()

    @staticmethod
    def verify_password(account, raw_password: str) -> bool:
        """Verify raw password against stored bcrypt hash."""

        if not account.password_hash or password_too_long(raw_password):
            return False
        return bcrypt.checkpw(raw_password.encode(), account.password_hash.encode("utf-8"))


__all__ = ["AccountManager", "MAX_PASSWORD_BYTES", "normalize_account_email", "password_too_long"]
