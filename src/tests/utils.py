"""Shared helpers for tests (account/article factories, fake Redis, API base class)."""

from __future__ import annotations

from typing import Dict
from unittest import mock

from django.test import TestCase
from rest_framework.test import APIClient

from accounts.managers import AccountManager
from accounts.models import Account
from accounts.services import TokenService
from articles.models import Article


class FakeRedis:
    """Minimal Redis stub supporting the commands used by TokenService."""

    def __init__(self):
        self._store: Dict[str, str] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is ignored in tests, value stored in-memory."""
        self._store[key] = value

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        return self._store.get(key)


def create_account(email: str, password: str = "Password123", role: str = Account.Role.USER, **extra) -> Account:
    """Create an account with a bcrypt-hashed password for tests."""

    extra.setdefault("name", email.split("@")[0].title())
    return Account.objects.create(
        email=email,
        password_hash=AccountManager.hash_password(password),
        role=role,
        **extra,
    )


def create_article(author: Account | None, title: str = "Title", **fields) -> Article:
    """Insert an article row directly, bypassing the workflow."""

    fields.setdefault("content", "Body")
    return Article.objects.create(author=author, title=title, **fields)


def auth_client(account: Account) -> APIClient:
    """Return an APIClient authenticated with a fresh access token."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {TokenService.generate_token(account)}")
    return client


class FakeRedisTestCase(TestCase):
    """TestCase that routes the token blocklist to an in-memory fake."""

    @classmethod
    def setUpClass(cls):
        """Patch Redis clients to use the in-memory fake for all tests."""
        super().setUpClass()
        cls.fake_redis = FakeRedis()
        cls.patchers = [
            mock.patch("core.redis_client.get_redis_client", return_value=cls.fake_redis),
            mock.patch("accounts.services.get_redis_client", return_value=cls.fake_redis),
        ]
        for patcher in cls.patchers:
            patcher.start()

    @classmethod
    def tearDownClass(cls):
        """Stop Redis patches after all tests complete."""
        for patcher in cls.patchers:
            patcher.stop()
        super().tearDownClass()
