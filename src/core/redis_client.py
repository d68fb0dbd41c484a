"""Shared Redis client factory for the token blocklist."""

import threading

import redis
from django.conf import settings

_client: redis.Redis | None = None
_lock = threading.Lock()


def get_redis_client() -> redis.Redis:
    """Return a singleton Redis client using REDIS_URL from settings.

    Concurrent first calls build exactly one client.
    """

    global _client
    if _client is None:
        with _lock:
            if _client is None:
                _client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _client


__all__ = ["get_redis_client"]
