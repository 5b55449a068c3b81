"""
Time-windowed counter stores backing the Gemini rate limiter.

InMemoryCounterStore serves tests and single-process hosts. RedisCounterStore
shares counts between processes/hosts. Both increment atomically and reset a
key's TTL to the full window on every write.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Protocol, runtime_checkable

import redis

from src.utils.logger import get_logger

logger = get_logger()


@runtime_checkable
class CounterStore(Protocol):
    def get(self, key: str) -> int:
        """Current value of key; missing or expired keys read as 0."""
        ...

    def increment(self, key: str, ttl_seconds: int) -> int:
        """Atomically add 1, set the TTL to ttl_seconds, return the new value."""
        ...


class InMemoryCounterStore:
    """
    Process-local counters with expiry.

    Every write sweeps expired entries, so only live buckets stay in memory.
    `timer` defaults to time.monotonic and can be replaced in tests.
    """

    def __init__(self, timer: Callable[[], float] | None = None) -> None:
        self._timer = timer or time.monotonic
        self._lock = threading.Lock()
        self._values: dict[str, tuple[int, float]] = {}

    def _live_value(self, key: str, now: float) -> int:
        entry = self._values.get(key)
        if entry is None:
            return 0
        value, expires_at = entry
        if now >= expires_at:
            del self._values[key]
            return 0
        return value

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._values.items() if now >= expires_at]
        for key in expired:
            del self._values[key]

    def get(self, key: str) -> int:
        with self._lock:
            return self._live_value(key, self._timer())

    def increment(self, key: str, ttl_seconds: int) -> int:
        with self._lock:
            now = self._timer()
            self._sweep(now)
            value = self._values.get(key, (0, now))[0] + 1
            self._values[key] = (value, now + ttl_seconds)
            return value


class RedisCounterStore:
    """
    Redis-backed counters: INCR and EXPIRE in one MULTI/EXEC pipeline.

    Connection or command errors propagate to the caller. An unreachable store
    must fail the request instead of letting calls through unmetered.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> RedisCounterStore:
        kwargs = {
            "decode_responses": True,
            "socket_timeout": 5,
            "socket_connect_timeout": 5,
        }
        client = redis.from_url(url, **kwargs)
        host = url.split("@")[1] if "@" in url else url
        logger.info("Rate-limit counters stored in Redis at %s", host)
        return cls(client)

    def get(self, key: str) -> int:
        raw = self._client.get(key)
        if raw is None:
            return 0
        return max(0, int(raw))

    def increment(self, key: str, ttl_seconds: int) -> int:
        pipe = self._client.pipeline(transaction=True)
        pipe.incr(key, 1)
        pipe.expire(key, ttl_seconds)
        value, _ = pipe.execute()
        return int(value)
