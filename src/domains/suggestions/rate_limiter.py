"""
Daily and per-minute call ceilings for the Gemini API.

Counts live in an injected CounterStore under two UTC-bucketed keys:
- domainfinder_daily_YYYY-MM-DD (24h TTL)
- domainfinder_minute_YYYY-MM-DD-HH-MM (60s TTL)

A ceiling of 0 or less disables that dimension.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from src.infrastructure.counters.counter_store import CounterStore
from src.utils.logger import get_logger

logger = get_logger()

KEY_PREFIX = "domainfinder"
DAILY_TTL_SECONDS = 86400
MINUTE_TTL_SECONDS = 60


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    reason: str | None = None


class RateLimiter:
    def __init__(
        self,
        store: CounterStore,
        daily_limit: int,
        minute_limit: int,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self.daily_limit = daily_limit
        self.minute_limit = minute_limit
        self._clock = clock or _utc_now

    def _keys(self) -> tuple[str, str]:
        now = self._clock().astimezone(timezone.utc)
        daily_key = f"{KEY_PREFIX}_daily_{now:%Y-%m-%d}"
        minute_key = f"{KEY_PREFIX}_minute_{now:%Y-%m-%d-%H-%M}"
        return daily_key, minute_key

    def usage(self) -> dict[str, int]:
        """Current counts for the daily and minute buckets."""
        daily_key, minute_key = self._keys()
        return {"daily": self._store.get(daily_key), "minute": self._store.get(minute_key)}

    def check(self) -> RateLimitDecision:
        """Read-only check; the daily ceiling is evaluated first."""
        counts = self.usage()

        if self.daily_limit > 0 and counts["daily"] >= self.daily_limit:
            return RateLimitDecision(False, f"Daily API limit reached ({self.daily_limit} calls/day)")

        if self.minute_limit > 0 and counts["minute"] >= self.minute_limit:
            return RateLimitDecision(False, f"Per-minute API limit reached ({self.minute_limit} calls/minute)")

        return RateLimitDecision(True)

    def commit(self) -> None:
        """Record one successful API call in both buckets."""
        daily_key, minute_key = self._keys()
        daily = self._store.increment(daily_key, DAILY_TTL_SECONDS)
        minute = self._store.increment(minute_key, MINUTE_TTL_SECONDS)
        logger.debug("Gemini usage: %d today, %d this minute", daily, minute)
