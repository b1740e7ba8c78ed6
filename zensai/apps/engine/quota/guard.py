"""Per-feature daily usage limiter for free users.

Counters live under a per-user namespace (`zensai-feature-{user_id}`) and the
day comes from the injected `today` clock, which sessions set to the user's
local date. Read-then-increment is not atomic across devices, and a storage
fault lets the request through rather than blocking it.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from zensai.libs.storage import SafeKeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_DAILY_LIMIT = 2
_KEY_TTL_SECONDS = 2 * 24 * 60 * 60

AFFIRMATION_FEATURE = "affirmation-generator"
QUOTE_FEATURE = "mood-quote-generator"
PROMPT_FEATURE = "prompt-generator"


class QuotaGuard:
    def __init__(
        self,
        store: SafeKeyValueStore,
        *,
        namespace: str = "zensai-feature",
        default_limit: int = DEFAULT_DAILY_LIMIT,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._namespace = namespace
        self._default_limit = default_limit
        self._today = today

    def key_for(self, feature_key: str, day: date | None = None) -> str:
        day = day or self._today()
        return f"{self._namespace}-{feature_key}-{day.isoformat()}"

    async def _count(self, key: str) -> int:
        raw = await self._store.get(key, 0)
        try:
            return max(int(raw), 0)
        except (TypeError, ValueError):
            return 0

    async def usage(self, feature_key: str) -> int:
        return await self._count(self.key_for(feature_key))

    async def remaining(self, feature_key: str, is_premium: bool, daily_limit: int | None = None) -> int | None:
        """Uses left today, or None for unlimited."""

        if is_premium:
            return None
        limit = self._default_limit if daily_limit is None else daily_limit
        return max(limit - await self.usage(feature_key), 0)

    async def check_and_consume(
        self,
        feature_key: str,
        is_premium: bool,
        daily_limit: int | None = None,
    ) -> bool:
        if is_premium:
            return True

        limit = self._default_limit if daily_limit is None else daily_limit
        key = self.key_for(feature_key)
        count = await self._count(key)
        if count >= limit:
            logger.info(
                "daily quota reached",
                extra={"feature": feature_key, "count": count, "limit": limit},
            )
            return False

        if not await self._store.set(key, count + 1, ttl=_KEY_TTL_SECONDS):
            logger.warning("quota counter not persisted, allowing", extra={"feature": feature_key})
        return True


__all__ = [
    "AFFIRMATION_FEATURE",
    "DEFAULT_DAILY_LIMIT",
    "PROMPT_FEATURE",
    "QUOTE_FEATURE",
    "QuotaGuard",
]
