"""Re-reads streak and badge state after entry mutations and detects new badges.

Streak and badge progress are computed by the database; this component only
reads them back and diffs the earned badge ids against what it saw last time.
At most one notification is emitted per reconciliation, for the first newly
earned badge in server order.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable

from zensai.core.models import Badge, BadgeNotification, Profile
from zensai.libs.persistence import JournalStore

logger = logging.getLogger(__name__)

BadgeListener = Callable[[BadgeNotification], None]


@dataclass(slots=True)
class EngagementSnapshot:
    profile: Profile | None
    badges: list[Badge] = field(default_factory=list)
    newly_earned: list[str] = field(default_factory=list)
    stale: bool = False

    @property
    def streak(self) -> int:
        return self.profile.current_streak if self.profile else 0

    @property
    def best_streak(self) -> int:
        return self.profile.best_streak if self.profile else 0


def badge_message(badge: Badge) -> str:
    return f'Congratulations! You\'ve earned the "{badge.name}" badge!'


class EngagementStateReconciler:
    def __init__(self, store: JournalStore, user_id: str) -> None:
        self._store = store
        self._user_id = user_id
        self._profile: Profile | None = None
        self._badges: list[Badge] = []
        self._previous_earned: set[str] | None = None
        self._listeners: list[BadgeListener] = []
        self._pending: deque[BadgeNotification] = deque(maxlen=50)

    @property
    def profile(self) -> Profile | None:
        return self._profile

    @property
    def badges(self) -> list[Badge]:
        return list(self._badges)

    @property
    def seeded(self) -> bool:
        return self._previous_earned is not None

    def add_listener(self, listener: BadgeListener) -> None:
        self._listeners.append(listener)

    def drain_notifications(self) -> list[BadgeNotification]:
        items = list(self._pending)
        self._pending.clear()
        return items

    async def load(self) -> EngagementSnapshot:
        """Initial read; seeds the earned set without notifying."""

        return await self._reconcile()

    async def after_mutation(self) -> EngagementSnapshot:
        """Call after an entry insert or delete."""

        return await self._reconcile()

    async def _reconcile(self) -> EngagementSnapshot:
        stale = False
        try:
            self._profile = await self._store.get_profile(self._user_id)
        except Exception:
            stale = True
            logger.error("profile reload failed", extra={"user_id": self._user_id}, exc_info=True)

        try:
            badges = await self._store.get_badge_progress(self._user_id)
        except Exception:
            logger.error("badge reload failed", extra={"user_id": self._user_id}, exc_info=True)
            return EngagementSnapshot(profile=self._profile, badges=list(self._badges), stale=True)

        self._badges = badges
        current_order = [badge.id for badge in badges if badge.earned]
        current = set(current_order)

        if self._previous_earned is None:
            self._previous_earned = current
            return EngagementSnapshot(profile=self._profile, badges=list(badges), stale=stale)

        newly_earned = [badge_id for badge_id in current_order if badge_id not in self._previous_earned]
        if newly_earned:
            first = next(badge for badge in badges if badge.id == newly_earned[0])
            self._emit(BadgeNotification(user_id=self._user_id, badge=first, message=badge_message(first)))
        self._previous_earned = current

        return EngagementSnapshot(
            profile=self._profile,
            badges=list(badges),
            newly_earned=newly_earned,
            stale=stale,
        )

    def _emit(self, notification: BadgeNotification) -> None:
        logger.info(
            "badge earned",
            extra={"user_id": notification.user_id, "badge_id": notification.badge.id},
        )
        self._pending.append(notification)
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception("badge listener failed")


__all__ = ["BadgeListener", "EngagementSnapshot", "EngagementStateReconciler", "badge_message"]
