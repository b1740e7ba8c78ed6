"""Per-user orchestrator wiring the engine components together.

A `JournalSession` lives from sign-in to sign-out. It owns the quota guard,
classifier, pipeline, live suggestion debouncer and engagement reconciler for
one user; `SessionRegistry` keeps one session per user id.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Iterable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from zensai.apps.services.contracts import (
    AffirmationService,
    MoodAnalysisService,
    PromptRequest,
    PromptService,
    QuoteService,
)
from zensai.core.errors import ErrorCode, PersistenceError, QuotaExceededError
from zensai.core.models import BadgeNotification, EnrichmentResult, JournalEntry, PhotoRef, Profile
from zensai.core.mood import MoodLevel
from zensai.core.validation import validate_content, validate_mood, validate_title
from zensai.libs.persistence import JournalStore
from zensai.libs.schemas import AppSettings
from zensai.libs.storage import SafeKeyValueStore

from .engagement import EngagementSnapshot, EngagementStateReconciler
from .enrichment import EnrichmentPipeline, MoodPrecedence
from .fallback import FallbackContentProvider
from .mood import MoodClassifier
from .quota import PROMPT_FEATURE, QuotaGuard
from .suggestion import MoodState, MoodSuggestionDebouncer, SuggestionView

logger = logging.getLogger(__name__)

PROMPT_QUOTA_MESSAGE = "Daily limit reached. Upgrade to Premium for unlimited journaling prompts."
_SHOWN_PROMPTS_KEPT = 10


def resolve_timezone(name: str | None) -> tzinfo:
    """IANA zone for `name`, or UTC when missing or unknown."""

    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("unknown timezone, using UTC", extra={"timezone": name})
        return timezone.utc


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class DailyPrompt:
    prompt: str
    source: str
    degraded: bool = False


@dataclass(slots=True)
class SessionServices:
    mood: MoodAnalysisService
    affirmations: AffirmationService
    quotes: QuoteService
    prompts: PromptService


class JournalSession:
    def __init__(
        self,
        user_id: str,
        *,
        settings: AppSettings,
        store: JournalStore,
        kv: SafeKeyValueStore,
        services: SessionServices,
        fallback: FallbackContentProvider | None = None,
        user_name: str | None = None,
        precedence: MoodPrecedence = MoodPrecedence.AI_FIRST,
        tz_name: str | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.user_id = user_id
        self._clock = clock
        self.tz_name = tz_name
        self._tz = resolve_timezone(tz_name)
        self._store = store
        self._services = services
        self._user_name = user_name
        self.fallback = fallback or FallbackContentProvider(today=self.today)
        self.mood_state = MoodState()
        self.quota = QuotaGuard(
            kv,
            namespace=f"zensai-feature-{user_id}",
            default_limit=settings.free_daily_limit,
            today=self.today,
        )
        self.reconciler = EngagementStateReconciler(store, user_id)
        self.classifier = MoodClassifier(
            services.mood,
            text_cap=settings.classifier_text_cap,
            user_name=user_name,
        )
        self.pipeline = EnrichmentPipeline(
            user_id=user_id,
            store=store,
            classifier=self.classifier,
            quota=self.quota,
            fallback=self.fallback,
            affirmations=services.affirmations,
            quotes=services.quotes,
            reconciler=self.reconciler,
            is_premium=self.is_premium,
            user_name=user_name,
            precedence=precedence,
        )
        self.suggestions = MoodSuggestionDebouncer(
            self.classifier,
            self.mood_state,
            min_chars=settings.suggestion_min_chars,
            delay_seconds=settings.suggestion_debounce_seconds,
            confirmation_seconds=settings.confirmation_seconds,
        )
        self._shown_prompts: deque[str] = deque(maxlen=_SHOWN_PROMPTS_KEPT)
        self._closed = False

    @property
    def profile(self) -> Profile | None:
        return self.reconciler.profile

    @property
    def closed(self) -> bool:
        return self._closed

    def today(self) -> date:
        """The user's local calendar date."""

        return self._clock().astimezone(self._tz).date()

    def set_timezone(self, tz_name: str | None) -> None:
        if not tz_name or tz_name == self.tz_name:
            return
        self.tz_name = tz_name
        self._tz = resolve_timezone(tz_name)

    def is_premium(self) -> bool:
        profile = self.reconciler.profile
        return bool(profile and profile.is_premium())

    async def start(self) -> EngagementSnapshot:
        """Seed profile and badge state; no notifications come from this read."""

        return await self.reconciler.load()

    async def submit_entry(
        self,
        content: str,
        title: str | None = None,
        mood: MoodLevel | int | str | None = None,
        photo: PhotoRef | None = None,
    ) -> EnrichmentResult:
        selected = mood if mood is not None else self.mood_state.selected
        if selected is None:
            selected = MoodLevel.NEUTRAL
        result = await self.pipeline.submit(content, title, selected, photo)
        self.mood_state.selected = result.final_mood
        self.suggestions.on_submitted()
        return result

    async def update_entry(
        self,
        entry_id: str,
        *,
        content: str,
        title: str | None = None,
        mood: MoodLevel | int | str,
    ) -> JournalEntry:
        text = validate_content(content)
        clean_title = validate_title(title)
        level = validate_mood(mood)
        try:
            previous = await self._store.get_entry(self.user_id, entry_id)
            entry = await self._store.update_entry(
                self.user_id,
                entry_id,
                content=text,
                title=clean_title,
                mood=level,
            )
        except Exception as exc:
            logger.error("entry update failed", extra={"user_id": self.user_id, "entry_id": entry_id}, exc_info=True)
            raise PersistenceError(
                "Failed to update your entry. Please try again.",
                code=ErrorCode.JOURNAL_UPDATE_FAILED,
            ) from exc
        if previous.mood != entry.mood:
            await self.reconciler.after_mutation()
        return entry

    async def delete_entry(self, entry_id: str) -> EngagementSnapshot:
        try:
            await self._store.delete_entry(self.user_id, entry_id)
        except Exception as exc:
            logger.error("entry delete failed", extra={"user_id": self.user_id, "entry_id": entry_id}, exc_info=True)
            raise PersistenceError(
                "Failed to delete your entry. Please try again.",
                code=ErrorCode.JOURNAL_DELETE_FAILED,
            ) from exc
        return await self.reconciler.after_mutation()

    async def daily_prompt(
        self,
        mood: MoodLevel | int | str | None = None,
        previously_shown: Iterable[str] = (),
    ) -> DailyPrompt:
        level = validate_mood(mood) if mood is not None else None
        shown = list(dict.fromkeys([*previously_shown, *self._shown_prompts]))
        if not await self.quota.check_and_consume(PROMPT_FEATURE, self.is_premium()):
            raise QuotaExceededError(PROMPT_FEATURE, PROMPT_QUOTA_MESSAGE)

        request = PromptRequest(
            mood_label=level.label if level else None,
            user_name=self._user_name,
            previous_prompts=shown,
        )
        try:
            response = await self._services.prompts.generate(request)
        except Exception:
            logger.warning("prompt service failed", extra={"user_id": self.user_id}, exc_info=True)
            response = None

        text = (response.prompt or "").strip() if response else ""
        if response is None or not response.success or not text:
            return DailyPrompt(prompt=self.fallback.fallback_prompt(level, shown), source="fallback", degraded=True)
        self._shown_prompts.append(text)
        return DailyPrompt(prompt=text, source=response.source, degraded=response.source == "fallback")

    def select_mood(self, mood: MoodLevel | int | str) -> MoodLevel:
        level = validate_mood(mood)
        self.mood_state.selected = level
        return level

    def on_text_change(self, text: str, selected_mood: MoodLevel | int | str | None = None) -> SuggestionView:
        if selected_mood is not None:
            self.select_mood(selected_mood)
        self.suggestions.on_text_change(text)
        return self.suggestions.view()

    def suggestion(self) -> SuggestionView:
        return self.suggestions.view()

    def accept_suggestion(self) -> SuggestionView:
        self.suggestions.accept()
        return self.suggestions.view()

    def dismiss_suggestion(self) -> SuggestionView:
        self.suggestions.dismiss()
        return self.suggestions.view()

    def badge_notifications(self) -> list[BadgeNotification]:
        return self.reconciler.drain_notifications()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.suggestions.close()
        logger.debug("session closed", extra={"user_id": self.user_id})


class SessionRegistry:
    """One live `JournalSession` per user id.

    Session start-up reads the profile and badges over the network, so it is
    serialized per user only; other users' first requests are not held up.
    """

    def __init__(
        self,
        *,
        settings: AppSettings,
        store: JournalStore,
        kv: SafeKeyValueStore,
        services: SessionServices,
    ) -> None:
        self._settings = settings
        self._store = store
        self._kv = kv
        self._services = services
        self._sessions: dict[str, JournalSession] = {}
        self._starting: dict[str, asyncio.Lock] = {}

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    async def get(self, user_id: str, *, tz_name: str | None = None) -> JournalSession:
        session = self._sessions.get(user_id)
        if session is None:
            session = await self._open(user_id, tz_name)
        session.set_timezone(tz_name)
        return session

    async def _open(self, user_id: str, tz_name: str | None) -> JournalSession:
        lock = self._starting.setdefault(user_id, asyncio.Lock())
        async with lock:
            session = self._sessions.get(user_id)
            if session is not None:
                return session
            session = JournalSession(
                user_id,
                settings=self._settings,
                store=self._store,
                kv=self._kv,
                services=self._services,
                tz_name=tz_name,
            )
            await session.start()
            self._sessions[user_id] = session
            logger.info("session started", extra={"user_id": user_id, "timezone": session.tz_name})
        if not lock.locked():
            self._starting.pop(user_id, None)
        return session

    async def dispose(self, user_id: str) -> bool:
        session = self._sessions.pop(user_id, None)
        if session is None:
            return False
        await session.close()
        logger.info("session disposed", extra={"user_id": user_id})
        return True

    async def close_all(self) -> None:
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await session.close()


__all__ = ["DailyPrompt", "JournalSession", "SessionRegistry", "SessionServices", "resolve_timezone"]
