"""Entry submission pipeline: classify, persist, affirm, quote, reconcile.

Stages run strictly in sequence. Persistence is the only hard failure; every
other stage degrades to fallback content and records itself in
`EnrichmentResult.degraded_steps`.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from enum import Enum
from typing import Callable

from zensai.apps.engine.engagement import EngagementStateReconciler
from zensai.apps.engine.fallback import FallbackContentProvider
from zensai.apps.engine.mood import Classification, MoodClassifier
from zensai.apps.engine.quota import AFFIRMATION_FEATURE, QUOTE_FEATURE, QuotaGuard
from zensai.apps.services.contracts import (
    AffirmationRequest,
    AffirmationService,
    QuoteRequest,
    QuoteService,
)
from zensai.core.errors import PersistenceError, PremiumRequiredError
from zensai.core.models import (
    ContentSource,
    EnrichmentResult,
    JournalEntry,
    PhotoRef,
    QuoteContent,
    Stage,
    StageOutcome,
)
from zensai.core.mood import MoodLevel
from zensai.core.validation import validate_content, validate_mood, validate_title
from zensai.libs.persistence import JournalStore

from .messages import (
    AFFIRMATION_FALLBACK_NOTE,
    AFFIRMATION_QUOTA_NOTE,
    QUOTE_FALLBACK_NOTE,
    QUOTE_QUOTA_NOTE,
    compose_success_message,
)

logger = logging.getLogger(__name__)

PHOTO_FEATURE = "photo-attachments"
_SHOWN_QUOTES_KEPT = 10


class PipelineState(str, Enum):
    IDLE = "idle"
    CLASSIFYING = "classifying"
    PERSISTING = "persisting"
    AFFIRMING = "affirming"
    QUOTING = "quoting"
    DONE = "done"
    FAILED = "failed"


class MoodPrecedence(str, Enum):
    """Which mood wins when both the AI reading and the user's pick exist."""

    AI_FIRST = "ai_first"
    USER_FIRST = "user_first"

    def resolve(self, user_selected: MoodLevel, classification: Classification | None) -> MoodLevel:
        if classification is None or classification.degraded:
            return user_selected
        if self is MoodPrecedence.USER_FIRST:
            return user_selected
        return classification.mood


class EnrichmentPipeline:
    def __init__(
        self,
        *,
        user_id: str,
        store: JournalStore,
        classifier: MoodClassifier,
        quota: QuotaGuard,
        fallback: FallbackContentProvider,
        affirmations: AffirmationService,
        quotes: QuoteService,
        reconciler: EngagementStateReconciler,
        is_premium: Callable[[], bool],
        user_name: str | None = None,
        precedence: MoodPrecedence = MoodPrecedence.AI_FIRST,
    ) -> None:
        self._user_id = user_id
        self._store = store
        self._classifier = classifier
        self._quota = quota
        self._fallback = fallback
        self._affirmations = affirmations
        self._quotes = quotes
        self._reconciler = reconciler
        self._is_premium = is_premium
        self._user_name = user_name
        self.precedence = precedence
        self.state = PipelineState.IDLE
        self._shown_quotes: deque[str] = deque(maxlen=_SHOWN_QUOTES_KEPT)
        self._lock = asyncio.Lock()

    def _enter(self, state: PipelineState) -> None:
        self.state = state
        logger.debug("pipeline state", extra={"user_id": self._user_id, "state": state.value})

    async def submit(
        self,
        content: str,
        title: str | None,
        user_selected_mood: MoodLevel | int | str,
        photo: PhotoRef | None = None,
    ) -> EnrichmentResult:
        text = validate_content(content)
        clean_title = validate_title(title)
        selected = validate_mood(user_selected_mood)
        premium = self._is_premium()
        if photo is not None and not premium:
            raise PremiumRequiredError(
                PHOTO_FEATURE,
                "Photo uploads are a premium feature. Please upgrade to add photos to your entries.",
            )

        async with self._lock:
            degraded: set[Stage] = set()

            self._enter(PipelineState.CLASSIFYING)
            final_mood = await self._classify(text, selected, degraded)

            self._enter(PipelineState.PERSISTING)
            entry = await self._persist(text, clean_title, final_mood, photo)

            self._enter(PipelineState.AFFIRMING)
            affirmation = await self._affirm(text, final_mood, premium)
            if affirmation.degraded:
                degraded.add(Stage.AFFIRMATION)

            self._enter(PipelineState.QUOTING)
            quote = await self._quote(text, final_mood, premium)
            if quote.degraded:
                degraded.add(Stage.QUOTE)

            snapshot = await self._reconciler.after_mutation()
            result = EnrichmentResult(
                final_mood=final_mood,
                entry=entry,
                affirmation=affirmation,
                quote=quote,
                message=compose_success_message(snapshot.streak, snapshot.best_streak, final_mood),
                streak=snapshot.streak,
                best_streak=snapshot.best_streak,
                degraded_steps=degraded,
            )
            self._enter(PipelineState.DONE)
            logger.info(
                "entry enriched",
                extra={
                    "user_id": self._user_id,
                    "entry_id": entry.id,
                    "mood": final_mood.label,
                    "degraded": sorted(stage.value for stage in degraded),
                },
            )
            return result

    async def _classify(self, text: str, selected: MoodLevel, degraded: set[Stage]) -> MoodLevel:
        classification: Classification | None
        try:
            classification = await self._classifier.classify(text)
        except Exception:
            logger.warning("mood classification raised, keeping user mood", exc_info=True)
            classification = None

        if classification is None or classification.degraded:
            degraded.add(Stage.CLASSIFICATION)
        return self.precedence.resolve(selected, classification)

    async def _persist(
        self,
        text: str,
        title: str | None,
        mood: MoodLevel,
        photo: PhotoRef | None,
    ) -> JournalEntry:
        try:
            return await self._store.insert_entry(self._user_id, text, title, mood, photo)
        except Exception as exc:
            self._enter(PipelineState.FAILED)
            logger.error("entry insert failed", extra={"user_id": self._user_id}, exc_info=True)
            raise PersistenceError() from exc

    async def _affirm(self, text: str, mood: MoodLevel, premium: bool) -> StageOutcome[str]:
        if not await self._quota.check_and_consume(AFFIRMATION_FEATURE, premium):
            return StageOutcome(
                value=self._fallback.fallback_affirmation(mood),
                source=ContentSource.QUOTA,
                degraded=True,
                quota_exceeded=True,
                note=AFFIRMATION_QUOTA_NOTE,
            )

        request = AffirmationRequest(entry_text=text, mood_label=mood.label, user_name=self._user_name)
        try:
            response = await self._affirmations.generate(request)
        except Exception:
            logger.warning("affirmation service failed", extra={"user_id": self._user_id}, exc_info=True)
            response = None

        affirmation = (response.affirmation_text or "").strip() if response else ""
        if response is None or not response.success or not affirmation:
            if response is not None:
                logger.warning("affirmation unavailable: %s", response.error or "empty result")
            return StageOutcome(
                value=self._fallback.fallback_affirmation(mood),
                source=ContentSource.FALLBACK,
                degraded=True,
                note=AFFIRMATION_FALLBACK_NOTE,
            )
        if response.source == "fallback":
            return StageOutcome(value=affirmation, source=ContentSource.FALLBACK, degraded=True)
        return StageOutcome(value=affirmation)

    async def _quote(self, text: str, mood: MoodLevel, premium: bool) -> StageOutcome[QuoteContent]:
        if not await self._quota.check_and_consume(QUOTE_FEATURE, premium):
            return StageOutcome(
                value=self._fallback.fallback_quote(mood),
                source=ContentSource.QUOTA,
                degraded=True,
                quota_exceeded=True,
                note=QUOTE_QUOTA_NOTE,
            )

        request = QuoteRequest(
            mood_label=mood.label,
            entry_text=text,
            user_name=self._user_name,
            previously_shown_quotes=list(self._shown_quotes),
        )
        try:
            response = await self._quotes.generate(request)
        except Exception:
            logger.warning("quote service failed", extra={"user_id": self._user_id}, exc_info=True)
            response = None

        quote_text = (response.quote or "").strip() if response else ""
        if response is None or not response.success or not quote_text:
            if response is not None:
                logger.warning("quote unavailable: %s", response.error or "empty result")
            return StageOutcome(
                value=self._fallback.fallback_quote(mood),
                source=ContentSource.FALLBACK,
                degraded=True,
                note=QUOTE_FALLBACK_NOTE,
            )

        self._shown_quotes.append(quote_text)
        content = QuoteContent(quote=quote_text, attribution=response.attribution)
        if response.source == "fallback":
            return StageOutcome(value=content, source=ContentSource.FALLBACK, degraded=True)
        return StageOutcome(value=content)


__all__ = ["EnrichmentPipeline", "MoodPrecedence", "PHOTO_FEATURE", "PipelineState"]
