"""Mood classification over the mood-analysis service with lexical normalisation."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from zensai.apps.services.contracts import MoodAnalysisRequest, MoodAnalysisService
from zensai.core.errors import EntryValidationError, ErrorCode
from zensai.core.mood import MoodLevel

logger = logging.getLogger(__name__)

DEFAULT_TEXT_CAP = 2000

# Checked in this order; the first list with a hit wins.
MOOD_SYNONYMS: tuple[tuple[MoodLevel, tuple[str, ...]], ...] = (
    (
        MoodLevel.STRUGGLING,
        ("depress", "despair", "hopeless", "overwhelm", "anxious", "panic", "stressed", "terrible"),
    ),
    (
        MoodLevel.LOW,
        ("sad", "down", "disappoint", "melancholy", "blue", "upset", "worried", "concern"),
    ),
    (
        MoodLevel.GOOD,
        (
            "happy", "joy", "pleased", "content", "satisfied", "positive",
            "optimistic", "hopeful", "cheerful", "upbeat",
        ),
    ),
    (
        MoodLevel.AMAZING,
        (
            "ecstatic", "elated", "thrilled", "euphoric", "fantastic",
            "wonderful", "excellent", "brilliant", "incredible", "overjoyed",
        ),
    ),
)


def resolve_mood_label(label: str | None) -> MoodLevel:
    """Map a free-text mood label onto the five-level scale."""

    normalized = (label or "").strip().lower()
    if not normalized:
        return MoodLevel.NEUTRAL
    try:
        return MoodLevel.from_label(normalized)
    except ValueError:
        pass
    for level, synonyms in MOOD_SYNONYMS:
        if any(word in normalized for word in synonyms):
            return level
    return MoodLevel.NEUTRAL


@dataclass(slots=True)
class Classification:
    mood: MoodLevel
    degraded: bool = False
    raw_label: str | None = None
    confidence: float | None = None
    error: str | None = None


class MoodClassifier:
    def __init__(
        self,
        service: MoodAnalysisService,
        *,
        text_cap: int = DEFAULT_TEXT_CAP,
        user_name: str | None = None,
    ) -> None:
        self._service = service
        self._text_cap = text_cap
        self._user_name = user_name

    def _truncate(self, text: str) -> str:
        if len(text) <= self._text_cap:
            return text
        return text[: self._text_cap] + "..."

    async def classify(self, text: str) -> Classification:
        """Classify entry text; service failures fold into a degraded neutral result."""

        cleaned = (text or "").strip()
        if not cleaned:
            raise EntryValidationError(
                "Journal entry is required for mood analysis.",
                code=ErrorCode.JOURNAL_ENTRY_EMPTY,
            )

        request = MoodAnalysisRequest(text=self._truncate(cleaned), user_name=self._user_name)
        try:
            response = await self._service.analyze(request)
        except Exception as exc:
            logger.warning("mood analysis call failed, using neutral", exc_info=True)
            return Classification(mood=MoodLevel.NEUTRAL, degraded=True, error=str(exc))

        if not response.success:
            logger.warning("mood analysis unsuccessful: %s", response.error)
            return Classification(
                mood=MoodLevel.NEUTRAL,
                degraded=True,
                raw_label=response.mood_label,
                error=response.error or "mood analysis failed",
            )

        return Classification(
            mood=resolve_mood_label(response.mood_label),
            raw_label=response.mood_label,
            confidence=response.confidence,
        )


__all__ = ["Classification", "DEFAULT_TEXT_CAP", "MOOD_SYNONYMS", "MoodClassifier", "resolve_mood_label"]
