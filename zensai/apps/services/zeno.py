"""LLM-backed implementations of the AI collaborator contracts.

Each service routes through `LLMRouter` and reports provider failures as
``success=False`` instead of raising; callers decide which fallback to show.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from zensai.libs.json_utils import parse_json_object
from zensai.libs.llm_router import LLMRouter, Task
from zensai.prompts import (
    AFFIRMATION_SYSTEM_PROMPT,
    JOURNAL_PROMPT_SYSTEM_PROMPT,
    MOOD_ANALYSIS_SYSTEM_PROMPT,
    MOOD_QUOTE_SYSTEM_PROMPT,
)

from .contracts import (
    AffirmationRequest,
    AffirmationResponse,
    MoodAnalysisRequest,
    MoodAnalysisResponse,
    PromptRequest,
    PromptResponse,
    QuoteRequest,
    QuoteResponse,
)

logger = logging.getLogger(__name__)

_QUOTE_CONTEXT_CHARS = 200
_AFFIRMATION_ENTRY_CHARS = 1000


def _name_line(user_name: str | None) -> str:
    return f"The user's name is {user_name}.\n" if user_name else ""


def _strip_quotes(text: str) -> str:
    cleaned = text.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
        cleaned = cleaned[1:-1].strip()
    return cleaned


class _RoutedService:
    def __init__(self, router: LLMRouter, *, model: str) -> None:
        self._router = router
        self._model = model

    async def _complete(
        self,
        task: Task,
        system: str,
        user: str,
        **kwargs: Any,
    ) -> str:
        messages: Sequence[Mapping[str, str]] = (
            {"role": "system", "content": system.strip()},
            {"role": "user", "content": user},
        )
        response = await self._router.chat(messages=messages, model=self._model, task=task, **kwargs)
        return (response.text or "").strip()


class ZenoMoodAnalysisService(_RoutedService):
    async def analyze(self, request: MoodAnalysisRequest) -> MoodAnalysisResponse:
        system = MOOD_ANALYSIS_SYSTEM_PROMPT.format(name_line=_name_line(request.user_name))
        try:
            text = await self._complete(
                Task.MOOD,
                system,
                f'Please analyze the emotional tone of this journal entry: "{request.text}"',
                temperature=0.3,
                max_tokens=10,
            )
        except Exception as exc:
            logger.warning("mood analysis failed: %s", exc)
            return MoodAnalysisResponse(success=False, error=str(exc))
        if not text:
            return MoodAnalysisResponse(success=False, error="empty mood label")
        return MoodAnalysisResponse(success=True, mood_label=_strip_quotes(text).lower().rstrip("."))


class ZenoAffirmationService(_RoutedService):
    async def generate(self, request: AffirmationRequest) -> AffirmationResponse:
        system = AFFIRMATION_SYSTEM_PROMPT.format(
            name_line=_name_line(request.user_name),
            mood=request.mood_label,
        )
        entry = request.entry_text[:_AFFIRMATION_ENTRY_CHARS]
        try:
            text = await self._complete(
                Task.AFFIRMATION,
                system,
                f'Based on this journal entry and the detected mood of "{request.mood_label}", '
                f'please create a personalized affirmation: "{entry}"',
                temperature=0.7,
                max_tokens=100,
            )
        except Exception as exc:
            logger.warning("affirmation generation failed: %s", exc)
            return AffirmationResponse(success=False, source="fallback", error=str(exc))
        affirmation = _strip_quotes(text)
        if not affirmation:
            return AffirmationResponse(success=False, source="fallback", error="empty affirmation")
        return AffirmationResponse(success=True, affirmation_text=affirmation)


class ZenoQuoteService(_RoutedService):
    async def generate(self, request: QuoteRequest) -> QuoteResponse:
        avoid = request.previously_shown_quotes
        system = MOOD_QUOTE_SYSTEM_PROMPT.format(
            name_line=_name_line(request.user_name),
            avoid_line=f"Avoid repeating these recent quotes: {', '.join(avoid)}\n" if avoid else "",
            mood=request.mood_label,
            context_line=(
                f'Journal context: "{request.entry_text[:_QUOTE_CONTEXT_CHARS]}..."\n'
                if request.entry_text
                else ""
            ),
        )
        try:
            text = await self._complete(
                Task.QUOTE,
                system,
                f'Generate a thoughtful quote for someone feeling "{request.mood_label}".',
                temperature=0.8,
                max_tokens=150,
            )
        except Exception as exc:
            logger.warning("quote generation failed: %s", exc)
            return QuoteResponse(success=False, source="fallback", error=str(exc))
        return parse_quote(text)


def parse_quote(text: str) -> QuoteResponse:
    """Accept the JSON shape the prompt asks for, or a bare quote line."""

    payload = parse_json_object(text)
    if payload is not None:
        quote = _strip_quotes(str(payload.get("quote") or ""))
        attribution = payload.get("attribution")
        attribution = str(attribution).strip() if attribution else None
    else:
        quote, attribution = _strip_quotes(text), None
    if not quote:
        return QuoteResponse(success=False, source="fallback", error="empty quote")
    return QuoteResponse(success=True, quote=quote, attribution=attribution or None)


class ZenoPromptService(_RoutedService):
    async def generate(self, request: PromptRequest) -> PromptResponse:
        previous = request.previous_prompts
        system = JOURNAL_PROMPT_SYSTEM_PROMPT.format(
            name_line=_name_line(request.user_name),
            mood_line=(
                f"The user's current mood is: {request.mood_label}. Consider this when crafting the prompt.\n"
                if request.mood_label
                else ""
            ),
            avoid_line=f"Avoid repeating these recent prompts: {', '.join(previous)}\n" if previous else "",
        )
        try:
            text = await self._complete(
                Task.PROMPT,
                system,
                "Generate a thoughtful journaling prompt for today.",
                temperature=0.8,
                max_tokens=150,
            )
        except Exception as exc:
            logger.warning("prompt generation failed: %s", exc)
            return PromptResponse(success=False, source="fallback", error=str(exc))
        prompt = _strip_quotes(text)
        if not prompt:
            return PromptResponse(success=False, source="fallback", error="empty prompt")
        return PromptResponse(success=True, prompt=prompt)


__all__ = [
    "ZenoAffirmationService",
    "ZenoMoodAnalysisService",
    "ZenoPromptService",
    "ZenoQuoteService",
    "parse_quote",
]
