"""Request/response shapes of the AI collaborators.

Every service answers with `success` plus content; when `success` is false the
content fields may still carry the provider-side fallback.
"""

from __future__ import annotations

from typing import Literal, Protocol

from pydantic import BaseModel, Field

Source = Literal["ai", "fallback"]


class MoodAnalysisRequest(BaseModel):
    text: str
    user_name: str | None = None


class MoodAnalysisResponse(BaseModel):
    success: bool
    mood_label: str = "neutral"
    confidence: float | None = None
    error: str | None = None


class AffirmationRequest(BaseModel):
    entry_text: str
    mood_label: str
    user_name: str | None = None


class AffirmationResponse(BaseModel):
    success: bool
    affirmation_text: str = ""
    source: Source = "ai"
    error: str | None = None


class QuoteRequest(BaseModel):
    mood_label: str
    entry_text: str | None = None
    user_name: str | None = None
    previously_shown_quotes: list[str] = Field(default_factory=list)


class QuoteResponse(BaseModel):
    success: bool
    quote: str = ""
    attribution: str | None = None
    source: Source = "ai"
    error: str | None = None


class PromptRequest(BaseModel):
    mood_label: str | None = None
    user_name: str | None = None
    previous_prompts: list[str] = Field(default_factory=list)


class PromptResponse(BaseModel):
    success: bool
    prompt: str = ""
    source: Source = "ai"
    error: str | None = None


class MoodAnalysisService(Protocol):
    async def analyze(self, request: MoodAnalysisRequest) -> MoodAnalysisResponse: ...


class AffirmationService(Protocol):
    async def generate(self, request: AffirmationRequest) -> AffirmationResponse: ...


class QuoteService(Protocol):
    async def generate(self, request: QuoteRequest) -> QuoteResponse: ...


class PromptService(Protocol):
    async def generate(self, request: PromptRequest) -> PromptResponse: ...


__all__ = [
    "AffirmationRequest",
    "AffirmationResponse",
    "AffirmationService",
    "MoodAnalysisRequest",
    "MoodAnalysisResponse",
    "MoodAnalysisService",
    "PromptRequest",
    "PromptResponse",
    "PromptService",
    "QuoteRequest",
    "QuoteResponse",
    "QuoteService",
]
