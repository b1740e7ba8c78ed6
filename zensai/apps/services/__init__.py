"""AI collaborators: contracts plus the LLM-backed implementations."""

from .contracts import (
    AffirmationRequest,
    AffirmationResponse,
    AffirmationService,
    MoodAnalysisRequest,
    MoodAnalysisResponse,
    MoodAnalysisService,
    PromptRequest,
    PromptResponse,
    PromptService,
    QuoteRequest,
    QuoteResponse,
    QuoteService,
)
from .llm import build_router
from .zeno import (
    ZenoAffirmationService,
    ZenoMoodAnalysisService,
    ZenoPromptService,
    ZenoQuoteService,
)

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
    "ZenoAffirmationService",
    "ZenoMoodAnalysisService",
    "ZenoPromptService",
    "ZenoQuoteService",
    "build_router",
]
