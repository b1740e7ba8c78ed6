"""Model-agnostic LLM routing utilities."""

from .base import BaseProvider
from .openai_provider import OpenAIProvider
from .openrouter import OPENROUTER_DEFAULT_BASE_URL, OpenRouterProvider
from .router import (
    AllProvidersFailedError,
    BudgetExceededError,
    DailyBudget,
    LLMRouteConfig,
    LLMRouter,
)
from .types import LLMResponse, Task

__all__ = [
    "AllProvidersFailedError",
    "BaseProvider",
    "BudgetExceededError",
    "DailyBudget",
    "LLMResponse",
    "LLMRouteConfig",
    "LLMRouter",
    "OPENROUTER_DEFAULT_BASE_URL",
    "OpenAIProvider",
    "OpenRouterProvider",
    "Task",
]
