"""Router construction for the AI collaborators."""

from __future__ import annotations

import logging

from zensai.libs.llm_router import LLMRouter, OpenAIProvider, OpenRouterProvider
from zensai.libs.schemas import AppSettings

LOGGER = logging.getLogger(__name__)


def build_router(settings: AppSettings) -> LLMRouter:
    """Register every provider that has credentials, in the configured failover order."""

    router = LLMRouter()
    available: list[str] = []

    for key in settings.provider_order:
        if key == "openai" and settings.openai_api_key:
            router.register_provider(
                "openai",
                OpenAIProvider(
                    settings.openai_api_key,
                    model_chat=settings.model_chat,
                    timeout=settings.llm_timeout_seconds,
                ),
                daily_budget=settings.llm_daily_budget,
            )
            available.append("openai")
        elif key == "openrouter" and settings.openrouter_api_key:
            try:
                provider = OpenRouterProvider(
                    settings.openrouter_api_key,
                    timeout=settings.llm_timeout_seconds,
                )
            except ValueError as exc:
                LOGGER.warning("Failed to initialise OpenRouter provider: %s", exc)
                continue
            router.register_provider("openrouter", provider, daily_budget=settings.llm_daily_budget)
            available.append("openrouter")
        else:
            LOGGER.debug("LLM provider %s skipped (unknown or missing credentials)", key)

    if available:
        router.set_policy(available)
    else:
        LOGGER.warning("No LLM providers configured; AI stages will use fallback content")

    LOGGER.info(
        "Router configured",
        extra={"event": "router_config", "providers": available, "model_chat": settings.model_chat},
    )
    return router


__all__ = ["build_router"]
