from typing import Any

import pytest

from zensai.apps.services import (
    AffirmationRequest,
    MoodAnalysisRequest,
    PromptRequest,
    QuoteRequest,
    ZenoAffirmationService,
    ZenoMoodAnalysisService,
    ZenoPromptService,
    ZenoQuoteService,
    build_router,
)
from zensai.apps.services.zeno import parse_quote
from zensai.libs.llm_router import BaseProvider, LLMResponse, LLMRouter, Task
from zensai.libs.schemas import AppSettings


class ScriptedProvider(BaseProvider):
    def __init__(self, text: str) -> None:
        super().__init__(name="scripted")
        self.text = text
        self.calls: list[dict[str, Any]] = []

    async def chat(self, *, messages, model: str, **kwargs: Any) -> LLMResponse:
        self.calls.append({"messages": list(messages), "model": model, **kwargs})
        return LLMResponse(model=model, text=self.text)


class DownProvider(BaseProvider):
    def __init__(self) -> None:
        super().__init__(name="down")

    async def chat(self, *, messages, model: str, **kwargs: Any) -> LLMResponse:
        raise RuntimeError("connection refused")


def _router(provider: BaseProvider) -> LLMRouter:
    router = LLMRouter()
    router.register_provider(provider.name, provider)
    return router


@pytest.mark.asyncio
async def test_mood_analysis_normalises_label():
    provider = ScriptedProvider(' "Struggling." ')
    service = ZenoMoodAnalysisService(_router(provider), model="gpt-4o-mini")

    response = await service.analyze(MoodAnalysisRequest(text="Everything piled up.", user_name="Ada"))

    assert response.success is True
    assert response.mood_label == "struggling"
    assert "Ada" in provider.calls[0]["messages"][0]["content"]
    assert provider.calls[0]["max_tokens"] == 10


@pytest.mark.asyncio
async def test_services_report_failure_without_raising():
    router = _router(DownProvider())

    mood = await ZenoMoodAnalysisService(router, model="m").analyze(MoodAnalysisRequest(text="hi there"))
    affirmation = await ZenoAffirmationService(router, model="m").generate(
        AffirmationRequest(entry_text="hi there", mood_label="good")
    )
    quote = await ZenoQuoteService(router, model="m").generate(QuoteRequest(mood_label="good"))
    prompt = await ZenoPromptService(router, model="m").generate(PromptRequest())

    assert mood.success is False
    assert affirmation.success is False and affirmation.source == "fallback"
    assert quote.success is False
    assert prompt.success is False
    assert "connection refused" in (mood.error or "")


@pytest.mark.asyncio
async def test_affirmation_strips_wrapping_quotes():
    service = ZenoAffirmationService(_router(ScriptedProvider('"You showed up today."')), model="m")

    response = await service.generate(AffirmationRequest(entry_text="I went for a run", mood_label="good"))

    assert response.affirmation_text == "You showed up today."
    assert response.source == "ai"


@pytest.mark.asyncio
async def test_quote_prompt_lists_recent_quotes():
    provider = ScriptedProvider('{"quote": "Breathe.", "attribution": "Zeno"}')
    service = ZenoQuoteService(_router(provider), model="m")

    response = await service.generate(
        QuoteRequest(mood_label="low", entry_text="Long week", previously_shown_quotes=["Old one."])
    )

    assert response.quote == "Breathe."
    assert response.attribution == "Zeno"
    assert "Old one." in provider.calls[0]["messages"][0]["content"]


@pytest.mark.parametrize(
    ("raw", "quote", "attribution"),
    [
        ('```json\n{"quote": "Be here now.", "attribution": "Ram Dass",}\n```', "Be here now.", "Ram Dass"),
        ('{"quote": "Rest is productive.", "attribution": null}', "Rest is productive.", None),
        ("Every storm runs out of rain.", "Every storm runs out of rain.", None),
    ],
)
def test_parse_quote_shapes(raw, quote, attribution):
    response = parse_quote(raw)

    assert response.success is True
    assert response.quote == quote
    assert response.attribution == attribution


def test_parse_quote_rejects_empty_payload():
    assert parse_quote('{"quote": ""}').success is False


@pytest.mark.asyncio
async def test_prompt_service_passes_mood_and_history():
    provider = ScriptedProvider("What made you laugh today?")
    service = ZenoPromptService(_router(provider), model="m")

    response = await service.generate(PromptRequest(mood_label="good", previous_prompts=["Earlier prompt"]))

    system = provider.calls[0]["messages"][0]["content"]
    assert response.prompt == "What made you laugh today?"
    assert "good" in system
    assert "Earlier prompt" in system


def test_build_router_registers_configured_providers():
    settings = AppSettings().model_copy(
        update={"openai_api_key": None, "openrouter_api_key": "sk-or", "llm_providers": "openai,openrouter"}
    )

    router = build_router(settings)

    assert router.has_providers is True


def test_build_router_without_credentials_has_no_providers():
    settings = AppSettings().model_copy(update={"openai_api_key": None, "openrouter_api_key": None})

    assert build_router(settings).has_providers is False
