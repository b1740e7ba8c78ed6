"""OpenAI provider implementation for the Zensai LLM router."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

import openai
from openai import AsyncOpenAI

from .base import BaseProvider
from .types import LLMResponse

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    """Provider that talks to OpenAI chat completions through the official SDK."""

    def __init__(
        self,
        api_key: str,
        *,
        model_chat: str = "gpt-4o-mini",
        timeout: float = 30.0,
        base_url: str | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        if not api_key and client is None:
            raise ValueError("OpenAI API key is required")
        super().__init__(name="openai")
        self._model_chat = model_chat
        self._timeout = timeout
        self._client = client or AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def chat(
        self,
        *,
        messages: Sequence[Mapping[str, Any]],
        model: str | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        if not messages:
            raise ValueError("OpenAI provider: 'messages' must be a non-empty sequence.")

        temperature = kwargs.pop("temperature", 0.7)
        max_tokens = kwargs.pop("max_tokens", 200)
        if not isinstance(temperature, (int, float)):
            temperature = 0.7
        try:
            max_tokens = int(max_tokens)
        except (TypeError, ValueError):
            max_tokens = 200

        for penalty in ("presence_penalty", "frequency_penalty"):
            if penalty in kwargs:
                value = kwargs[penalty]
                if isinstance(value, (int, float)):
                    kwargs[penalty] = max(-2.0, min(2.0, float(value)))
                else:
                    kwargs.pop(penalty)

        payload: dict[str, Any] = {
            "model": model or self._model_chat,
            "messages": [dict(message) for message in messages],
            "temperature": float(temperature),
            "max_tokens": max_tokens,
            **kwargs,
        }

        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(**payload),
                timeout=self._timeout,
            )
        except openai.AuthenticationError as exc:
            raise RuntimeError("OpenAI connection error: Invalid API key or unauthorized request") from exc
        except openai.RateLimitError as exc:
            raise RuntimeError("OpenAI connection error: Rate limit reached") from exc
        except openai.APIConnectionError as exc:
            raise RuntimeError("OpenAI connection error: Network failure") from exc
        except asyncio.TimeoutError as exc:
            raise RuntimeError("OpenAI connection error: Timeout") from exc

        choice = response.choices[0] if response.choices else None
        message = getattr(choice, "message", None)
        text_content = (getattr(message, "content", "") or "") if message is not None else ""

        usage = response.usage
        usage_dict = usage.model_dump() if usage is not None and hasattr(usage, "model_dump") else {}

        return LLMResponse(
            model=getattr(response, "model", payload["model"]),
            text=text_content,
            provider=self.name,
            usage=usage_dict,
            raw=response.model_dump() if hasattr(response, "model_dump") else None,
        )


__all__ = ["OpenAIProvider"]
