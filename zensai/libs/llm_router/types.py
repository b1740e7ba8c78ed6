"""Shared type utilities for the LLM router."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class Task(str, Enum):
    """Generation tasks routed through providers."""

    MOOD = "mood"
    AFFIRMATION = "affirmation"
    QUOTE = "quote"
    PROMPT = "prompt"


@dataclass(slots=True)
class LLMResponse:
    """Normalised LLM response payload returned by providers."""

    model: str
    text: str | None = None
    task: Task | None = None
    usage: Mapping[str, Any] | None = None
    cost: float | None = None
    provider: str | None = None
    raw: Mapping[str, Any] | None = None


__all__ = ["LLMResponse", "Task"]
