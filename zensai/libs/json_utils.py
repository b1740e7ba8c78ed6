from __future__ import annotations

import json
import re
from typing import Any


def extract_json_block(blob: str) -> str:
    """
    Strip markdown fences and trailing commas from LLM responses,
    returning a best-effort JSON string.
    """

    text = (blob or "").strip()
    if text.startswith("```"):
        newline_idx = text.find("\n")
        if newline_idx != -1:
            text = text[newline_idx + 1 :]
        if text.endswith("```"):
            text = text[:-3]
    text = text.strip()
    if text:
        opening_idx = text.find("{")
        closing_idx = text.rfind("}")
        if opening_idx != -1 and closing_idx > opening_idx:
            text = text[opening_idx : closing_idx + 1]
    text = _strip_trailing_commas(text)
    return text.strip()


def parse_json_object(blob: str) -> dict[str, Any] | None:
    """Parse an LLM reply into a dict, or None when it is not a JSON object."""

    extracted = extract_json_block(blob)
    if not extracted:
        return None
    try:
        parsed = json.loads(extracted)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _strip_trailing_commas(text: str) -> str:
    return re.sub(r",(\s*[}\]])", r"\1", text)


__all__ = ["extract_json_block", "parse_json_object"]
