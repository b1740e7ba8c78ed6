"""Input checks applied before any network call."""

from __future__ import annotations

from typing import Any

from .errors import EntryValidationError, ErrorCode
from .mood import MoodLevel

MAX_ENTRY_LENGTH = 10_000
MAX_TITLE_LENGTH = 200


def validate_content(content: str | None) -> str:
    """Return trimmed content or raise for empty / oversized text."""

    text = (content or "").strip()
    if not text:
        raise EntryValidationError(
            "Please write something before saving your entry.",
            code=ErrorCode.JOURNAL_ENTRY_EMPTY,
        )
    if len(text) > MAX_ENTRY_LENGTH:
        raise EntryValidationError(
            f"Your entry is too long. Please keep it under {MAX_ENTRY_LENGTH:,} characters.",
            code=ErrorCode.JOURNAL_ENTRY_TOO_LONG,
        )
    return text


def validate_title(title: str | None) -> str | None:
    cleaned = (title or "").strip()
    if not cleaned:
        return None
    if len(cleaned) > MAX_TITLE_LENGTH:
        raise EntryValidationError(f"Titles must be under {MAX_TITLE_LENGTH} characters.")
    return cleaned


def validate_mood(value: Any) -> MoodLevel:
    """Strict mood check for user input: 1-5 (int or digit string) or a canonical label."""

    if isinstance(value, MoodLevel):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, bool):
        raise EntryValidationError("Please select how you're feeling.")
    if isinstance(value, int):
        if 1 <= value <= 5:
            return MoodLevel(value)
        raise EntryValidationError("Mood must be between 1 and 5.")
    if isinstance(value, str):
        try:
            return MoodLevel.from_label(value)
        except ValueError:
            pass
    raise EntryValidationError("Please select how you're feeling.")


__all__ = ["MAX_ENTRY_LENGTH", "MAX_TITLE_LENGTH", "validate_content", "validate_mood", "validate_title"]
