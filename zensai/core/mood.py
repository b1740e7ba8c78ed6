"""The five-level mood scale shared by every journaling component."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class MoodLevel(IntEnum):
    STRUGGLING = 1
    LOW = 2
    NEUTRAL = 3
    GOOD = 4
    AMAZING = 5

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "MoodLevel":
        """Exact canonical label lookup; raises ValueError for anything else."""

        try:
            return cls[label.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown mood label: {label!r}") from exc

    @classmethod
    def coerce(cls, value: Any) -> "MoodLevel":
        """Clamp arbitrary input to the scale, defaulting to neutral.

        Used where bad data must not break the flow (stored rows, service
        payloads). User input goes through `validate_mood` instead.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                value = int(text)
            else:
                try:
                    return cls.from_label(text)
                except ValueError:
                    return cls.NEUTRAL
        if isinstance(value, bool):
            return cls.NEUTRAL
        if isinstance(value, int) and 1 <= value <= 5:
            return cls(value)
        return cls.NEUTRAL


MOOD_LABELS: tuple[str, ...] = tuple(level.label for level in MoodLevel)


__all__ = ["MOOD_LABELS", "MoodLevel"]
