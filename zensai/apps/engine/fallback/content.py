"""Deterministic offline content used whenever an AI call is unavailable.

Selection is keyed on day-of-year so a user sees the same prompt across
reloads within a day and a different one the next day.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, Sequence

from zensai.core.models import QuoteContent
from zensai.core.mood import MoodLevel

MOOD_PROMPTS: dict[MoodLevel, tuple[str, ...]] = {
    MoodLevel.STRUGGLING: (
        "What's one small thing that could bring you a moment of comfort today?",
        "If you could send a message of kindness to yourself right now, what would it say?",
        "What's one person or memory that makes you feel less alone?",
        "How can you be gentle with yourself today?",
    ),
    MoodLevel.LOW: (
        "What's something you're grateful for, even in this difficult moment?",
        "What would you tell a friend who was feeling the way you do right now?",
        "What's one small step you could take today to care for yourself?",
        "How have you shown strength in challenging times before?",
    ),
    MoodLevel.NEUTRAL: (
        "What's one thing you're curious about today?",
        "What's something you learned about yourself recently?",
        "What would make today feel meaningful to you?",
        "Where did your attention drift most often today?",
    ),
    MoodLevel.GOOD: (
        "What's bringing you joy today, and how can you savor that feeling?",
        "How did you contribute to your own happiness today?",
        "What's something you're excited about in the near future?",
        "How can you share your positive energy with others today?",
    ),
    MoodLevel.AMAZING: (
        "What's making this such a wonderful day for you?",
        "How can you remember and recreate this feeling of joy?",
        "What would you like to celebrate about yourself today?",
        "How has your happiness impacted those around you?",
    ),
}

GENERAL_PROMPTS: tuple[str, ...] = (
    "What are three things you're grateful for today, and why do they matter to you?",
    "How did you show kindness to yourself or others today?",
    "What's one small accomplishment from today that you're proud of?",
    "If you could give your past self one piece of advice, what would it be?",
    "What's something you're looking forward to, and what excites you about it?",
    "Describe a moment today when you felt most like yourself.",
    "What's one thing you learned about yourself recently that surprised you?",
    "How are you feeling right now, and what might be contributing to that feeling?",
    "What would you like to let go of today to make space for something better?",
    "What's one small moment from today that brought you joy or made you smile?",
)

AFFIRMATIONS: dict[MoodLevel, str] = {
    MoodLevel.STRUGGLING: (
        "You are stronger than you know, and this difficult moment will pass. "
        "Your feelings are valid, and you deserve compassion."
    ),
    MoodLevel.LOW: (
        "It's okay to have challenging days. You're human, and you're doing the best you can. "
        "Tomorrow brings new possibilities."
    ),
    MoodLevel.NEUTRAL: (
        "You are perfectly balanced in this moment. Trust in your journey and know that "
        "you are exactly where you need to be."
    ),
    MoodLevel.GOOD: (
        "Your positive energy lights up the world around you. Keep embracing the joy that "
        "flows through your life."
    ),
    MoodLevel.AMAZING: (
        "What a beautiful soul you are! Your happiness is a gift to yourself and everyone "
        "around you. Celebrate this wonderful moment!"
    ),
}

GENERIC_AFFIRMATION = "You are worthy of love, happiness, and all the good things life has to offer."

QUOTES: dict[MoodLevel, tuple[QuoteContent, ...]] = {
    MoodLevel.STRUGGLING: (
        QuoteContent("The wound is the place where the Light enters you.", "Rumi"),
        QuoteContent(
            "You are braver than you believe, stronger than you seem, and more loved than you know.",
            "A.A. Milne",
        ),
        QuoteContent("This too shall pass.", "Persian proverb"),
    ),
    MoodLevel.LOW: (
        QuoteContent("Every sunset brings the promise of a new dawn.", "Ralph Waldo Emerson"),
        QuoteContent("You have been assigned this mountain to show others it can be moved.", "Mel Robbins"),
        QuoteContent("The darkest nights produce the brightest stars.", "John Green"),
    ),
    MoodLevel.NEUTRAL: (
        QuoteContent("The present moment is the only time over which we have dominion.", "Thích Nhất Hạnh"),
        QuoteContent("Peace comes from within. Do not seek it without.", "Buddha"),
        QuoteContent("In the middle of difficulty lies opportunity.", "Albert Einstein"),
    ),
    MoodLevel.GOOD: (
        QuoteContent("Happiness is not something ready made. It comes from your own actions.", "Dalai Lama"),
        QuoteContent(
            "The best way to take care of the future is to take care of the present moment.",
            "Thích Nhất Hạnh",
        ),
        QuoteContent("Joy is not in things; it is in us.", "Richard Wagner"),
    ),
    MoodLevel.AMAZING: (
        QuoteContent("Life is either a daring adventure or nothing at all.", "Helen Keller"),
        QuoteContent("The purpose of life is to live it, to taste experience to the utmost.", "Eleanor Roosevelt"),
        QuoteContent("Today is a good day to have a good day.", "Zeno"),
    ),
}

GENERIC_QUOTE = QuoteContent("Every day may not be good, but there is something good in every day.", "Alice Morse Earle")

# Prompts are compared on their opening words, which survives light rewording.
_MATCH_PREFIX = 20


def _level(mood: MoodLevel | int | None) -> MoodLevel | None:
    if mood is None:
        return None
    try:
        return MoodLevel(int(mood))
    except (TypeError, ValueError):
        return None


def _pick(pool: Sequence, day: date):
    return pool[day.timetuple().tm_yday % len(pool)]


class FallbackContentProvider:
    def __init__(self, *, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def fallback_prompt(
        self,
        mood: MoodLevel | int | None = None,
        previously_shown: Iterable[str] = (),
    ) -> str:
        level = _level(mood)
        pool = list(MOOD_PROMPTS.get(level, ())) + list(GENERAL_PROMPTS) if level else list(GENERAL_PROMPTS)
        shown = [item for item in previously_shown if item]
        filtered = [
            prompt for prompt in pool
            if not any(prompt[:_MATCH_PREFIX] in previous for previous in shown)
        ]
        return _pick(filtered or pool, self._today())

    def fallback_affirmation(self, mood: MoodLevel | int | None) -> str:
        level = _level(mood)
        if level is None:
            return GENERIC_AFFIRMATION
        return AFFIRMATIONS[level]

    def fallback_quote(self, mood: MoodLevel | int | None) -> QuoteContent:
        level = _level(mood)
        if level is None:
            return GENERIC_QUOTE
        return _pick(QUOTES[level], self._today())


__all__ = [
    "AFFIRMATIONS",
    "FallbackContentProvider",
    "GENERAL_PROMPTS",
    "GENERIC_AFFIRMATION",
    "GENERIC_QUOTE",
    "MOOD_PROMPTS",
    "QUOTES",
]
