from datetime import date

from zensai.apps.engine.fallback import FallbackContentProvider
from zensai.apps.engine.fallback.content import (
    AFFIRMATIONS,
    GENERAL_PROMPTS,
    GENERIC_AFFIRMATION,
    GENERIC_QUOTE,
    MOOD_PROMPTS,
    QUOTES,
)
from zensai.core.mood import MoodLevel


def _provider(day: date) -> FallbackContentProvider:
    return FallbackContentProvider(today=lambda: day)


def test_prompt_is_stable_within_a_day():
    provider = _provider(date(2024, 3, 15))

    first = provider.fallback_prompt(MoodLevel.LOW)
    assert all(provider.fallback_prompt(MoodLevel.LOW) == first for _ in range(5))


def test_prompt_changes_across_consecutive_days():
    pool = list(MOOD_PROMPTS[MoodLevel.GOOD]) + list(GENERAL_PROMPTS)
    day_one = _provider(date(2024, 3, 15)).fallback_prompt(MoodLevel.GOOD)
    day_two = _provider(date(2024, 3, 16)).fallback_prompt(MoodLevel.GOOD)

    assert day_one in pool and day_two in pool
    assert day_one != day_two


def test_prompt_without_mood_uses_general_pool():
    prompt = _provider(date(2024, 1, 1)).fallback_prompt()

    assert prompt == GENERAL_PROMPTS[1 % len(GENERAL_PROMPTS)]


def test_previously_shown_prompts_are_skipped():
    provider = _provider(date(2024, 3, 15))
    first = provider.fallback_prompt(MoodLevel.NEUTRAL)

    second = provider.fallback_prompt(MoodLevel.NEUTRAL, previously_shown=[first])

    assert second != first


def test_fully_excluded_pool_falls_back_to_unfiltered_pool():
    provider = _provider(date(2024, 3, 15))
    shown = list(MOOD_PROMPTS[MoodLevel.AMAZING]) + list(GENERAL_PROMPTS)

    assert provider.fallback_prompt(MoodLevel.AMAZING, previously_shown=shown) == provider.fallback_prompt(
        MoodLevel.AMAZING
    )


def test_affirmation_matches_mood_and_unknown_mood_gets_generic():
    provider = _provider(date(2024, 3, 15))

    assert provider.fallback_affirmation(MoodLevel.STRUGGLING) == AFFIRMATIONS[MoodLevel.STRUGGLING]
    assert provider.fallback_affirmation(9) == GENERIC_AFFIRMATION
    assert provider.fallback_affirmation(None) == GENERIC_AFFIRMATION


def test_quote_is_drawn_from_the_mood_pool():
    provider = _provider(date(2024, 3, 15))

    assert provider.fallback_quote(MoodLevel.GOOD) in QUOTES[MoodLevel.GOOD]
    assert provider.fallback_quote(0) == GENERIC_QUOTE
