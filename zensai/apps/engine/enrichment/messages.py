"""User-facing copy produced by the enrichment pipeline."""

from __future__ import annotations

from zensai.core.mood import MoodLevel

MOOD_ENCOURAGEMENTS: dict[MoodLevel, str] = {
    MoodLevel.STRUGGLING: "Remember, tough times don't last, but tough people do. 💪",
    MoodLevel.LOW: "Every small step forward is progress. You're doing great! 🌱",
    MoodLevel.NEUTRAL: "Balance is beautiful. You're exactly where you need to be. ⚖️",
    MoodLevel.GOOD: "Your positive energy is contagious! Keep shining! ✨",
    MoodLevel.AMAZING: "What a wonderful day to celebrate your joy! 🎉",
}

AFFIRMATION_FALLBACK_NOTE = (
    "Sorry, I couldn't generate a personalized affirmation. Here's some encouragement from my heart!"
)
AFFIRMATION_QUOTA_NOTE = "Daily limit reached. Upgrade to Premium for unlimited affirmations."
QUOTE_FALLBACK_NOTE = "I couldn't find a fresh quote right now, so here's one of my favorites."
QUOTE_QUOTA_NOTE = "Daily limit reached. Upgrade to Premium for unlimited mood quotes."


def compose_success_message(streak: int, best_streak: int, mood: MoodLevel) -> str:
    """Success copy keyed on the recomputed streak, plus a mood encouragement."""

    if streak == 1 and best_streak <= 1:
        message = "Great start! You've begun your journaling journey! 🌱"
    elif streak > 1:
        message = f"Amazing! You're on a {streak}-day streak! 🔥"
        if streak == best_streak:
            message += " That's a new personal best! 🏆"
    elif streak == 1:
        message = "Welcome back! Day one of a fresh streak. 🌤️"
    else:
        message = "Entry saved! Zeno is proud of you! 🎉"

    encouragement = MOOD_ENCOURAGEMENTS.get(mood)
    if encouragement:
        message = f"{message} {encouragement}"
    return message


__all__ = [
    "AFFIRMATION_FALLBACK_NOTE",
    "AFFIRMATION_QUOTA_NOTE",
    "MOOD_ENCOURAGEMENTS",
    "QUOTE_FALLBACK_NOTE",
    "QUOTE_QUOTA_NOTE",
    "compose_success_message",
]
