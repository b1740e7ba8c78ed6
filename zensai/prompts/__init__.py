from .zeno import (
    AFFIRMATION_SYSTEM_PROMPT,
    JOURNAL_PROMPT_SYSTEM_PROMPT,
    MOOD_ANALYSIS_SYSTEM_PROMPT,
    MOOD_QUOTE_SYSTEM_PROMPT,
)

__all__ = [
    "AFFIRMATION_SYSTEM_PROMPT",
    "JOURNAL_PROMPT_SYSTEM_PROMPT",
    "MOOD_ANALYSIS_SYSTEM_PROMPT",
    "MOOD_QUOTE_SYSTEM_PROMPT",
]
