from .guard import (
    AFFIRMATION_FEATURE,
    DEFAULT_DAILY_LIMIT,
    PROMPT_FEATURE,
    QUOTE_FEATURE,
    QuotaGuard,
)

__all__ = ["AFFIRMATION_FEATURE", "DEFAULT_DAILY_LIMIT", "PROMPT_FEATURE", "QUOTE_FEATURE", "QuotaGuard"]
