"""Domain types shared by the Zensai engine, services and API."""

from .errors import (
    EntryValidationError,
    ErrorCode,
    PersistenceError,
    PremiumRequiredError,
    QuotaExceededError,
    ZensaiError,
)
from .models import (
    Badge,
    BadgeNotification,
    ContentSource,
    EnrichmentResult,
    JournalEntry,
    PhotoRef,
    Profile,
    QuoteContent,
    Stage,
    StageOutcome,
)
from .mood import MOOD_LABELS, MoodLevel

__all__ = [
    "Badge",
    "BadgeNotification",
    "ContentSource",
    "EnrichmentResult",
    "EntryValidationError",
    "ErrorCode",
    "JournalEntry",
    "MOOD_LABELS",
    "MoodLevel",
    "PersistenceError",
    "PhotoRef",
    "PremiumRequiredError",
    "Profile",
    "QuoteContent",
    "QuotaExceededError",
    "Stage",
    "StageOutcome",
    "ZensaiError",
]
