"""Records exchanged between the orchestrator and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar

from .mood import MoodLevel

T = TypeVar("T")


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    text = str(value).replace("Z", "+00:00")
    parsed = datetime.fromisoformat(text)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(slots=True)
class JournalEntry:
    id: str
    user_id: str
    content: str
    mood: MoodLevel
    title: str | None = None
    photo_url: str | None = None
    photo_filename: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "JournalEntry":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            content=row.get("content") or "",
            mood=MoodLevel.coerce(row.get("mood")),
            title=row.get("title"),
            photo_url=row.get("photo_url"),
            photo_filename=row.get("photo_filename"),
            created_at=_parse_datetime(row.get("created_at")),
            updated_at=_parse_datetime(row.get("updated_at")),
        )


@dataclass(slots=True)
class PhotoRef:
    """A photo already uploaded to storage, referenced by URL."""

    url: str
    filename: str | None = None


@dataclass(slots=True)
class Profile:
    user_id: str
    name: str | None = None
    current_streak: int = 0
    best_streak: int = 0
    last_entry_date: date | None = None
    journaling_goal_frequency: int = 3
    total_badges_earned: int = 0
    subscription_status: str = "free"
    subscription_tier: str | None = None
    subscription_expires_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Profile":
        return cls(
            user_id=str(row["user_id"]),
            name=row.get("name"),
            current_streak=int(row.get("current_streak") or 0),
            best_streak=int(row.get("best_streak") or 0),
            last_entry_date=_parse_date(row.get("last_entry_date")),
            journaling_goal_frequency=int(row.get("journaling_goal_frequency") or 3),
            total_badges_earned=int(row.get("total_badges_earned") or 0),
            subscription_status=row.get("subscription_status") or "free",
            subscription_tier=row.get("subscription_tier"),
            subscription_expires_at=_parse_datetime(row.get("subscription_expires_at")),
        )

    def is_premium(self, now: datetime | None = None) -> bool:
        """Premium while the subscription is active and not past its expiry."""

        if self.subscription_status != "premium":
            return False
        if self.subscription_expires_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now < self.subscription_expires_at

    def is_premium_plus(self, now: datetime | None = None) -> bool:
        return self.is_premium(now) and self.subscription_tier == "premium_plus"


@dataclass(slots=True)
class Badge:
    id: str
    name: str
    description: str = ""
    icon: str = ""
    category: str = ""
    rarity: str = "common"
    earned: bool = False
    earned_at: datetime | None = None
    progress_current: int = 0
    progress_target: int = 0
    progress_percentage: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Badge":
        return cls(
            id=str(row["id"]),
            name=row.get("badge_name") or row.get("name") or "",
            description=row.get("badge_description") or "",
            icon=row.get("badge_icon") or "",
            category=row.get("badge_category") or "",
            rarity=row.get("badge_rarity") or "common",
            earned=bool(row.get("earned")),
            earned_at=_parse_datetime(row.get("earned_at")),
            progress_current=int(row.get("progress_current") or 0),
            progress_target=int(row.get("progress_target") or 0),
            progress_percentage=float(row.get("progress_percentage") or 0.0),
        )


@dataclass(slots=True)
class BadgeNotification:
    user_id: str
    badge: Badge
    message: str


@dataclass(slots=True)
class QuoteContent:
    quote: str
    attribution: str | None = None


class Stage(str, Enum):
    """Degradable pipeline stages, as reported in `degraded_steps`."""

    CLASSIFICATION = "classification"
    AFFIRMATION = "affirmation"
    QUOTE = "quote"


class ContentSource(str, Enum):
    AI = "ai"
    FALLBACK = "fallback"
    QUOTA = "quota"


@dataclass(slots=True)
class StageOutcome(Generic[T]):
    """Value produced by a stage plus how it was produced.

    `degraded` is set whenever fallback content replaced a live AI result;
    `quota_exceeded` additionally marks that the AI was never called.
    """

    value: T
    source: ContentSource = ContentSource.AI
    degraded: bool = False
    quota_exceeded: bool = False
    note: str | None = None


@dataclass(slots=True)
class EnrichmentResult:
    final_mood: MoodLevel
    entry: JournalEntry
    affirmation: StageOutcome[str]
    quote: StageOutcome[QuoteContent]
    message: str
    streak: int = 0
    best_streak: int = 0
    degraded_steps: set[Stage] = field(default_factory=set)

    @property
    def entry_id(self) -> str:
        return self.entry.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_id": self.entry.id,
            "final_mood": self.final_mood.label,
            "final_mood_level": int(self.final_mood),
            "affirmation": {
                "text": self.affirmation.value,
                "source": self.affirmation.source.value,
                "degraded": self.affirmation.degraded,
                "quota_exceeded": self.affirmation.quota_exceeded,
                "note": self.affirmation.note,
            },
            "quote": {
                "quote": self.quote.value.quote,
                "attribution": self.quote.value.attribution,
                "source": self.quote.source.value,
                "degraded": self.quote.degraded,
                "quota_exceeded": self.quote.quota_exceeded,
                "note": self.quote.note,
            },
            "message": self.message,
            "streak": self.streak,
            "best_streak": self.best_streak,
            "degraded_steps": sorted(stage.value for stage in self.degraded_steps),
        }


__all__ = [
    "Badge",
    "BadgeNotification",
    "ContentSource",
    "EnrichmentResult",
    "JournalEntry",
    "PhotoRef",
    "Profile",
    "QuoteContent",
    "Stage",
    "StageOutcome",
]
