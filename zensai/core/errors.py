"""Error taxonomy for the journaling orchestrator.

Only conditions the user can act on are raised: fix the text, upgrade the
plan, or retry the save. AI outages never appear here; they degrade into
fallback content on the stage outcome instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping


class ErrorCode(str, Enum):
    JOURNAL_ENTRY_EMPTY = "journal/entry-empty"
    JOURNAL_ENTRY_TOO_LONG = "journal/entry-too-long"
    JOURNAL_SAVE_FAILED = "journal/save-failed"
    JOURNAL_UPDATE_FAILED = "journal/update-failed"
    JOURNAL_DELETE_FAILED = "journal/delete-failed"
    JOURNAL_LOAD_FAILED = "journal/load-failed"

    PREMIUM_REQUIRED = "premium/feature-required"
    PREMIUM_DAILY_LIMIT = "premium/daily-limit-reached"

    AI_SERVICE_UNAVAILABLE = "ai/service-unavailable"
    AI_GENERATION_FAILED = "ai/generation-failed"

    STORAGE_READ_FAILED = "storage/read-failed"
    STORAGE_WRITE_FAILED = "storage/write-failed"

    VALIDATION_ERROR = "validation/error"
    UNKNOWN_ERROR = "unknown/error"


class ZensaiError(Exception):
    """Base error carrying a stable code and a message safe to show users."""

    default_code = ErrorCode.UNKNOWN_ERROR
    default_message = "An unexpected error occurred. Please try again."

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        self.code = code or self.default_code
        self.message = message or self.default_message
        self.details = dict(details or {})
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code.value, "message": self.message}


class EntryValidationError(ZensaiError):
    default_code = ErrorCode.VALIDATION_ERROR
    default_message = "Please check your entry and try again."


class PremiumRequiredError(ZensaiError):
    default_code = ErrorCode.PREMIUM_REQUIRED
    default_message = "This is a premium feature. Upgrade to Premium to unlock it."

    def __init__(self, feature: str, message: str | None = None) -> None:
        super().__init__(message, details={"feature": feature})
        self.feature = feature


class QuotaExceededError(ZensaiError):
    default_code = ErrorCode.PREMIUM_DAILY_LIMIT
    default_message = "Daily limit reached. Upgrade to Premium for unlimited use."

    def __init__(self, feature: str, message: str | None = None) -> None:
        super().__init__(message, details={"feature": feature})
        self.feature = feature


class PersistenceError(ZensaiError):
    default_code = ErrorCode.JOURNAL_SAVE_FAILED
    default_message = "Failed to save your entry. Please try again."


def validation_error(message: str, *, code: ErrorCode = ErrorCode.VALIDATION_ERROR) -> EntryValidationError:
    return EntryValidationError(message, code=code)


__all__ = [
    "EntryValidationError",
    "ErrorCode",
    "PersistenceError",
    "PremiumRequiredError",
    "QuotaExceededError",
    "ZensaiError",
    "validation_error",
]
