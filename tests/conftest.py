from __future__ import annotations

import dataclasses
from datetime import date
from typing import Any

import pytest

from zensai.apps.engine.engagement import EngagementStateReconciler
from zensai.apps.engine.enrichment import EnrichmentPipeline, MoodPrecedence
from zensai.apps.engine.fallback import FallbackContentProvider
from zensai.apps.engine.mood import MoodClassifier
from zensai.apps.engine.quota import QuotaGuard
from zensai.apps.engine.session import SessionServices
from zensai.apps.services.contracts import (
    AffirmationResponse,
    MoodAnalysisResponse,
    PromptResponse,
    QuoteResponse,
)
from zensai.core.models import Badge, JournalEntry, Profile
from zensai.libs.persistence import StoreError
from zensai.libs.storage import InMemoryKeyValueBackend, SafeKeyValueStore

TODAY = date(2024, 3, 15)
USER_ID = "user-1"


class FakeStore:
    def __init__(self) -> None:
        self.entries: dict[str, JournalEntry] = {}
        self.profile = Profile(user_id=USER_ID, current_streak=1, best_streak=1)
        self.badges: list[Badge] = []
        self.calls: list[str] = []
        self.fail_insert = False
        self.fail_update = False
        self.fail_delete = False
        self.fail_profile = False
        self.fail_badges = False
        self._next_id = 0

    async def insert_entry(self, owner_id, content, title, mood, photo=None) -> JournalEntry:
        self.calls.append("insert")
        if self.fail_insert:
            raise StoreError("insert failed")
        self._next_id += 1
        entry = JournalEntry(
            id=f"entry-{self._next_id}",
            user_id=owner_id,
            content=content,
            mood=mood,
            title=title,
            photo_url=photo.url if photo else None,
            photo_filename=photo.filename if photo else None,
        )
        self.entries[entry.id] = entry
        return entry

    async def get_entry(self, owner_id, entry_id) -> JournalEntry:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != owner_id:
            raise StoreError("entry not found")
        return entry

    async def update_entry(self, owner_id, entry_id, *, content, title, mood) -> JournalEntry:
        self.calls.append("update")
        if self.fail_update:
            raise StoreError("update failed")
        current = await self.get_entry(owner_id, entry_id)
        updated = dataclasses.replace(current, content=content, title=title, mood=mood)
        self.entries[entry_id] = updated
        return updated

    async def delete_entry(self, owner_id, entry_id) -> None:
        self.calls.append("delete")
        if self.fail_delete:
            raise StoreError("delete failed")
        await self.get_entry(owner_id, entry_id)
        del self.entries[entry_id]

    async def get_profile(self, user_id) -> Profile:
        self.calls.append("profile")
        if self.fail_profile:
            raise StoreError("profile unavailable")
        return self.profile

    async def get_badge_progress(self, user_id) -> list[Badge]:
        self.calls.append("badges")
        if self.fail_badges:
            raise StoreError("badges unavailable")
        return list(self.badges)


class FakeMoodService:
    def __init__(self) -> None:
        self.label = "good"
        self.success = True
        self.error: Exception | None = None
        self.requests: list[Any] = []

    async def analyze(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return MoodAnalysisResponse(success=self.success, mood_label=self.label)


class FakeAffirmationService:
    def __init__(self) -> None:
        self.text = "You are doing beautifully."
        self.success = True
        self.error: Exception | None = None
        self.requests: list[Any] = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return AffirmationResponse(success=self.success, affirmation_text=self.text if self.success else "")


class FakeQuoteService:
    def __init__(self) -> None:
        self.quote = "Small steps are still steps."
        self.attribution: str | None = "Zeno"
        self.success = True
        self.error: Exception | None = None
        self.requests: list[Any] = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if not self.success:
            return QuoteResponse(success=False, source="fallback", error="upstream down")
        return QuoteResponse(success=True, quote=self.quote, attribution=self.attribution)


class FakePromptService:
    def __init__(self) -> None:
        self.prompt = "What surprised you today?"
        self.success = True
        self.error: Exception | None = None
        self.requests: list[Any] = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return PromptResponse(success=self.success, prompt=self.prompt if self.success else "")


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def kv_backend() -> InMemoryKeyValueBackend:
    return InMemoryKeyValueBackend()


@pytest.fixture
def kv(kv_backend) -> SafeKeyValueStore:
    return SafeKeyValueStore(kv_backend)


@pytest.fixture
def quota(kv) -> QuotaGuard:
    return QuotaGuard(kv, today=lambda: TODAY)


@pytest.fixture
def fallback() -> FallbackContentProvider:
    return FallbackContentProvider(today=lambda: TODAY)


@pytest.fixture
def mood_service() -> FakeMoodService:
    return FakeMoodService()


@pytest.fixture
def affirmation_service() -> FakeAffirmationService:
    return FakeAffirmationService()


@pytest.fixture
def quote_service() -> FakeQuoteService:
    return FakeQuoteService()


@pytest.fixture
def prompt_service() -> FakePromptService:
    return FakePromptService()


@pytest.fixture
def reconciler(store) -> EngagementStateReconciler:
    return EngagementStateReconciler(store, USER_ID)


@pytest.fixture
def pipeline(store, quota, fallback, mood_service, affirmation_service, quote_service, reconciler):
    return EnrichmentPipeline(
        user_id=USER_ID,
        store=store,
        classifier=MoodClassifier(mood_service),
        quota=quota,
        fallback=fallback,
        affirmations=affirmation_service,
        quotes=quote_service,
        reconciler=reconciler,
        is_premium=lambda: store.profile.is_premium(),
        precedence=MoodPrecedence.AI_FIRST,
    )


@pytest.fixture
def services(mood_service, affirmation_service, quote_service, prompt_service) -> SessionServices:
    return SessionServices(
        mood=mood_service,
        affirmations=affirmation_service,
        quotes=quote_service,
        prompts=prompt_service,
    )
