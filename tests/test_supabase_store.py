import json

import httpx
import pytest

from zensai.core.models import PhotoRef
from zensai.core.mood import MoodLevel
from zensai.libs.persistence import StoreError, SupabaseJournalStore, photo_object_path

BASE_URL = "https://project.supabase.co"
PHOTO_URL = f"{BASE_URL}/storage/v1/object/public/journal-photos/user-1/1700000000.jpg"


class Recorder:
    def __init__(self, routes):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": "not found"})
        return handler(request)


def _store(recorder: Recorder) -> SupabaseJournalStore:
    return SupabaseJournalStore(BASE_URL, "service-key", transport=httpx.MockTransport(recorder))


ROW = {
    "id": "e1",
    "user_id": "user-1",
    "content": "A calm evening.",
    "title": None,
    "mood": "neutral",
    "photo_url": None,
    "created_at": "2024-03-15T20:00:00Z",
}


@pytest.mark.asyncio
async def test_insert_sends_mood_label_and_photo():
    recorder = Recorder({("POST", "/rest/v1/journal_entries"): lambda request: httpx.Response(201, json=[ROW])})
    store = _store(recorder)

    entry = await store.insert_entry(
        "user-1", "A calm evening.", None, MoodLevel.NEUTRAL, PhotoRef(url=PHOTO_URL, filename="a.jpg")
    )
    await store.aclose()

    body = json.loads(recorder.requests[0].content)
    assert body["mood"] == "neutral"
    assert body["photo_url"] == PHOTO_URL
    assert recorder.requests[0].headers["apikey"] == "service-key"
    assert recorder.requests[0].headers["Prefer"] == "return=representation"
    assert entry.id == "e1"
    assert entry.mood == MoodLevel.NEUTRAL


@pytest.mark.asyncio
async def test_delete_removes_photo_then_row():
    recorder = Recorder(
        {
            ("GET", "/rest/v1/journal_entries"): lambda request: httpx.Response(
                200, json=[{"id": "e1", "photo_url": PHOTO_URL}]
            ),
            ("DELETE", "/storage/v1/object/journal-photos"): lambda request: httpx.Response(200, json=[]),
            ("DELETE", "/rest/v1/journal_entries"): lambda request: httpx.Response(204),
        }
    )
    store = _store(recorder)

    await store.delete_entry("user-1", "e1")

    methods = [(request.method, request.url.path) for request in recorder.requests]
    assert methods == [
        ("GET", "/rest/v1/journal_entries"),
        ("DELETE", "/storage/v1/object/journal-photos"),
        ("DELETE", "/rest/v1/journal_entries"),
    ]
    assert json.loads(recorder.requests[1].content) == {"prefixes": ["user-1/1700000000.jpg"]}
    assert recorder.requests[2].url.params["user_id"] == "eq.user-1"


@pytest.mark.asyncio
async def test_photo_removal_failure_does_not_block_row_delete():
    recorder = Recorder(
        {
            ("GET", "/rest/v1/journal_entries"): lambda request: httpx.Response(
                200, json=[{"id": "e1", "photo_url": PHOTO_URL}]
            ),
            ("DELETE", "/storage/v1/object/journal-photos"): lambda request: httpx.Response(500, text="boom"),
            ("DELETE", "/rest/v1/journal_entries"): lambda request: httpx.Response(204),
        }
    )

    await _store(recorder).delete_entry("user-1", "e1")

    assert recorder.requests[-1].method == "DELETE"
    assert recorder.requests[-1].url.path == "/rest/v1/journal_entries"


@pytest.mark.asyncio
async def test_deleting_unknown_entry_raises():
    recorder = Recorder({("GET", "/rest/v1/journal_entries"): lambda request: httpx.Response(200, json=[])})

    with pytest.raises(StoreError):
        await _store(recorder).delete_entry("user-1", "missing")

    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_profile_and_badges_are_parsed():
    recorder = Recorder(
        {
            ("GET", "/rest/v1/profiles"): lambda request: httpx.Response(
                200,
                json=[
                    {
                        "user_id": "user-1",
                        "current_streak": 4,
                        "best_streak": 9,
                        "last_entry_date": "2024-03-15",
                        "subscription_status": "premium",
                        "subscription_expires_at": "2099-01-01T00:00:00Z",
                    }
                ],
            ),
            ("POST", "/rest/v1/rpc/get_user_badge_progress"): lambda request: httpx.Response(
                200,
                json=[
                    {"id": "b1", "badge_name": "First Entry", "badge_icon": "📝", "earned": True},
                    {"id": "b2", "badge_name": "Week Warrior", "earned": False, "progress_current": 3},
                ],
            ),
        }
    )
    store = _store(recorder)

    profile = await store.get_profile("user-1")
    badges = await store.get_badge_progress("user-1")

    assert profile.current_streak == 4
    assert profile.is_premium() is True
    assert [badge.name for badge in badges] == ["First Entry", "Week Warrior"]
    assert badges[1].progress_current == 3
    assert json.loads(recorder.requests[1].content) == {"target_user_id": "user-1"}


@pytest.mark.asyncio
async def test_network_error_becomes_store_error():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    store = SupabaseJournalStore(BASE_URL, "key", transport=httpx.MockTransport(handler))

    with pytest.raises(StoreError):
        await store.get_profile("user-1")


def test_photo_object_path():
    assert photo_object_path(PHOTO_URL, "journal-photos") == "user-1/1700000000.jpg"
    assert photo_object_path("https://x/other/name%20one.png?t=1", "journal-photos") == "name one.png"
