"""Persistence collaborator: journal rows, profiles and badge progress.

The database owns streak and badge computation (triggers on entry insert and
delete); this client only writes entries and reads the results back.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol
from urllib.parse import unquote

import httpx

from zensai.core.models import Badge, JournalEntry, PhotoRef, Profile
from zensai.core.mood import MoodLevel

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised by store implementations for any failed read or write."""


class JournalStore(Protocol):
    async def insert_entry(
        self,
        owner_id: str,
        content: str,
        title: str | None,
        mood: MoodLevel,
        photo: PhotoRef | None = None,
    ) -> JournalEntry: ...

    async def update_entry(
        self,
        owner_id: str,
        entry_id: str,
        *,
        content: str,
        title: str | None,
        mood: MoodLevel,
    ) -> JournalEntry: ...

    async def get_entry(self, owner_id: str, entry_id: str) -> JournalEntry: ...

    async def delete_entry(self, owner_id: str, entry_id: str) -> None: ...

    async def get_profile(self, user_id: str) -> Profile: ...

    async def get_badge_progress(self, user_id: str) -> list[Badge]: ...


class SupabaseJournalStore:
    """JournalStore backed by Supabase's PostgREST and storage HTTP APIs."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        *,
        photo_bucket: str = "journal-photos",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._photo_bucket = photo_bucket
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
                "Content-Type": "application/json",
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def insert_entry(
        self,
        owner_id: str,
        content: str,
        title: str | None,
        mood: MoodLevel,
        photo: PhotoRef | None = None,
    ) -> JournalEntry:
        body = {
            "user_id": owner_id,
            "content": content,
            "title": title,
            "mood": mood.label,
            "photo_url": photo.url if photo else None,
            "photo_filename": photo.filename if photo else None,
        }
        rows = await self._request(
            "POST",
            "/rest/v1/journal_entries",
            json=body,
            headers={"Prefer": "return=representation"},
        )
        return JournalEntry.from_row(_first_row(rows, "insert journal entry"))

    async def update_entry(
        self,
        owner_id: str,
        entry_id: str,
        *,
        content: str,
        title: str | None,
        mood: MoodLevel,
    ) -> JournalEntry:
        rows = await self._request(
            "PATCH",
            "/rest/v1/journal_entries",
            params={"id": f"eq.{entry_id}", "user_id": f"eq.{owner_id}"},
            json={"content": content, "title": title, "mood": mood.label},
            headers={"Prefer": "return=representation"},
        )
        return JournalEntry.from_row(_first_row(rows, "update journal entry"))

    async def get_entry(self, owner_id: str, entry_id: str) -> JournalEntry:
        rows = await self._request(
            "GET",
            "/rest/v1/journal_entries",
            params={"id": f"eq.{entry_id}", "user_id": f"eq.{owner_id}", "select": "*"},
        )
        return JournalEntry.from_row(_first_row(rows, "load journal entry"))

    async def delete_entry(self, owner_id: str, entry_id: str) -> None:
        rows = await self._request(
            "GET",
            "/rest/v1/journal_entries",
            params={"id": f"eq.{entry_id}", "user_id": f"eq.{owner_id}", "select": "id,photo_url"},
        )
        row = _first_row(rows, "load journal entry")
        photo_url = row.get("photo_url")
        if photo_url:
            await self._remove_photo(photo_url)
        await self._request(
            "DELETE",
            "/rest/v1/journal_entries",
            params={"id": f"eq.{entry_id}", "user_id": f"eq.{owner_id}"},
        )

    async def get_profile(self, user_id: str) -> Profile:
        rows = await self._request(
            "GET",
            "/rest/v1/profiles",
            params={"user_id": f"eq.{user_id}", "select": "*"},
        )
        return Profile.from_row(_first_row(rows, "load profile"))

    async def get_badge_progress(self, user_id: str) -> list[Badge]:
        rows = await self._request(
            "POST",
            "/rest/v1/rpc/get_user_badge_progress",
            json={"target_user_id": user_id},
        )
        return [Badge.from_row(row) for row in rows or []]

    async def _remove_photo(self, photo_url: str) -> None:
        object_path = photo_object_path(photo_url, self._photo_bucket)
        try:
            await self._request(
                "DELETE",
                f"/storage/v1/object/{self._photo_bucket}",
                json={"prefixes": [object_path]},
            )
        except StoreError:
            # row deletion proceeds; the object is left behind
            logger.warning("photo removal failed", extra={"photo_path": object_path}, exc_info=True)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise StoreError(f"{method} {path} network error: {exc}") from exc
        if not response.is_success:
            raise StoreError(f"{method} {path} failed ({response.status_code}): {response.text[:400]}")
        if not response.content:
            return None
        return response.json()


def photo_object_path(photo_url: str, bucket: str) -> str:
    """Object key inside the bucket for a public storage URL."""

    path = photo_url.split("?", 1)[0]
    marker = f"/{bucket}/"
    if marker in path:
        return unquote(path.split(marker, 1)[1])
    return unquote(path.rsplit("/", 1)[-1])


def _first_row(rows: Any, action: str) -> Mapping[str, Any]:
    if isinstance(rows, list) and rows:
        return rows[0]
    if isinstance(rows, Mapping):
        return rows
    raise StoreError(f"Could not {action}: no row returned")


__all__ = ["JournalStore", "StoreError", "SupabaseJournalStore", "photo_object_path"]
