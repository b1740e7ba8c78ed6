from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from zensai.apps.api.deps import get_session
from zensai.apps.engine.session import JournalSession
from zensai.core.models import JournalEntry, PhotoRef

router = APIRouter(prefix="/entries", tags=["entries"])


class PhotoPayload(BaseModel):
    url: str
    filename: str | None = None


class EntryCreate(BaseModel):
    content: str
    title: str | None = None
    mood: int | str | None = None
    photo_ref: PhotoPayload | None = None


class EntryUpdate(BaseModel):
    content: str
    title: str | None = None
    mood: int | str


def _entry_payload(entry: JournalEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "content": entry.content,
        "title": entry.title,
        "mood": entry.mood.label,
        "photo_url": entry.photo_url,
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
        "updated_at": entry.updated_at.isoformat() if entry.updated_at else None,
    }


@router.post("")
async def create_entry(payload: EntryCreate, session: JournalSession = Depends(get_session)) -> dict[str, Any]:
    photo = PhotoRef(url=payload.photo_ref.url, filename=payload.photo_ref.filename) if payload.photo_ref else None
    result = await session.submit_entry(payload.content, payload.title, payload.mood, photo)
    return result.to_dict()


@router.patch("/{entry_id}")
async def update_entry(
    entry_id: str,
    payload: EntryUpdate,
    session: JournalSession = Depends(get_session),
) -> dict[str, Any]:
    entry = await session.update_entry(entry_id, content=payload.content, title=payload.title, mood=payload.mood)
    return _entry_payload(entry)


@router.delete("/{entry_id}")
async def delete_entry(entry_id: str, session: JournalSession = Depends(get_session)) -> dict[str, Any]:
    snapshot = await session.delete_entry(entry_id)
    return {"deleted": entry_id, "streak": snapshot.streak, "best_streak": snapshot.best_streak}


__all__ = ["router"]
