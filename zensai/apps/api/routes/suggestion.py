from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from zensai.apps.api.deps import get_session
from zensai.apps.engine.session import JournalSession
from zensai.apps.engine.suggestion import SuggestionView

router = APIRouter(prefix="/suggestion", tags=["suggestion"])


class TextChange(BaseModel):
    text: str
    selected_mood: int | str | None = None


def _view_payload(view: SuggestionView) -> dict[str, Any]:
    return {
        "suggested_mood": view.suggested.label if view.suggested else None,
        "selected_mood": view.selected.label if view.selected else None,
        "confirmation": view.confirmation.value if view.confirmation else None,
        "pending": view.pending,
    }


@router.post("/text")
async def text_changed(payload: TextChange, session: JournalSession = Depends(get_session)) -> dict[str, Any]:
    return _view_payload(session.on_text_change(payload.text, payload.selected_mood))


@router.get("")
async def current_suggestion(session: JournalSession = Depends(get_session)) -> dict[str, Any]:
    return _view_payload(session.suggestion())


@router.post("/accept")
async def accept(session: JournalSession = Depends(get_session)) -> dict[str, Any]:
    return _view_payload(session.accept_suggestion())


@router.post("/dismiss")
async def dismiss(session: JournalSession = Depends(get_session)) -> dict[str, Any]:
    return _view_payload(session.dismiss_suggestion())


__all__ = ["router"]
