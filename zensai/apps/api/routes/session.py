from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from zensai.apps.api.deps import get_current_user_id, get_registry, get_session
from zensai.apps.engine.session import JournalSession, SessionRegistry

router = APIRouter(tags=["session"])


@router.get("/badges/notifications")
async def badge_notifications(session: JournalSession = Depends(get_session)) -> dict[str, Any]:
    return {
        "notifications": [
            {"badge_id": item.badge.id, "badge_name": item.badge.name, "icon": item.badge.icon, "message": item.message}
            for item in session.badge_notifications()
        ]
    }


@router.post("/session/logout")
async def logout(
    user_id: str = Depends(get_current_user_id),
    registry: SessionRegistry = Depends(get_registry),
) -> dict[str, Any]:
    return {"disposed": await registry.dispose(user_id)}


__all__ = ["router"]
