from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from zensai.apps.api.deps import get_session
from zensai.apps.engine.session import JournalSession

router = APIRouter(tags=["prompt"])


@router.get("/prompt")
async def daily_prompt(
    mood: str | None = Query(default=None),
    session: JournalSession = Depends(get_session),
) -> dict[str, Any]:
    prompt = await session.daily_prompt(mood or None)
    return {"prompt": prompt.prompt, "source": prompt.source, "degraded": prompt.degraded}


__all__ = ["router"]
