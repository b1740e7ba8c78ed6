from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request

from zensai.apps.engine.session import JournalSession, SessionRegistry


async def get_current_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str:
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthenticated")
    return user_id


def get_registry(request: Request) -> SessionRegistry:
    registry = getattr(request.app.state, "sessions", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="Session registry not initialised")
    return registry


async def get_session(
    user_id: str = Depends(get_current_user_id),
    registry: SessionRegistry = Depends(get_registry),
    x_timezone: str | None = Header(default=None, alias="X-Timezone"),
) -> JournalSession:
    # quota days and fallback rotation follow the caller's local calendar
    return await registry.get(user_id, tz_name=(x_timezone or "").strip() or None)


__all__ = ["get_current_user_id", "get_registry", "get_session"]
