"""FastAPI application entrypoint for Zensai."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zensai import __version__
from zensai.apps.api.routes import entries, prompt, session, suggestion
from zensai.apps.engine.session import SessionRegistry, SessionServices
from zensai.apps.services import (
    ZenoAffirmationService,
    ZenoMoodAnalysisService,
    ZenoPromptService,
    ZenoQuoteService,
    build_router,
)
from zensai.core.errors import (
    EntryValidationError,
    PersistenceError,
    PremiumRequiredError,
    QuotaExceededError,
    ZensaiError,
)
from zensai.libs.logging_utils import configure_logging
from zensai.libs.persistence import SupabaseJournalStore
from zensai.libs.schemas import AppSettings, get_settings
from zensai.libs.storage import build_kv_store

configure_logging(get_settings())

LOGGER = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[ZensaiError], int], ...] = (
    (EntryValidationError, 422),
    (PremiumRequiredError, 403),
    (QuotaExceededError, 429),
    (PersistenceError, 502),
)


def status_for(exc: ZensaiError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def build_registry(settings: AppSettings) -> tuple[SessionRegistry, list]:
    """Wire production collaborators; returns the registry and resources to close."""

    store = SupabaseJournalStore(
        settings.supabase_url,
        settings.supabase_service_key,
        photo_bucket=settings.photo_bucket,
    )
    kv = build_kv_store(settings.redis_url)
    llm_router = build_router(settings)
    model = settings.model_chat
    services = SessionServices(
        mood=ZenoMoodAnalysisService(llm_router, model=model),
        affirmations=ZenoAffirmationService(llm_router, model=model),
        quotes=ZenoQuoteService(llm_router, model=model),
        prompts=ZenoPromptService(llm_router, model=model),
    )
    registry = SessionRegistry(settings=settings, store=store, kv=kv, services=services)
    return registry, [store, kv.backend]


def create_app(*, registry: SessionRegistry | None = None) -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        resources: list = []
        if registry is None:
            app.state.sessions, resources = build_registry(settings)
        LOGGER.info("Zensai API ready", extra={"environment": settings.environment})
        try:
            yield
        finally:
            await app.state.sessions.close_all()
            for resource in resources:
                closer = getattr(resource, "aclose", None) or getattr(resource, "close", None)
                if closer is not None:
                    await closer()

    app = FastAPI(title=f"{settings.app_name} API", version=__version__, lifespan=lifespan)
    if registry is not None:
        app.state.sessions = registry

    @app.exception_handler(ZensaiError)
    async def _zensai_error(request: Request, exc: ZensaiError) -> JSONResponse:
        status_code = status_for(exc)
        LOGGER.info(
            "request rejected",
            extra={"path": request.url.path, "code": exc.code.value, "status": status_code},
        )
        body = exc.to_dict()
        if exc.details:
            body["details"] = exc.details
        return JSONResponse(status_code=status_code, content=body)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(entries.router)
    app.include_router(prompt.router)
    app.include_router(suggestion.router)
    app.include_router(session.router)
    return app


app = create_app()


__all__ = ["app", "build_registry", "create_app", "status_for"]
