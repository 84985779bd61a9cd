from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from interviewiq.core.config import Settings, get_settings
from interviewiq.core.error_handler import register_exception_handlers
from interviewiq.core.logging_config import setup_logging
from interviewiq.core.request_id import RequestIdMiddleware
from interviewiq.db.session import build_engine, build_sessionmaker, init_db
from interviewiq.providers.factory import build_llm_client, build_openai_client, build_speech_provider
from interviewiq.providers.llm import LLMClient
from interviewiq.providers.speech import SpeechProvider
from interviewiq.routers import ai, auth, health, interviews

logger = logging.getLogger("interviewiq.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}...")
    await init_db(app.state.engine)

    yield

    logger.info("Server shutting down...")
    await app.state.speech_provider.aclose()
    if app.state.openai_client is not None:
        await app.state.openai_client.close()
    await app.state.engine.dispose()


def create_app(
    settings: Settings | None = None,
    llm_client: LLMClient | None = None,
    speech_provider: SpeechProvider | None = None,
) -> FastAPI:
    """FastAPI app factory.

    Provider clients are built once here and shared by every request.

    Args:
        settings: settings override (defaults to the environment).
        llm_client: language-model client override.
        speech_provider: speech backend override.

    Returns:
        FastAPI: application with routers, handlers and middleware registered.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    f_app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)

    openai_client = None
    if llm_client is None or speech_provider is None:
        openai_client = build_openai_client(settings)

    f_app.state.settings = settings
    f_app.state.openai_client = openai_client
    f_app.state.engine = build_engine(settings.DATABASE_URL)
    f_app.state.sessionmaker = build_sessionmaker(f_app.state.engine)
    f_app.state.llm_client = llm_client or build_llm_client(settings, openai_client)
    f_app.state.speech_provider = speech_provider or build_speech_provider(settings, openai_client)

    register_exception_handlers(f_app)

    f_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    f_app.add_middleware(RequestIdMiddleware)

    f_app.include_router(health.router, tags=["health"])
    f_app.include_router(auth.router, prefix="/auth", tags=["auth"])
    f_app.include_router(interviews.router, prefix="/interviews", tags=["interviews"])
    f_app.include_router(ai.router, prefix="/ai", tags=["ai"])
    return f_app


app: FastAPI = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("interviewiq.main:app", host="0.0.0.0", port=8000, reload=True)
