"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recordbook.config import get_settings
from recordbook.infrastructure.dependencies import build_record_store
from recordbook.infrastructure.logging.log_config import setup_logging
from recordbook.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — build the record store once and share it."""
    settings = get_settings()
    setup_logging(settings)

    store = build_record_store(settings)
    app.state.record_store = store
    logger.info(
        "Record store ready: journal=%s, backend=%s, records=%d",
        store.profile.key,
        settings.storage_backend,
        len(store),
    )

    yield

    logger.info("Shutting down record store for '%s'", store.profile.key)


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    settings = get_settings()

    application = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(api_router)

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "recordbook.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
